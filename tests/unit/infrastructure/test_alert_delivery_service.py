from __future__ import annotations

from datetime import date, datetime, timezone
from uuid import uuid4

from src.application.interfaces.repositories.recipients import Recipient
from src.application.notifications.factory import build_notification
from src.domain.models.alert import Alert
from src.infrastructure.services.alert_delivery_service import AlertDeliveryService


def make_alert() -> Alert:
    return Alert(
        id=uuid4(),
        type="delivery_imminent",
        bucket="urgent",
        title="1 Urgent Delivery",
        message="1 cow expected to deliver within 3 days: 8",
        priority="high",
        evaluation_date=date(2026, 3, 10),
        created_at=datetime(2026, 3, 10, tzinfo=timezone.utc),
    )


async def test_one_audit_entry_per_recipient(memory_uow, channel):
    channel.fail_for = {"u2"}
    service = AlertDeliveryService(channel, memory_uow.alert_audit)
    alert = make_alert()

    report = await service.deliver_alerts(
        [alert], [Recipient("u1", ["t1"]), Recipient("u2", ["t2"])]
    )

    assert (report.notifications, report.sent, report.failed) == (1, 1, 1)
    statuses = {e.recipient: e.status for e in memory_uow.alert_audit.entries}
    assert statuses == {"u1": "sent", "u2": "failed"}
    entry = memory_uow.alert_audit.entries[0]
    assert entry.alert_id == alert.id
    assert entry.priority == "high"
    assert channel.sent[0]["data"]["alert_id"] == str(alert.id)


async def test_no_recipients_sends_nothing(memory_uow, channel):
    service = AlertDeliveryService(channel, memory_uow.alert_audit)
    report = await service.deliver_alerts([make_alert()], [])
    assert report.notifications == 1
    assert report.sent == 0
    assert channel.sent == []
    assert memory_uow.alert_audit.entries == []


async def test_audit_write_failure_is_not_raised(memory_uow, channel, caplog):
    async def broken(entries):
        raise RuntimeError("audit table locked")

    memory_uow.alert_audit.add_many = broken
    service = AlertDeliveryService(channel, memory_uow.alert_audit)
    report = await service.deliver_alerts([make_alert()], [Recipient("u1", ["t1"])])
    assert report.sent == 1
    assert "Failed writing 1 audit entries" in caplog.text


async def test_session_notification_is_audited_without_alert_id(memory_uow, channel):
    service = AlertDeliveryService(channel, memory_uow.alert_audit)
    built = build_notification("milking_start", session="evening")
    await service.deliver_notification(built, [Recipient("u1", ["t1"])])

    [entry] = memory_uow.alert_audit.entries
    assert entry.alert_id is None
    assert entry.title == "Evening Milking Session"
    assert entry.priority == "low"
