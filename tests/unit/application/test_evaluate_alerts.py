from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from uuid import uuid4

import pytest

from src.application.interfaces.repositories.recipients import Recipient
from src.application.use_cases.alerts import evaluate_alerts, list_active_alerts, mark_read
from src.domain.models.alert_config import ALERT_CONFIG_KEY
from src.domain.models.breeding_record import BreedingRecord
from src.domain.models.inventory_item import InventoryItem
from src.infrastructure.services.alert_delivery_service import AlertDeliveryService

TODAY = date(2026, 3, 10)
NOW = datetime(2026, 3, 10, 8, 0, tzinfo=timezone.utc)


@pytest.fixture()
def seeded(memory_uow):
    memory_uow.breeding_records.rows = [
        BreedingRecord(id=uuid4(), animal_id=uuid4(), animal_tag="21",
                       event_date=TODAY - timedelta(days=62)),
        BreedingRecord(id=uuid4(), animal_id=uuid4(), animal_tag="8",
                       event_date=TODAY - timedelta(days=281), pregnancy_check_done=True,
                       pregnancy_result="positive"),
    ]
    memory_uow.inventory_items.rows = [
        InventoryItem(id=uuid4(), name="Hay", current_stock=Decimal("4"),
                      minimum_stock_level=Decimal("10")),
    ]
    memory_uow.recipients.recipients = [
        Recipient(user_id="u1", tokens=["t1"]),
        Recipient(user_id="u2", tokens=["t2", "t3"]),
    ]
    return memory_uow


async def run(uow, channel, *, today=TODAY, now=NOW):
    return await evaluate_alerts.execute(
        uow,
        today=today,
        now=now,
        delivery_service=AlertDeliveryService(channel, uow.alert_audit),
    )


async def test_evaluation_publishes_and_delivers_new_alerts(seeded, channel):
    result = await run(seeded, channel)

    assert {a.type for a in result.alerts} == {
        "pregnancy_check_due",
        "delivery_imminent",
        "low_stock",
    }
    assert set(result.new_alert_ids) == {a.id for a in result.alerts}
    assert result.failures == []
    assert len(channel.sent) == 3
    assert result.delivery.sent == 6
    assert len(seeded.alert_audit.entries) == 6
    assert {e.status for e in seeded.alert_audit.entries} == {"sent"}
    assert seeded.commits == 2


async def test_rerun_same_day_is_idempotent(seeded, channel):
    first = await run(seeded, channel)
    second = await run(seeded, channel, now=NOW + timedelta(minutes=5))

    assert [a.id for a in second.alerts] == [a.id for a in first.alerts]
    assert second.new_alert_ids == []
    assert second.delivery is None
    assert len(channel.sent) == 3
    assert all(a.created_at == NOW for a in second.alerts)


async def test_next_day_yields_new_ids(seeded, channel):
    first = await run(seeded, channel)
    second = await run(seeded, channel, today=TODAY + timedelta(days=1))
    assert {a.id for a in first.alerts}.isdisjoint(second.new_alert_ids)
    assert len(second.new_alert_ids) == len(second.alerts)


async def test_resolved_conditions_drop_from_feed(seeded, channel):
    await run(seeded, channel)
    seeded.inventory_items.rows = []
    result = await run(seeded, channel, now=NOW + timedelta(minutes=5))
    assert "low_stock" not in {a.type for a in result.alerts}
    assert "low_stock" not in {a.type for a in await seeded.alerts.list()}


async def test_rule_failure_still_publishes_other_alerts(seeded, channel):
    async def broken(*args, **kwargs):
        raise RuntimeError("inventory offline")

    seeded.inventory_items.list = broken
    result = await run(seeded, channel)

    assert [f.rule_type for f in result.failures] == ["low_stock"]
    assert {a.type for a in result.alerts} == {"pregnancy_check_due", "delivery_imminent"}
    assert seeded.rollbacks == 1


async def test_unreadable_config_falls_back_to_defaults(seeded, channel):
    async def broken(key):
        raise RuntimeError("settings table missing")

    seeded.app_settings.get = broken
    result = await run(seeded, channel)
    assert len(result.alerts) == 3


async def test_stored_config_disables_rules(seeded, channel):
    seeded.app_settings.values[ALERT_CONFIG_KEY] = {
        "low_stock_enabled": False,
        "categories": {"reminders": False},
    }
    result = await run(seeded, channel)
    assert result.alerts == []
    assert channel.sent == []


async def test_delivery_failure_is_audited_and_feed_kept(seeded):
    class ExplodingChannel:
        async def send(self, recipients, title, body, data=None):
            raise ConnectionError("push gateway unreachable")

    result = await run(seeded, ExplodingChannel())

    assert len(result.alerts) == 3
    assert result.delivery.sent == 0
    assert result.delivery.failed == 6
    assert {e.status for e in seeded.alert_audit.entries} == {"failed"}
    assert len(await seeded.alerts.list()) == 3


async def test_active_feed_is_ordered_and_counts_unread(seeded, channel):
    await run(seeded, channel)
    snapshot = await list_active_alerts.execute(seeded, now=NOW)
    priorities = [v.alert.priority for v in snapshot.items]
    assert priorities == sorted(priorities, key=["high", "medium", "low"].index)
    assert snapshot.unread_count == 3
    assert snapshot.high_priority_count == 2


async def test_failing_rule_keeps_its_alert_and_does_not_redeliver(seeded, channel):
    healthy_list = seeded.inventory_items.list
    await run(seeded, channel)
    low_stock = next(a for a in await seeded.alerts.list() if a.type == "low_stock")

    async def broken(*args, **kwargs):
        raise RuntimeError("inventory offline")

    seeded.inventory_items.list = broken
    during = await run(seeded, channel, now=NOW + timedelta(minutes=5))
    assert [f.rule_type for f in during.failures] == ["low_stock"]
    assert low_stock.id in {a.id for a in await seeded.alerts.list()}
    assert during.new_alert_ids == []

    seeded.inventory_items.list = healthy_list
    after = await run(seeded, channel, now=NOW + timedelta(minutes=10))
    assert after.new_alert_ids == []
    low_stock_pushes = [s for s in channel.sent if s["data"]["type"] == "low_stock"]
    assert len(low_stock_pushes) == 1


async def test_failing_rule_does_not_carry_yesterdays_alert(seeded, channel):
    await run(seeded, channel, today=TODAY - timedelta(days=1))

    async def broken(*args, **kwargs):
        raise RuntimeError("inventory offline")

    seeded.inventory_items.list = broken
    result = await run(seeded, channel)
    assert "low_stock" not in {a.type for a in result.alerts}


async def test_evaluation_prunes_states_of_old_alerts(seeded, channel):
    first = await run(
        seeded, channel, today=TODAY - timedelta(days=10), now=NOW - timedelta(days=10)
    )
    old_id = first.alerts[0].id
    await mark_read.execute(seeded, [old_id], lambda: NOW - timedelta(days=10))

    await run(seeded, channel)

    assert await seeded.notification_states.get(old_id) is None
