from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from uuid import UUID

from src.application.interfaces.repositories.alert_audit import AlertAuditRepository
from src.application.interfaces.repositories.recipients import Recipient
from src.application.notifications.factory import BuiltNotification
from src.domain.models.alert import Alert
from src.domain.models.alert_audit import AlertAuditEntry, DeliveryStatus
from src.domain.value_objects.alert_priority import AlertPriority
from src.infrastructure.push.models import DeliveryChannel

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DeliveryReport:
    notifications: int = 0
    sent: int = 0
    failed: int = 0


class AlertDeliveryService:
    """Hands finished alerts to the delivery channel and writes one audit row per recipient.

    Delivery problems are logged and counted, never raised to the caller.
    """

    def __init__(self, channel: DeliveryChannel, audit_repo: AlertAuditRepository) -> None:
        self.channel = channel
        self.audit_repo = audit_repo

    async def deliver_alerts(
        self, alerts: Sequence[Alert], recipients: Sequence[Recipient]
    ) -> DeliveryReport:
        report = DeliveryReport()
        for alert in alerts:
            data = {
                "alert_id": str(alert.id),
                "type": alert.type,
                "bucket": alert.bucket,
                "date": alert.evaluation_date.isoformat(),
            }
            await self._send(
                report,
                recipients,
                alert_id=alert.id,
                type=alert.type,
                priority=alert.priority,
                title=alert.title,
                message=alert.message,
                data=data,
            )
        if report.notifications:
            logger.info(
                "Alert delivery: alerts=%d sent=%d failed=%d",
                report.notifications,
                report.sent,
                report.failed,
            )
        return report

    async def deliver_notification(
        self,
        built: BuiltNotification,
        recipients: Sequence[Recipient],
        priority: str = AlertPriority.LOW.value,
    ) -> DeliveryReport:
        """One-shot notification outside the alert feed (session triggers)."""
        report = DeliveryReport()
        await self._send(
            report,
            recipients,
            alert_id=None,
            type=built.type,
            priority=priority,
            title=built.title,
            message=built.message,
            data=built.data,
        )
        return report

    async def _send(
        self,
        report: DeliveryReport,
        recipients: Sequence[Recipient],
        *,
        alert_id: UUID | None,
        type: str,
        priority: str,
        title: str,
        message: str,
        data: dict,
    ) -> None:
        report.notifications += 1
        if not recipients:
            logger.debug("No recipients for notification type=%s", type)
            return
        try:
            result = await self.channel.send(recipients, title, message, data)
            sent, failed = result.sent, result.failed
        except Exception as exc:
            logger.error("Delivery channel error for type=%s: %s", type, exc, exc_info=True)
            sent, failed = [], [r.user_id for r in recipients]
        report.sent += len(sent)
        report.failed += len(failed)

        entries = [
            AlertAuditEntry.create(
                recipient=user_id,
                alert_id=alert_id,
                title=title,
                message=message,
                type=type,
                priority=priority,
                status=status.value,
            )
            for status, users in ((DeliveryStatus.SENT, sent), (DeliveryStatus.FAILED, failed))
            for user_id in users
        ]
        if not entries:
            return
        try:
            await self.audit_repo.add_many(entries)
        except Exception as exc:
            logger.error("Failed writing %d audit entries: %s", len(entries), exc, exc_info=True)
