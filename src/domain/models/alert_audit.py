from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from uuid import UUID, uuid4


class DeliveryStatus(str, Enum):
    SENT = "sent"
    FAILED = "failed"


@dataclass(slots=True, frozen=True)
class AlertAuditEntry:
    id: UUID
    recipient: str
    alert_id: UUID | None
    title: str
    message: str
    type: str
    priority: str
    status: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        *,
        recipient: str,
        alert_id: UUID | None,
        title: str,
        message: str,
        type: str,
        priority: str,
        status: str,
    ) -> AlertAuditEntry:
        return cls(
            id=uuid4(),
            recipient=recipient,
            alert_id=alert_id,
            title=title,
            message=message,
            type=type,
            priority=priority,
            status=status,
            created_at=datetime.now(timezone.utc),
        )
