from __future__ import annotations

from datetime import date, datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field

from src.domain.models.alert import AlertView
from src.domain.models.alert_audit import AlertAuditEntry


class AlertSchema(BaseModel):
    id: UUID
    type: str
    bucket: str
    title: str
    message: str
    priority: str
    evaluation_date: date
    data: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime
    read: bool = False
    snoozed: bool = False
    snooze_until: datetime | None = None

    @classmethod
    def from_view(cls, view: AlertView) -> AlertSchema:
        alert = view.alert
        return cls(
            id=alert.id,
            type=alert.type,
            bucket=alert.bucket,
            title=alert.title,
            message=alert.message,
            priority=alert.priority,
            evaluation_date=alert.evaluation_date,
            data=alert.payload,
            created_at=alert.created_at,
            read=view.read,
            snoozed=view.snoozed,
            snooze_until=view.snooze_until,
        )


class AlertFeedResponse(BaseModel):
    alerts: list[AlertSchema]
    total: int
    unread_count: int
    high_priority_count: int


class RuleFailureSchema(BaseModel):
    rule_type: str
    error: str


class EvaluationResponse(BaseModel):
    evaluation_date: date
    alerts_found: int
    new_alerts: int
    notifications_sent: int
    notifications_failed: int
    failures: list[RuleFailureSchema]


class MarkAsReadRequest(BaseModel):
    alert_ids: list[UUID]


class MarkAsReadResponse(BaseModel):
    marked_count: int


class SnoozeRequest(BaseModel):
    duration_hours: float = Field(default=24, gt=0)


class SnoozeResponse(BaseModel):
    alert_id: UUID
    snooze_until: datetime | None


class NotificationHistoryItem(BaseModel):
    id: UUID
    recipient: str
    alert_id: UUID | None = None
    type: str
    priority: str
    title: str
    message: str
    status: str
    created_at: datetime

    @classmethod
    def from_domain(cls, entry: AlertAuditEntry) -> NotificationHistoryItem:
        return cls(
            id=entry.id,
            recipient=entry.recipient,
            alert_id=entry.alert_id,
            type=entry.type,
            priority=entry.priority,
            title=entry.title,
            message=entry.message,
            status=entry.status,
            created_at=entry.created_at,
        )


class NotificationHistoryResponse(BaseModel):
    items: list[NotificationHistoryItem]
    total: int
