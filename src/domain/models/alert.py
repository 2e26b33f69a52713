from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any
from uuid import UUID, uuid5

from src.domain.value_objects.alert_priority import AlertPriority

# Fixed namespace so alert ids are stable across processes and restarts.
ALERT_ID_NAMESPACE = UUID("6f1d3b9e-2a44-5c1e-9d6a-7e0b8c4f2a11")


def alert_id_for(rule_type: str, bucket: str, evaluation_date: date) -> UUID:
    return uuid5(ALERT_ID_NAMESPACE, f"{rule_type}:{bucket}:{evaluation_date.isoformat()}")


@dataclass(slots=True)
class CandidateAlert:
    """Rule-local signal, before aggregation into a user facing Alert."""

    rule_type: str
    urgency_bucket: str
    subjects: list[dict[str, Any]] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.subjects)


@dataclass(slots=True)
class Alert:
    id: UUID
    type: str
    bucket: str
    title: str
    message: str
    priority: str
    evaluation_date: date
    payload: dict[str, Any] = field(default_factory=dict)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def priority_rank(self) -> int:
        return AlertPriority(self.priority).rank


@dataclass(slots=True)
class AlertView:
    """Alert annotated with per-id notification state for the active feed."""

    alert: Alert
    read: bool = False
    snoozed: bool = False
    snooze_until: datetime | None = None
