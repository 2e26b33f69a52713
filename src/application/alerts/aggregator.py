from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime

from src.application.notifications.factory import build_notification
from src.domain.models.alert import Alert, CandidateAlert, alert_id_for
from src.domain.models.alert_config import AlertConfig
from src.domain.value_objects.alert_priority import AlertPriority
from src.domain.value_objects.rule_type import RuleType, UrgencyBucket

_PRIORITIES: dict[tuple[str, str], AlertPriority] = {
    (RuleType.PREGNANCY_CHECK_DUE.value, UrgencyBucket.DUE.value): AlertPriority.HIGH,
    (RuleType.DELIVERY_IMMINENT.value, UrgencyBucket.URGENT.value): AlertPriority.HIGH,
    (RuleType.DELIVERY_IMMINENT.value, UrgencyBucket.UPCOMING.value): AlertPriority.MEDIUM,
    (RuleType.VACCINATION_DUE.value, UrgencyBucket.OVERDUE.value): AlertPriority.HIGH,
    (RuleType.VACCINATION_DUE.value, UrgencyBucket.UPCOMING.value): AlertPriority.MEDIUM,
    (RuleType.LOW_STOCK.value, UrgencyBucket.LOW.value): AlertPriority.MEDIUM,
}


def priority_for(rule_type: str, bucket: str) -> AlertPriority:
    return _PRIORITIES.get((rule_type, bucket), AlertPriority.LOW)


def _template_args(candidate: CandidateAlert, config: AlertConfig) -> dict:
    if candidate.rule_type == RuleType.PREGNANCY_CHECK_DUE.value:
        return {"max_days": config.pd_check_window_max_days}
    if candidate.rule_type == RuleType.DELIVERY_IMMINENT.value:
        if candidate.urgency_bucket == UrgencyBucket.URGENT.value:
            return {"days": config.delivery_urgent_days}
        return {"days": config.delivery_upcoming_days}
    if candidate.rule_type == RuleType.VACCINATION_DUE.value:
        return {"days": config.vaccination_lead_days}
    return {}


def aggregate(
    candidates: Iterable[CandidateAlert],
    evaluation_date: date,
    now: datetime,
    config: AlertConfig | None = None,
) -> list[Alert]:
    """Merge candidates per (rule, bucket) into alerts with day-stable ids."""
    config = config or AlertConfig()
    merged: dict[tuple[str, str], CandidateAlert] = {}
    for candidate in candidates:
        key = (candidate.rule_type, candidate.urgency_bucket)
        if key in merged:
            merged[key].subjects.extend(candidate.subjects)
        else:
            merged[key] = CandidateAlert(key[0], key[1], list(candidate.subjects))

    alerts = []
    for (rule_type, bucket), candidate in merged.items():
        if not candidate.subjects:
            continue
        built = build_notification(
            rule_type,
            bucket=bucket,
            subjects=candidate.subjects,
            **_template_args(candidate, config),
        )
        payload = dict(built.data)
        payload["count"] = candidate.count
        alerts.append(
            Alert(
                id=alert_id_for(rule_type, bucket, evaluation_date),
                type=rule_type,
                bucket=bucket,
                title=built.title,
                message=built.message,
                priority=priority_for(rule_type, bucket).value,
                evaluation_date=evaluation_date,
                payload=payload,
                created_at=now,
            )
        )
    return order_feed(alerts)


def feed_sort_key(alert: Alert) -> tuple:
    return (-alert.priority_rank, -alert.created_at.timestamp(), str(alert.id))


def order_feed(alerts: Iterable[Alert]) -> list[Alert]:
    """Priority descending, newest first, id as the final tie-break."""
    return sorted(alerts, key=feed_sort_key)
