from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from src.domain.value_objects.rule_type import UrgencyBucket

from .types import NotificationType


@dataclass
class BuiltNotification:
    type: str
    title: str
    message: str
    data: dict[str, Any]


def _plural(count: int, singular: str, plural: str | None = None) -> str:
    return singular if count == 1 else (plural or singular + "s")


def _short_list(labels: list[str], *, max_items: int = 5) -> str:
    """Join labels for a push body, eliding the tail past `max_items`."""
    if len(labels) <= max_items:
        return ", ".join(labels)
    return ", ".join(labels[:max_items]) + f" +{len(labels) - max_items} more"


def _cow_labels(subjects: list[dict[str, Any]]) -> list[str]:
    return [str(s.get("animal_tag") or "Unknown") for s in subjects]


def build_notification(ntype: str, **kwargs: Any) -> BuiltNotification:
    """
    Central place to build notification title/message/data from templates.
    Keep strings easy to find and translate.
    """
    bucket: str | None = kwargs.get("bucket")
    subjects: list[dict[str, Any]] = list(kwargs.get("subjects") or [])
    count = len(subjects)

    if ntype == NotificationType.PREGNANCY_CHECK_DUE:
        max_days = kwargs.get("max_days", 60)
        title = f"{count} PD {_plural(count, 'Check')} Due"
        cows = _short_list(_cow_labels(subjects))
        message = f"PD check needed ({max_days}+ days since AI) for: {cows}"
        return BuiltNotification(ntype, title, message, {"bucket": bucket, "cows": subjects})

    if ntype == NotificationType.DELIVERY_IMMINENT:
        days = kwargs.get("days", 3)
        if bucket == UrgencyBucket.URGENT.value:
            title = f"{count} Urgent {_plural(count, 'Delivery', 'Deliveries')}"
        else:
            title = f"{count} {_plural(count, 'Delivery', 'Deliveries')} Expected"
        message = (
            f"{count} {_plural(count, 'cow')} expected to deliver within {days} days: "
            f"{_short_list(_cow_labels(subjects))}"
        )
        return BuiltNotification(ntype, title, message, {"bucket": bucket, "cows": subjects})

    if ntype == NotificationType.VACCINATION_DUE:
        if bucket == UrgencyBucket.OVERDUE.value:
            title = f"{count} {_plural(count, 'Vaccination')} Overdue"
            message = f"{count} {_plural(count, 'vaccination')} overdue"
        else:
            days = kwargs.get("days", 7)
            title = f"{count} {_plural(count, 'Vaccination')} Due"
            message = f"{count} {_plural(count, 'vaccination')} due within {days} days"
        labels = [
            f"{s.get('animal_tag') or 'Unknown'} ({s.get('vaccine_name') or 'Unknown'})"
            for s in subjects
        ]
        message += f": {_short_list(labels)}"
        return BuiltNotification(ntype, title, message, {"bucket": bucket, "cows": subjects})

    if ntype == NotificationType.LOW_STOCK:
        title = f"{count} {_plural(count, 'Item')} Low in Stock"
        labels = [
            f"{s.get('name')} ({s.get('current_stock')}/{s.get('minimum_stock_level')} "
            f"{s.get('unit')})"
            for s in subjects
        ]
        message = f"Low stock: {_short_list(labels)}"
        return BuiltNotification(ntype, title, message, {"bucket": bucket, "items": subjects})

    if ntype in (NotificationType.MILKING_START, NotificationType.MILKING_END):
        session: str = kwargs.get("session", "morning")
        label = session.capitalize()
        if ntype == NotificationType.MILKING_START:
            title = f"{label} Milking Session"
            message = f"Time to start the {session} milking session!"
        else:
            title = f"{label} Milking Complete"
            message = f"{label} milking session should be completed."
        return BuiltNotification(ntype, title, message, {"type": ntype, "session": session})

    if ntype == NotificationType.COLLECTION_START:
        return BuiltNotification(
            ntype, "Milk Collection Started", "Milk collection period has begun.", {"type": ntype}
        )

    if ntype == NotificationType.COLLECTION_END:
        return BuiltNotification(
            ntype,
            "Milk Collection Ending",
            "Milk collection period is ending soon.",
            {"type": ntype},
        )

    # Fallback to pass-through
    return BuiltNotification(
        ntype,
        title=str(kwargs.get("title", "Notification")),
        message=str(kwargs.get("message", "")),
        data=dict(kwargs.get("data", {})),
    )
