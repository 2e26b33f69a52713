from __future__ import annotations

import sys
from collections.abc import Iterable
from datetime import datetime
from typing import Any

from src.application.reproduction.classifier import WorklistEntry
from src.domain.value_objects.sort_group import SortGroup

# Non-numeric tags sort after every numeric one.
NON_NUMERIC_TAG = sys.maxsize
MOVE_TO_MILKING_TARGET_DAYS = 60
_MISSING = sys.maxsize


def numeric_tag(tag: str | None) -> int:
    if tag is None:
        return NON_NUMERIC_TAG
    try:
        return int(str(tag).strip())
    except ValueError:
        return NON_NUMERIC_TAG


def _ascending(value: int | None) -> int:
    return _MISSING if value is None else value


def _descending(value: int | None) -> int:
    return _MISSING if value is None else -value


def _timestamp(value: datetime | None) -> float:
    return float(_MISSING) if value is None else value.timestamp()


def secondary_key(entry: WorklistEntry) -> tuple[Any, ...]:
    group = entry.group
    if group is SortGroup.MOVE_TO_MILKING_GROUP:
        days = entry.days_to_delivery
        distance = None if days is None else abs(days - MOVE_TO_MILKING_TARGET_DAYS)
        return (_ascending(distance), _ascending(days))
    if group is SortGroup.ABOUT_TO_DELIVER:
        return (_ascending(entry.days_to_delivery),)
    if group in (SortGroup.PREGNANCY_CHECK_DUE, SortGroup.PREGNANCY_CHECK_OVERDUE):
        return (_descending(entry.days_since_event),)
    if group is SortGroup.FLAGGED:
        return (_timestamp(entry.flags.needs_group_move_at),)
    event_date = entry.event_date
    return (_descending(event_date.toordinal() if event_date else None),)


def sort_key(entry: WorklistEntry) -> tuple[Any, ...]:
    """Total order: group, group specific key, then tag and animal id tie-breaks."""
    return (
        int(entry.group),
        secondary_key(entry),
        numeric_tag(entry.animal_tag),
        entry.animal_tag or "",
        str(entry.animal_id),
    )


def sort_worklist(entries: Iterable[WorklistEntry]) -> list[WorklistEntry]:
    return sorted(entries, key=sort_key)
