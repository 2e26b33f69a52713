from __future__ import annotations

from enum import IntEnum


class SortGroup(IntEnum):
    """Lifecycle buckets for worklists; lower value means higher priority."""

    MOVE_TO_MILKING_GROUP = 1
    ABOUT_TO_DELIVER = 2
    PREGNANCY_CHECK_DUE = 3
    PREGNANCY_CHECK_OVERDUE = 4
    FLAGGED = 5
    DEFAULT = 6

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    SortGroup.MOVE_TO_MILKING_GROUP: "Move to milking group",
    SortGroup.ABOUT_TO_DELIVER: "About to deliver",
    SortGroup.PREGNANCY_CHECK_DUE: "PD due",
    SortGroup.PREGNANCY_CHECK_OVERDUE: "PD overdue",
    SortGroup.FLAGGED: "Flagged for group move",
    SortGroup.DEFAULT: "Other",
}
