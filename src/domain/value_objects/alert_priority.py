from __future__ import annotations

from enum import Enum


class AlertPriority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        """Numeric weight, higher sorts first in the feed."""
        if self is AlertPriority.HIGH:
            return 3
        if self is AlertPriority.MEDIUM:
            return 2
        return 1
