from __future__ import annotations

from enum import Enum


class RuleType(str, Enum):
    PREGNANCY_CHECK_DUE = "pregnancy_check_due"
    DELIVERY_IMMINENT = "delivery_imminent"
    VACCINATION_DUE = "vaccination_due"
    LOW_STOCK = "low_stock"


class UrgencyBucket(str, Enum):
    DUE = "due"
    OVERDUE = "overdue"
    URGENT = "urgent"
    UPCOMING = "upcoming"
    LOW = "low"


class SessionTriggerMode(str, Enum):
    EXACT = "exact"
    CATCH_UP = "catch_up"
