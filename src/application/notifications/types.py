from __future__ import annotations

from src.domain.value_objects.rule_type import RuleType


class NotificationType:
    """Canonical notification type names used across backend/frontend."""

    PREGNANCY_CHECK_DUE = RuleType.PREGNANCY_CHECK_DUE.value
    DELIVERY_IMMINENT = RuleType.DELIVERY_IMMINENT.value
    VACCINATION_DUE = RuleType.VACCINATION_DUE.value
    LOW_STOCK = RuleType.LOW_STOCK.value
    MILKING_START = "milking_start"
    MILKING_END = "milking_end"
    COLLECTION_START = "collection_start"
    COLLECTION_END = "collection_end"

