from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from uuid import UUID

GESTATION_DAYS = 283


class PregnancyResult(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"


@dataclass(slots=True)
class BreedingRecord:
    """One insemination event for one animal, as read from the record store."""

    id: UUID
    animal_id: UUID
    event_date: date | None
    service_number: int = 1
    animal_tag: str | None = None
    pregnancy_check_done: bool = False
    pregnancy_result: str | None = None
    pregnancy_check_date: date | None = None
    expected_delivery_date: date | None = None
    actual_delivery_date: date | None = None
    notes: str | None = None

    @property
    def is_terminal(self) -> bool:
        return self.actual_delivery_date is not None

    @property
    def is_confirmed_pregnant(self) -> bool:
        return (
            self.pregnancy_check_done
            and self.pregnancy_result == PregnancyResult.POSITIVE.value
        )

    def expected_delivery(self, gestation_days: int = GESTATION_DAYS) -> date | None:
        """Stored expected delivery date, or event date + gestation for confirmed records."""
        if self.expected_delivery_date is not None:
            return self.expected_delivery_date
        if self.is_confirmed_pregnant and self.event_date is not None:
            return self.event_date + timedelta(days=gestation_days)
        return None
