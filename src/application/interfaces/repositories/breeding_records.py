from __future__ import annotations

from datetime import date
from typing import Protocol
from uuid import UUID

from src.domain.models.breeding_record import BreedingRecord


class BreedingRecordsRepository(Protocol):
    async def list(
        self,
        animal_id: UUID | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> list[BreedingRecord]: ...

    async def list_pending_checks(self, event_on_or_before: date) -> list[BreedingRecord]: ...

    async def list_expected_deliveries(self, start: date, end: date) -> list[BreedingRecord]: ...
