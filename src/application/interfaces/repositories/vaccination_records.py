from __future__ import annotations

from typing import Protocol
from uuid import UUID

from src.domain.models.vaccination_record import VaccinationRecord


class VaccinationRecordsRepository(Protocol):
    async def list(self, animal_id: UUID | None = None) -> list[VaccinationRecord]: ...
