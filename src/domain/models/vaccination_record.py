from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from uuid import UUID


@dataclass(slots=True)
class VaccinationRecord:
    id: UUID
    animal_id: UUID
    vaccine_id: UUID | None
    administered_date: date | None
    next_due_date: date | None
    animal_tag: str | None = None
    vaccine_name: str | None = None
