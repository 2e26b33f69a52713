from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel

from src.application.reproduction.classifier import WorklistEntry
from src.domain.models.animal_flags import AnimalFlags


class WorklistItem(BaseModel):
    animal_id: UUID
    animal_tag: str | None
    group: int
    group_label: str
    breeding_record_id: UUID | None = None
    event_date: date | None = None
    service_number: int | None = None
    pregnancy_check_done: bool | None = None
    pregnancy_result: str | None = None
    expected_delivery_date: date | None = None
    actual_delivery_date: date | None = None
    days_since_event: int | None = None
    days_to_delivery: int | None = None
    needs_group_move: bool = False
    moved_to_group: bool = False

    @classmethod
    def from_entry(cls, entry: WorklistEntry, gestation_days: int) -> WorklistItem:
        record = entry.record or entry.latest_record
        return cls(
            animal_id=entry.animal_id,
            animal_tag=entry.animal_tag,
            group=int(entry.group),
            group_label=entry.group.label,
            breeding_record_id=record.id if record else None,
            event_date=record.event_date if record else None,
            service_number=record.service_number if record else None,
            pregnancy_check_done=record.pregnancy_check_done if record else None,
            pregnancy_result=record.pregnancy_result if record else None,
            expected_delivery_date=record.expected_delivery(gestation_days) if record else None,
            actual_delivery_date=record.actual_delivery_date if record else None,
            days_since_event=entry.days_since_event,
            days_to_delivery=entry.days_to_delivery,
            needs_group_move=entry.flags.needs_group_move,
            moved_to_group=entry.flags.moved_to_group,
        )


class WorklistResponse(BaseModel):
    items: list[WorklistItem]
    total: int


class GroupMoveRequest(BaseModel):
    needs_group_move: bool | None = None
    moved_to_group: bool | None = None


class AnimalFlagsResponse(BaseModel):
    animal_id: UUID
    animal_tag: str | None = None
    needs_group_move: bool
    needs_group_move_at: datetime | None = None
    moved_to_group: bool
    moved_to_group_at: datetime | None = None

    @classmethod
    def from_domain(cls, flags: AnimalFlags) -> AnimalFlagsResponse:
        return cls(
            animal_id=flags.animal_id,
            animal_tag=flags.animal_tag,
            needs_group_move=flags.needs_group_move,
            needs_group_move_at=flags.needs_group_move_at,
            moved_to_group=flags.moved_to_group,
            moved_to_group_at=flags.moved_to_group_at,
        )
