from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import UUID

from src.application.errors import NotFound
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.animal_flags import AnimalFlags


@dataclass(slots=True)
class GroupMoveInput:
    needs_group_move: bool | None = None
    moved_to_group: bool | None = None


async def execute(
    uow: UnitOfWork,
    animal_id: UUID,
    payload: GroupMoveInput,
    now: datetime | None = None,
) -> AnimalFlags:
    flags = await uow.animal_flags.get(animal_id)
    if flags is None:
        raise NotFound(f"Animal {animal_id} not found")
    at = now or datetime.now(timezone.utc)

    if payload.moved_to_group:
        flags.confirm_move(at)
    elif payload.needs_group_move:
        flags.flag_for_move(at)
    elif payload.needs_group_move is False or payload.moved_to_group is False:
        flags.clear()

    updated = await uow.animal_flags.update(flags)
    await uow.commit()
    return updated
