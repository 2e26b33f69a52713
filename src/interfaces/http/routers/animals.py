from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends

from src.application.use_cases.reproduction import update_group_move_flag
from src.infrastructure.scheduler.alert_tasks import Clock
from src.interfaces.http.deps import get_clock, get_uow
from src.interfaces.http.schemas.worklist import AnimalFlagsResponse, GroupMoveRequest

router = APIRouter(prefix="/animals", tags=["animals"])


@router.patch("/{animal_id}/group-move", response_model=AnimalFlagsResponse)
async def update_group_move(
    animal_id: UUID,
    payload: GroupMoveRequest,
    uow=Depends(get_uow),
    clock: Clock = Depends(get_clock),
):
    flags = await update_group_move_flag.execute(
        uow,
        animal_id,
        update_group_move_flag.GroupMoveInput(
            needs_group_move=payload.needs_group_move,
            moved_to_group=payload.moved_to_group,
        ),
        now=clock.now(),
    )
    return AnimalFlagsResponse.from_domain(flags)
