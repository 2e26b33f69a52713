from __future__ import annotations

from fastapi import APIRouter, Depends

from src.application.use_cases.settings import alert_config, session_schedule
from src.interfaces.http.deps import get_uow
from src.interfaces.http.schemas.settings import (
    AlertConfigResponse,
    AlertConfigUpdate,
    SessionScheduleSchema,
)

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("/alerts", response_model=AlertConfigResponse)
async def get_alert_settings(uow=Depends(get_uow)):
    return AlertConfigResponse.model_validate(await alert_config.get(uow))


@router.put("/alerts", response_model=AlertConfigResponse)
async def update_alert_settings(payload: AlertConfigUpdate, uow=Depends(get_uow)):
    changes = payload.model_dump(exclude_unset=True)
    updated = await alert_config.update(uow, alert_config.UpdateAlertConfigInput(changes=changes))
    return AlertConfigResponse.model_validate(updated)


@router.get("/sessions", response_model=SessionScheduleSchema)
async def get_session_settings(uow=Depends(get_uow)):
    return SessionScheduleSchema.model_validate(await session_schedule.get(uow))


@router.put("/sessions", response_model=SessionScheduleSchema)
async def update_session_settings(payload: SessionScheduleSchema, uow=Depends(get_uow)):
    updated = await session_schedule.update(uow, payload.model_dump(exclude_unset=True))
    return SessionScheduleSchema.model_validate(updated)
