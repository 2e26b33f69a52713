from __future__ import annotations

from typing import Any

from src.application.errors import ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.alert_config import SESSION_SCHEDULE_KEY, SessionSchedule
from src.utils.datetime_tz import parse_hhmm


async def get(uow: UnitOfWork) -> SessionSchedule:
    return SessionSchedule.from_mapping(await uow.app_settings.get(SESSION_SCHEDULE_KEY))


async def update(uow: UnitOfWork, changes: dict[str, Any]) -> SessionSchedule:
    current = (await get(uow)).to_dict()
    for key, value in changes.items():
        if key not in current:
            continue
        if value in (None, ""):
            current[key] = None
            continue
        parsed = parse_hhmm(value)
        if parsed is None:
            raise ValidationError(f"{key} must be a time in HH:MM format")
        current[key] = parsed.strftime("%H:%M")
    schedule = SessionSchedule.from_mapping(current)
    await uow.app_settings.set(SESSION_SCHEDULE_KEY, schedule.to_dict())
    await uow.commit()
    return schedule
