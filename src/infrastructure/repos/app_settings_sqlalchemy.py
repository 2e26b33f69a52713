from __future__ import annotations

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from src.application.interfaces.repositories.app_settings import AppSettingsRepository
from src.infrastructure.db.orm.app_setting import AppSettingORM


class AppSettingsSQLAlchemyRepository(AppSettingsRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, key: str) -> dict[str, Any] | None:
        orm = await self.session.get(AppSettingORM, key)
        return dict(orm.value) if orm else None

    async def set(self, key: str, value: dict[str, Any]) -> dict[str, Any]:
        orm = await self.session.get(AppSettingORM, key)
        if orm is None:
            orm = AppSettingORM(key=key, value=value)
            self.session.add(orm)
        else:
            orm.value = value
        await self.session.flush()
        return dict(orm.value)
