from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.interfaces.repositories.notification_states import (
    NotificationStateRepository,
)
from src.domain.models.notification_state import NotificationState
from src.infrastructure.db.orm.notification_state import NotificationStateORM
from src.utils.datetime_tz import ensure_aware


class NotificationStatesSQLAlchemyRepository(NotificationStateRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: NotificationStateORM) -> NotificationState:
        # SQLite drops tzinfo; stored values are always UTC.
        return NotificationState(
            alert_id=orm.alert_id,
            read=bool(orm.read),
            read_at=ensure_aware(orm.read_at) if orm.read_at else None,
            snooze_until=ensure_aware(orm.snooze_until) if orm.snooze_until else None,
            updated_at=ensure_aware(orm.updated_at),
        )

    async def get(self, alert_id: UUID) -> NotificationState | None:
        orm = await self.session.get(NotificationStateORM, alert_id)
        return self._to_domain(orm) if orm else None

    async def get_many(self, alert_ids: list[UUID]) -> dict[UUID, NotificationState]:
        if not alert_ids:
            return {}
        result = await self.session.execute(
            select(NotificationStateORM).where(NotificationStateORM.alert_id.in_(alert_ids))
        )
        return {orm.alert_id: self._to_domain(orm) for orm in result.scalars()}

    async def save(self, state: NotificationState) -> NotificationState:
        orm = await self.session.get(NotificationStateORM, state.alert_id)
        if orm is None:
            orm = NotificationStateORM(alert_id=state.alert_id)
            self.session.add(orm)
        orm.read = state.read
        orm.read_at = state.read_at
        orm.snooze_until = state.snooze_until
        orm.updated_at = state.updated_at
        await self.session.flush()
        return self._to_domain(orm)

    async def prune(self, before: datetime, keep: Iterable[UUID] = ()) -> int:
        stmt = delete(NotificationStateORM).where(NotificationStateORM.updated_at < before)
        keep = list(keep)
        if keep:
            stmt = stmt.where(NotificationStateORM.alert_id.not_in(keep))
        result = await self.session.execute(stmt)
        return result.rowcount or 0
