from __future__ import annotations

from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.interfaces.repositories.alerts import AlertFeedRepository
from src.domain.models.alert import Alert
from src.infrastructure.db.orm.alert import AlertORM
from src.utils.datetime_tz import ensure_aware


class AlertFeedSQLAlchemyRepository(AlertFeedRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: AlertORM) -> Alert:
        return Alert(
            id=orm.id,
            type=orm.type,
            bucket=orm.bucket,
            title=orm.title,
            message=orm.message,
            priority=orm.priority,
            evaluation_date=orm.evaluation_date,
            payload=dict(orm.payload or {}),
            created_at=ensure_aware(orm.created_at),
        )

    def _to_orm(self, alert: Alert) -> AlertORM:
        return AlertORM(
            id=alert.id,
            type=alert.type,
            bucket=alert.bucket,
            title=alert.title,
            message=alert.message,
            priority=alert.priority,
            evaluation_date=alert.evaluation_date,
            payload=alert.payload,
            created_at=alert.created_at,
        )

    async def list(self) -> list[Alert]:
        result = await self.session.execute(select(AlertORM))
        return [self._to_domain(orm) for orm in result.scalars()]

    async def get(self, alert_id: UUID) -> Alert | None:
        orm = await self.session.get(AlertORM, alert_id)
        return self._to_domain(orm) if orm else None

    async def existing_ids(self, alert_ids: list[UUID]) -> set[UUID]:
        if not alert_ids:
            return set()
        result = await self.session.execute(select(AlertORM.id).where(AlertORM.id.in_(alert_ids)))
        return set(result.scalars())

    async def replace(self, alerts: list[Alert]) -> list[Alert]:
        result = await self.session.execute(select(AlertORM))
        current = {orm.id: orm for orm in result.scalars()}
        keep = {a.id for a in alerts}
        stale = [alert_id for alert_id in current if alert_id not in keep]
        if stale:
            await self.session.execute(delete(AlertORM).where(AlertORM.id.in_(stale)))

        published: list[Alert] = []
        for alert in alerts:
            orm = current.get(alert.id)
            if orm is None:
                orm = self._to_orm(alert)
                self.session.add(orm)
            else:
                orm.title = alert.title
                orm.message = alert.message
                orm.priority = alert.priority
                orm.payload = alert.payload
            published.append(orm)
        await self.session.flush()
        return [self._to_domain(orm) for orm in published]
