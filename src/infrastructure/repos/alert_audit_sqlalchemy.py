from __future__ import annotations

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.interfaces.repositories.alert_audit import AlertAuditRepository
from src.domain.models.alert_audit import AlertAuditEntry
from src.infrastructure.db.orm.alert_audit import AlertAuditORM
from src.utils.datetime_tz import ensure_aware


class AlertAuditSQLAlchemyRepository(AlertAuditRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def add_many(self, entries: list[AlertAuditEntry]) -> int:
        self.session.add_all(
            [
                AlertAuditORM(
                    id=e.id,
                    recipient=e.recipient,
                    alert_id=e.alert_id,
                    title=e.title,
                    message=e.message,
                    type=e.type,
                    priority=e.priority,
                    status=e.status,
                    created_at=e.created_at,
                )
                for e in entries
            ]
        )
        await self.session.flush()
        return len(entries)

    async def list_since(self, since: datetime, limit: int = 200) -> list[AlertAuditEntry]:
        stmt = (
            select(AlertAuditORM)
            .where(AlertAuditORM.created_at >= since)
            .order_by(AlertAuditORM.created_at.desc(), AlertAuditORM.id)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [
            AlertAuditEntry(
                id=orm.id,
                recipient=orm.recipient,
                alert_id=orm.alert_id,
                title=orm.title,
                message=orm.message,
                type=orm.type,
                priority=orm.priority,
                status=orm.status,
                created_at=ensure_aware(orm.created_at),
            )
            for orm in result.scalars()
        ]
