from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.interfaces.repositories.recipients import Recipient, RecipientsRepository
from src.infrastructure.db.orm.device_token import DeviceTokenORM


class DeviceTokensSQLAlchemyRepository(RecipientsRepository):
    """Recipients are the users holding at least one enabled device token."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def list_recipients(self) -> list[Recipient]:
        stmt = (
            select(DeviceTokenORM.user_id, DeviceTokenORM.token)
            .where(DeviceTokenORM.disabled.is_(False))
            .order_by(DeviceTokenORM.user_id, DeviceTokenORM.created_at)
        )
        result = await self.session.execute(stmt)
        by_user: dict[str, Recipient] = {}
        for user_id, token in result.all():
            key = str(user_id)
            by_user.setdefault(key, Recipient(user_id=key)).tokens.append(token)
        return list(by_user.values())
