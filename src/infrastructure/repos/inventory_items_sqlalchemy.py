from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.interfaces.repositories.inventory_items import InventoryItemsRepository
from src.domain.models.inventory_item import InventoryItem
from src.infrastructure.db.orm.inventory_item import InventoryItemORM


class InventoryItemsSQLAlchemyRepository(InventoryItemsRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def list(self) -> list[InventoryItem]:
        stmt = select(InventoryItemORM).order_by(InventoryItemORM.name)
        result = await self.session.execute(stmt)
        return [
            InventoryItem(
                id=orm.id,
                name=orm.name,
                current_stock=orm.current_stock,
                minimum_stock_level=orm.minimum_stock_level,
                unit=orm.unit,
            )
            for orm in result.scalars()
        ]
