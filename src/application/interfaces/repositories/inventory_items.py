from __future__ import annotations

from typing import Protocol

from src.domain.models.inventory_item import InventoryItem


class InventoryItemsRepository(Protocol):
    async def list(self) -> list[InventoryItem]: ...
