from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from uuid import UUID


@dataclass(slots=True)
class InventoryItem:
    id: UUID
    name: str
    current_stock: Decimal | None
    minimum_stock_level: Decimal | None
    unit: str = "kg"
