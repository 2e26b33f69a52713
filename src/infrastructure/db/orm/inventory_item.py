from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from sqlalchemy import DECIMAL, DateTime, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.db.base import Base


class InventoryItemORM(Base):
    __tablename__ = "feed_items"

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    current_stock: Mapped[Decimal | None] = mapped_column(DECIMAL(12, 2), nullable=True)
    minimum_stock_level: Mapped[Decimal | None] = mapped_column(DECIMAL(12, 2), nullable=True)
    unit: Mapped[str] = mapped_column(String(16), nullable=False, default="kg")
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
