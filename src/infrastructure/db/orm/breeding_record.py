from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    Uuid,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.db.base import Base


class BreedingRecordORM(Base):
    __tablename__ = "breeding_records"
    __table_args__ = (
        Index("ix_breeding_records_animal_date", "animal_id", "event_date"),
        Index(
            "ix_breeding_records_pending",
            "pregnancy_check_done",
            "event_date",
            postgresql_where="pregnancy_check_done = false AND actual_delivery_date IS NULL",
        ),
    )

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    animal_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("animals.id"), nullable=False
    )
    event_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    service_number: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    pregnancy_check_done: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    pregnancy_result: Mapped[str | None] = mapped_column(String(16), nullable=True)
    pregnancy_check_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    expected_delivery_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    actual_delivery_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
