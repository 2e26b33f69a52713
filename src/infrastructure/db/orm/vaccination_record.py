from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from sqlalchemy import Date, DateTime, ForeignKey, Index, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.db.base import Base


class VaccinationRecordORM(Base):
    __tablename__ = "vaccination_records"
    __table_args__ = (Index("ix_vaccination_records_animal_vaccine", "animal_id", "vaccine_id"),)

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    animal_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("animals.id"), nullable=False
    )
    vaccine_id: Mapped[UUID | None] = mapped_column(Uuid(as_uuid=True), nullable=True)
    vaccine_name: Mapped[str | None] = mapped_column(String(120), nullable=True)
    administered_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    next_due_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
