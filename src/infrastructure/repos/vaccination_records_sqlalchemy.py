from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.interfaces.repositories.vaccination_records import (
    VaccinationRecordsRepository,
)
from src.domain.models.vaccination_record import VaccinationRecord
from src.infrastructure.db.orm.animal import AnimalORM
from src.infrastructure.db.orm.vaccination_record import VaccinationRecordORM


class VaccinationRecordsSQLAlchemyRepository(VaccinationRecordsRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def list(self, animal_id: UUID | None = None) -> list[VaccinationRecord]:
        stmt = select(VaccinationRecordORM, AnimalORM.tag).outerjoin(
            AnimalORM, AnimalORM.id == VaccinationRecordORM.animal_id
        )
        if animal_id:
            stmt = stmt.where(VaccinationRecordORM.animal_id == animal_id)
        result = await self.session.execute(stmt.order_by(VaccinationRecordORM.administered_date))
        return [
            VaccinationRecord(
                id=orm.id,
                animal_id=orm.animal_id,
                vaccine_id=orm.vaccine_id,
                administered_date=orm.administered_date,
                next_due_date=orm.next_due_date,
                animal_tag=tag,
                vaccine_name=orm.vaccine_name,
            )
            for orm, tag in result.all()
        ]
