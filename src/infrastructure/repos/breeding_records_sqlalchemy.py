from __future__ import annotations

from datetime import date
from uuid import UUID

from sqlalchemy import Select, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.interfaces.repositories.breeding_records import BreedingRecordsRepository
from src.domain.models.breeding_record import BreedingRecord, PregnancyResult
from src.infrastructure.db.orm.animal import AnimalORM
from src.infrastructure.db.orm.breeding_record import BreedingRecordORM


class BreedingRecordsSQLAlchemyRepository(BreedingRecordsRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: BreedingRecordORM, tag: str | None) -> BreedingRecord:
        return BreedingRecord(
            id=orm.id,
            animal_id=orm.animal_id,
            event_date=orm.event_date,
            service_number=orm.service_number or 1,
            animal_tag=tag,
            pregnancy_check_done=bool(orm.pregnancy_check_done),
            pregnancy_result=orm.pregnancy_result,
            pregnancy_check_date=orm.pregnancy_check_date,
            expected_delivery_date=orm.expected_delivery_date,
            actual_delivery_date=orm.actual_delivery_date,
            notes=orm.notes,
        )

    def _base(self) -> Select:
        return select(BreedingRecordORM, AnimalORM.tag).outerjoin(
            AnimalORM, AnimalORM.id == BreedingRecordORM.animal_id
        )

    async def _fetch(self, stmt: Select) -> list[BreedingRecord]:
        result = await self.session.execute(stmt)
        return [self._to_domain(orm, tag) for orm, tag in result.all()]

    async def list(
        self,
        animal_id: UUID | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> list[BreedingRecord]:
        stmt = self._base()
        if animal_id:
            stmt = stmt.where(BreedingRecordORM.animal_id == animal_id)
        if date_from:
            stmt = stmt.where(BreedingRecordORM.event_date >= date_from)
        if date_to:
            stmt = stmt.where(BreedingRecordORM.event_date <= date_to)
        stmt = stmt.order_by(
            BreedingRecordORM.animal_id,
            BreedingRecordORM.event_date,
            BreedingRecordORM.service_number,
        )
        return await self._fetch(stmt)

    async def list_pending_checks(self, event_on_or_before: date) -> list[BreedingRecord]:
        stmt = self._base().where(
            BreedingRecordORM.pregnancy_check_done.is_(False),
            BreedingRecordORM.pregnancy_result.is_(None),
            BreedingRecordORM.actual_delivery_date.is_(None),
            BreedingRecordORM.event_date <= event_on_or_before,
        )
        return await self._fetch(stmt.order_by(BreedingRecordORM.event_date))

    async def list_expected_deliveries(self, start: date, end: date) -> list[BreedingRecord]:
        # Records without a stored date are returned too; the rule derives it from gestation.
        stmt = self._base().where(
            BreedingRecordORM.pregnancy_check_done.is_(True),
            BreedingRecordORM.pregnancy_result == PregnancyResult.POSITIVE.value,
            BreedingRecordORM.actual_delivery_date.is_(None),
            or_(
                BreedingRecordORM.expected_delivery_date.is_(None),
                BreedingRecordORM.expected_delivery_date.between(start, end),
            ),
        )
        return await self._fetch(stmt.order_by(BreedingRecordORM.expected_delivery_date))
