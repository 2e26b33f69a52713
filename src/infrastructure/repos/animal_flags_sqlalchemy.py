from __future__ import annotations

from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.interfaces.repositories.animal_flags import AnimalFlagsRepository
from src.domain.models.animal_flags import AnimalFlags
from src.infrastructure.db.orm.animal import AnimalORM
from src.utils.datetime_tz import ensure_aware


def _aware(value):
    return ensure_aware(value) if value is not None else None


class AnimalFlagsSQLAlchemyRepository(AnimalFlagsRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: AnimalORM) -> AnimalFlags:
        return AnimalFlags(
            animal_id=orm.id,
            animal_tag=orm.tag,
            needs_group_move=bool(orm.needs_group_move),
            needs_group_move_at=_aware(orm.needs_group_move_at),
            moved_to_group=bool(orm.moved_to_group),
            moved_to_group_at=_aware(orm.moved_to_group_at),
        )

    async def list(self) -> list[AnimalFlags]:
        """Animals carrying any group-move state."""
        stmt = select(AnimalORM).where(
            or_(AnimalORM.needs_group_move.is_(True), AnimalORM.moved_to_group.is_(True))
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars()]

    async def get(self, animal_id: UUID) -> AnimalFlags | None:
        orm = await self.session.get(AnimalORM, animal_id)
        return self._to_domain(orm) if orm else None

    async def update(self, flags: AnimalFlags) -> AnimalFlags:
        orm = await self.session.get(AnimalORM, flags.animal_id)
        if orm is None:
            raise ValueError("Animal not found")
        orm.needs_group_move = flags.needs_group_move
        orm.needs_group_move_at = flags.needs_group_move_at
        orm.moved_to_group = flags.moved_to_group
        orm.moved_to_group_at = flags.moved_to_group_at
        await self.session.flush()
        return self._to_domain(orm)
