from __future__ import annotations

from typing import Protocol
from uuid import UUID

from src.domain.models.animal_flags import AnimalFlags


class AnimalFlagsRepository(Protocol):
    async def list(self) -> list[AnimalFlags]: ...

    async def get(self, animal_id: UUID) -> AnimalFlags | None: ...

    async def update(self, flags: AnimalFlags) -> AnimalFlags: ...
