from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import UUID


@dataclass(slots=True)
class AnimalFlags:
    animal_id: UUID
    animal_tag: str | None = None
    needs_group_move: bool = False
    needs_group_move_at: datetime | None = None
    moved_to_group: bool = False
    moved_to_group_at: datetime | None = None

    @property
    def is_flagged(self) -> bool:
        return self.needs_group_move and not self.moved_to_group

    def flag_for_move(self, at: datetime | None = None) -> None:
        self.needs_group_move = True
        self.needs_group_move_at = at or datetime.now(timezone.utc)
        self.moved_to_group = False
        self.moved_to_group_at = None

    def confirm_move(self, at: datetime | None = None) -> None:
        self.moved_to_group = True
        self.moved_to_group_at = at or datetime.now(timezone.utc)

    def clear(self) -> None:
        self.needs_group_move = False
        self.needs_group_move_at = None
        self.moved_to_group = False
        self.moved_to_group_at = None
