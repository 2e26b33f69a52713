from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from typing import Protocol
from uuid import UUID

from src.domain.models.notification_state import NotificationState


class NotificationStateRepository(Protocol):
    async def get(self, alert_id: UUID) -> NotificationState | None: ...

    async def get_many(self, alert_ids: list[UUID]) -> dict[UUID, NotificationState]: ...

    async def save(self, state: NotificationState) -> NotificationState: ...

    # Delete states last touched before `before`, except for ids in `keep`
    async def prune(self, before: datetime, keep: Iterable[UUID] = ()) -> int: ...
