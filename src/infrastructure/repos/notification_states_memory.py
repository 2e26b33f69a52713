from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace
from datetime import datetime
from uuid import UUID

from src.domain.models.notification_state import NotificationState


class InMemoryNotificationStateRepository:
    """Process-local state, for tests and single-process setups without a database."""

    def __init__(self) -> None:
        self._states: dict[UUID, NotificationState] = {}

    async def get(self, alert_id: UUID) -> NotificationState | None:
        state = self._states.get(alert_id)
        return replace(state) if state else None

    async def get_many(self, alert_ids: list[UUID]) -> dict[UUID, NotificationState]:
        return {i: replace(self._states[i]) for i in alert_ids if i in self._states}

    async def save(self, state: NotificationState) -> NotificationState:
        self._states[state.alert_id] = replace(state)
        return state

    async def prune(self, before: datetime, keep: Iterable[UUID] = ()) -> int:
        keep = set(keep)
        stale = [
            alert_id
            for alert_id, state in self._states.items()
            if state.updated_at < before and alert_id not in keep
        ]
        for alert_id in stale:
            del self._states[alert_id]
        return len(stale)
