from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from uuid import UUID

from src.application.errors import ValidationError
from src.application.interfaces.repositories.notification_states import (
    NotificationStateRepository,
)
from src.domain.models.alert import Alert, AlertView
from src.domain.models.notification_state import NotificationState
from src.domain.value_objects.alert_priority import AlertPriority


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True)
class FeedSnapshot:
    items: list[AlertView] = field(default_factory=list)
    unread_count: int = 0
    high_priority_count: int = 0


class NotificationStateStore:
    """Read and snooze state keyed by deterministic alert id.

    Writes are per id and last-write-wins, so concurrent callers need no locking.
    """

    def __init__(
        self,
        repo: NotificationStateRepository,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.repo = repo
        self._clock = clock or _utcnow

    async def _load(self, alert_id: UUID) -> NotificationState:
        state = await self.repo.get(alert_id)
        return state or NotificationState(alert_id=alert_id, updated_at=self._clock())

    async def mark_read(self, alert_id: UUID) -> bool:
        """Returns False when the alert was already read."""
        state = await self._load(alert_id)
        if not state.mark_as_read(self._clock()):
            return False
        await self.repo.save(state)
        return True

    async def mark_all_read(self, alert_ids: Iterable[UUID]) -> int:
        marked = 0
        for alert_id in dict.fromkeys(alert_ids):
            if await self.mark_read(alert_id):
                marked += 1
        return marked

    async def dismiss(self, alert_id: UUID) -> bool:
        return await self.mark_read(alert_id)

    async def snooze(self, alert_id: UUID, duration_hours: float) -> datetime:
        if duration_hours <= 0:
            raise ValidationError("Snooze duration must be positive")
        now = self._clock()
        until = now + timedelta(hours=duration_hours)
        state = await self._load(alert_id)
        state.snooze(until, now)
        await self.repo.save(state)
        return until

    async def unsnooze(self, alert_id: UUID) -> None:
        state = await self.repo.get(alert_id)
        if state is None or state.snooze_until is None:
            return
        state.unsnooze(self._clock())
        await self.repo.save(state)

    async def is_visible(self, alert_id: UUID, now: datetime | None = None) -> bool:
        state = await self.repo.get(alert_id)
        if state is None:
            return True
        return not state.is_snoozed(now or self._clock())

    async def annotate(self, alerts: Iterable[Alert], now: datetime | None = None) -> FeedSnapshot:
        """Attach read/snooze state and drop alerts snoozed into the future."""
        now = now or self._clock()
        alerts = list(alerts)
        states = await self.repo.get_many([a.id for a in alerts])
        snapshot = FeedSnapshot()
        for alert in alerts:
            state = states.get(alert.id)
            if state is not None and state.is_snoozed(now):
                continue
            # Past this point any snooze has expired, so the alert shows as not snoozed.
            view = AlertView(alert=alert, read=bool(state and state.read))
            snapshot.items.append(view)
            if not view.read:
                snapshot.unread_count += 1
                if alert.priority == AlertPriority.HIGH.value:
                    snapshot.high_priority_count += 1
        return snapshot
