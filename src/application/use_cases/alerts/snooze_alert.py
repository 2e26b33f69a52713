from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from uuid import UUID

from src.application.errors import NotFound
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.notifications.state_store import NotificationStateStore


async def execute(
    uow: UnitOfWork,
    alert_id: UUID,
    duration_hours: float,
    clock: Callable[[], datetime] | None = None,
) -> datetime:
    if await uow.alerts.get(alert_id) is None:
        raise NotFound(f"Alert {alert_id} not found")
    store = NotificationStateStore(uow.notification_states, clock)
    until = await store.snooze(alert_id, duration_hours)
    await uow.commit()
    return until


async def unsnooze(
    uow: UnitOfWork, alert_id: UUID, clock: Callable[[], datetime] | None = None
) -> None:
    store = NotificationStateStore(uow.notification_states, clock)
    await store.unsnooze(alert_id)
    await uow.commit()
