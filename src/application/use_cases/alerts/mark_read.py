from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from uuid import UUID

from src.application.errors import NotFound
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.notifications.state_store import NotificationStateStore


async def execute(
    uow: UnitOfWork,
    alert_ids: list[UUID],
    clock: Callable[[], datetime] | None = None,
) -> int:
    store = NotificationStateStore(uow.notification_states, clock)
    marked = await store.mark_all_read(alert_ids)
    await uow.commit()
    return marked


async def mark_all(uow: UnitOfWork, clock: Callable[[], datetime] | None = None) -> int:
    """Mark every alert currently in the feed as read."""
    alerts = await uow.alerts.list()
    return await execute(uow, [a.id for a in alerts], clock)


async def dismiss(
    uow: UnitOfWork, alert_id: UUID, clock: Callable[[], datetime] | None = None
) -> bool:
    if await uow.alerts.get(alert_id) is None:
        raise NotFound(f"Alert {alert_id} not found")
    store = NotificationStateStore(uow.notification_states, clock)
    changed = await store.dismiss(alert_id)
    await uow.commit()
    return changed
