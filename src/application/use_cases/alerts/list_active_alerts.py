from __future__ import annotations

from datetime import datetime

from src.application.alerts.aggregator import order_feed
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.notifications.state_store import FeedSnapshot, NotificationStateStore


async def execute(uow: UnitOfWork, now: datetime | None = None) -> FeedSnapshot:
    alerts = order_feed(await uow.alerts.list())
    store = NotificationStateStore(uow.notification_states)
    return await store.annotate(alerts, now)
