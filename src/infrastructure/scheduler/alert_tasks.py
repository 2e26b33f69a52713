from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Protocol
from zoneinfo import ZoneInfo

from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.notifications.factory import build_notification
from src.application.notifications.types import NotificationType
from src.application.use_cases.alerts import evaluate_alerts
from src.application.use_cases.settings import session_schedule
from src.application.use_cases.settings.alert_config import load_alert_config
from src.domain.models.alert_config import SessionSchedule
from src.domain.value_objects.rule_type import SessionTriggerMode
from src.infrastructure.push.models import DeliveryChannel
from src.infrastructure.services.alert_delivery_service import AlertDeliveryService
from src.utils.datetime_tz import local_now, parse_hhmm

logger = logging.getLogger(__name__)

UowFactory = Callable[[], UnitOfWork]


class Clock(Protocol):
    def now(self) -> datetime: ...


class SystemClock:
    def now(self) -> datetime:
        return datetime.now(timezone.utc)


@dataclass(frozen=True, slots=True)
class SessionTrigger:
    key: str
    type: str
    session: str | None = None


SESSION_TRIGGERS = (
    SessionTrigger("morning_session_start", NotificationType.MILKING_START, "morning"),
    SessionTrigger("morning_session_end", NotificationType.MILKING_END, "morning"),
    SessionTrigger("evening_session_start", NotificationType.MILKING_START, "evening"),
    SessionTrigger("evening_session_end", NotificationType.MILKING_END, "evening"),
    SessionTrigger("collection_start_time", NotificationType.COLLECTION_START),
    SessionTrigger("collection_end_time", NotificationType.COLLECTION_END),
)


class SessionTriggerChecker:
    """Decides which session triggers fire at a given local time.

    Remembers the last date each trigger fired, so a trigger fires at most once a day.
    """

    def __init__(self) -> None:
        self.last_fired: dict[str, date] = {}

    def due(
        self, schedule: SessionSchedule, mode: str, local: datetime
    ) -> list[SessionTrigger]:
        today = local.date()
        current = local.time().replace(second=0, microsecond=0)
        fired: list[SessionTrigger] = []
        for trigger in SESSION_TRIGGERS:
            scheduled = parse_hhmm(getattr(schedule, trigger.key))
            if scheduled is None or self.last_fired.get(trigger.key) == today:
                continue
            if mode == SessionTriggerMode.CATCH_UP.value:
                hit = current >= scheduled
            else:
                hit = current == scheduled
            if hit:
                self.last_fired[trigger.key] = today
                fired.append(trigger)
        return fired


async def run_alert_evaluation(
    uow_factory: UowFactory,
    *,
    channel: DeliveryChannel | None = None,
    clock: Clock | None = None,
    tz: ZoneInfo | None = None,
) -> evaluate_alerts.EvaluationResult | None:
    """One full evaluation cycle; failures are logged, never raised."""
    now = (clock or SystemClock()).now()
    today = local_now(tz, now).date()
    try:
        async with uow_factory() as uow:
            delivery = AlertDeliveryService(channel, uow.alert_audit) if channel else None
            return await evaluate_alerts.execute(
                uow, today=today, now=now, delivery_service=delivery
            )
    except Exception as exc:
        logger.error("run_alert_evaluation failed: %s", exc, exc_info=True)
        return None


async def run_session_check(
    uow_factory: UowFactory,
    checker: SessionTriggerChecker,
    *,
    channel: DeliveryChannel,
    clock: Clock | None = None,
    tz: ZoneInfo | None = None,
) -> list[str]:
    """Send the session notifications due at the current minute; returns fired trigger keys."""
    local = local_now(tz, (clock or SystemClock()).now())
    try:
        async with uow_factory() as uow:
            config = await load_alert_config(uow)
            if not config.categories.updates:
                return []
            schedule = await session_schedule.get(uow)
            due = checker.due(schedule, config.session_trigger_mode, local)
            if not due:
                return []
            recipients = await uow.recipients.list_recipients()
            service = AlertDeliveryService(channel, uow.alert_audit)
            for trigger in due:
                built = build_notification(trigger.type, session=trigger.session)
                await service.deliver_notification(built, recipients)
            await uow.commit()
            logger.info(
                "Session triggers fired at %s: %s",
                local.strftime("%H:%M"),
                ", ".join(t.key for t in due),
            )
            return [t.key for t in due]
    except Exception as exc:
        logger.error("run_session_check failed: %s", exc, exc_info=True)
        return []


class AlertScheduler:
    """Two independent periodic loops: alert evaluation and session triggers.

    Each tick runs as its own task, so a slow tick never delays or cancels the next one.
    """

    def __init__(
        self,
        uow_factory: UowFactory,
        channel: DeliveryChannel,
        *,
        tz: ZoneInfo | None = None,
        evaluation_interval: float = 300,
        session_interval: float = 60,
        clock: Clock | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self.uow_factory = uow_factory
        self.channel = channel
        self.tz = tz
        self.evaluation_interval = evaluation_interval
        self.session_interval = session_interval
        self.clock = clock or SystemClock()
        self.session_checker = SessionTriggerChecker()
        self._sleep = sleep
        self._running = False
        self._loops: list[asyncio.Task] = []
        self._ticks: set[asyncio.Task] = set()

    @property
    def running(self) -> bool:
        return self._running

    async def evaluate_once(self) -> evaluate_alerts.EvaluationResult | None:
        return await run_alert_evaluation(
            self.uow_factory, channel=self.channel, clock=self.clock, tz=self.tz
        )

    async def check_sessions_once(self) -> list[str]:
        return await run_session_check(
            self.uow_factory,
            self.session_checker,
            channel=self.channel,
            clock=self.clock,
            tz=self.tz,
        )

    async def start(self) -> None:
        if self._running:
            return
        self._running = True
        self._loops = [
            asyncio.create_task(
                self._loop("alert-evaluation", self.evaluation_interval, self.evaluate_once)
            ),
            asyncio.create_task(
                self._loop("session-check", self.session_interval, self.check_sessions_once)
            ),
        ]
        logger.info(
            "Alert scheduler started (evaluation every %ss, session check every %ss)",
            self.evaluation_interval,
            self.session_interval,
        )

    async def stop(self) -> None:
        if not self._running:
            return
        self._running = False
        pending = [*self._loops, *self._ticks]
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        self._loops = []
        self._ticks.clear()
        logger.info("Alert scheduler stopped")

    async def _loop(
        self, name: str, interval: float, tick: Callable[[], Awaitable[Any]]
    ) -> None:
        while self._running:
            task = asyncio.create_task(tick(), name=name)
            self._ticks.add(task)
            task.add_done_callback(self._ticks.discard)
            await self._sleep(interval)
