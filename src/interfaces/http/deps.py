from __future__ import annotations

from collections.abc import AsyncIterator
from zoneinfo import ZoneInfo

from fastapi import Request

from src.config.settings import Settings, get_settings
from src.infrastructure.db.session import SQLAlchemyUnitOfWork
from src.infrastructure.push.channel import LoggingDeliveryChannel
from src.infrastructure.push.models import DeliveryChannel
from src.infrastructure.scheduler.alert_tasks import Clock, SystemClock
from src.utils.datetime_tz import resolve_tz


async def get_uow(request: Request) -> AsyncIterator[SQLAlchemyUnitOfWork]:
    session_factory = getattr(request.app.state, "session_factory", None)
    if session_factory is None:
        raise RuntimeError("Session factory not configured")
    uow = SQLAlchemyUnitOfWork(session_factory)
    async with uow:
        yield uow


def get_app_settings() -> Settings:
    return get_settings()


def get_clock(request: Request) -> Clock:
    return getattr(request.app.state, "clock", None) or SystemClock()


def get_farm_tz(request: Request) -> ZoneInfo:
    settings = getattr(request.app.state, "settings", None) or get_settings()
    return resolve_tz(settings.farm_timezone)


def get_delivery_channel(request: Request) -> DeliveryChannel:
    channel = getattr(request.app.state, "delivery_channel", None)
    return channel or LoggingDeliveryChannel()
