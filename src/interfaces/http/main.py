from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import APIRouter, Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.config.logging import configure_logging
from src.config.settings import Settings, get_settings
from src.infrastructure.db.session import (
    SQLAlchemyUnitOfWork,
    create_engine,
    create_session_factory,
)
from src.infrastructure.push.factory import build_delivery_channel
from src.infrastructure.push.models import DeliveryChannel
from src.infrastructure.scheduler.alert_tasks import AlertScheduler, Clock, SystemClock
from src.interfaces.http.deps import get_app_settings
from src.interfaces.http.routers import alerts, animals, worklist
from src.interfaces.http.routers import settings as settings_router
from src.interfaces.middleware.error_handler import register_error_handlers
from src.utils.datetime_tz import resolve_tz

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    scheduler: AlertScheduler | None = None
    settings: Settings = app.state.settings
    if settings.scheduler_enabled:
        session_factory = app.state.session_factory
        scheduler = AlertScheduler(
            lambda: SQLAlchemyUnitOfWork(session_factory),
            app.state.delivery_channel,
            tz=resolve_tz(settings.farm_timezone),
            evaluation_interval=settings.alert_evaluation_interval_seconds,
            session_interval=settings.session_check_interval_seconds,
            clock=app.state.clock,
        )
        await scheduler.start()
    app.state.scheduler = scheduler
    try:
        yield
    finally:
        if scheduler is not None:
            await scheduler.stop()
        engine = getattr(app.state, "engine", None)
        if engine is not None:
            await engine.dispose()


def create_app(
    *,
    settings: Settings | None = None,
    delivery_channel: DeliveryChannel | None = None,
    clock: Clock | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    app = FastAPI(
        title="Herd Alerts",
        version="0.1.0",
        description="Reproduction worklist and alert engine for a dairy farm",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = create_engine(settings.database_url)
    app.state.session_factory = create_session_factory(app.state.engine)
    app.state.delivery_channel = delivery_channel or build_delivery_channel(settings)
    app.state.clock = clock or SystemClock()
    register_error_handlers(app)

    api = APIRouter(prefix="/api/v1")
    api.include_router(alerts.router)
    api.include_router(worklist.router)
    api.include_router(animals.router)
    api.include_router(settings_router.router)

    @api.get("/health", tags=["health"])
    async def health(_: Settings = Depends(get_app_settings)) -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(api)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    logger.info("Application configured (environment=%s)", settings.environment)
    return app


app = create_app()
