from __future__ import annotations

import os
import sys
from collections.abc import AsyncIterator
from dataclasses import replace
from datetime import date, datetime, timedelta, timezone
from pathlib import Path
from typing import Any
from uuid import UUID

import pytest
from httpx import ASGITransport, AsyncClient

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///default.db")
os.environ.setdefault("SCHEDULER_ENABLED", "false")

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(PROJECT_ROOT))

# ruff: noqa: E402
from src.application.interfaces.repositories.recipients import Recipient
from src.config.settings import Settings
from src.domain.models.alert import Alert
from src.infrastructure.db.base import Base
from src.infrastructure.db.orm import (  # noqa: F401
    alert,
    alert_audit,
    animal,
    app_setting,
    breeding_record,
    device_token,
    inventory_item,
    notification_state,
    vaccination_record,
)
from src.infrastructure.push.models import DeliveryChannel, DeliveryResult
from src.infrastructure.repos.notification_states_memory import (
    InMemoryNotificationStateRepository,
)
from src.interfaces.http.main import create_app

TODAY = date(2026, 3, 10)
NOW = datetime(2026, 3, 10, 8, 0, tzinfo=timezone.utc)


class FixedClock:
    def __init__(self, now: datetime) -> None:
        self.current = now

    def now(self) -> datetime:
        return self.current

    def advance(self, **delta: float) -> None:
        self.current += timedelta(**delta)


class RecordingChannel(DeliveryChannel):
    def __init__(self, *, fail_for: set[str] | None = None) -> None:
        self.sent: list[dict[str, Any]] = []
        self.fail_for = fail_for or set()

    async def send(self, recipients, title, body, data=None) -> DeliveryResult:
        self.sent.append(
            {"recipients": [r.user_id for r in recipients], "title": title, "data": data}
        )
        result = DeliveryResult()
        for r in recipients:
            (result.failed if r.user_id in self.fail_for else result.sent).append(r.user_id)
        return result


class MemoryBreedingRecords:
    def __init__(self) -> None:
        self.rows: list = []

    async def list(self, animal_id=None, date_from=None, date_to=None):
        return [r for r in self.rows if animal_id is None or r.animal_id == animal_id]

    async def list_pending_checks(self, event_on_or_before: date):
        return [
            r
            for r in self.rows
            if not r.pregnancy_check_done
            and r.event_date is not None
            and r.event_date <= event_on_or_before
        ]

    async def list_expected_deliveries(self, start: date, end: date):
        return list(self.rows)


class MemoryRows:
    def __init__(self) -> None:
        self.rows: list = []

    async def list(self, *args, **kwargs):
        return list(self.rows)


class MemoryAnimalFlags:
    def __init__(self) -> None:
        self.items: dict[UUID, Any] = {}

    async def list(self):
        return [replace(f) for f in self.items.values()]

    async def get(self, animal_id: UUID):
        flags = self.items.get(animal_id)
        return replace(flags) if flags else None

    async def update(self, flags):
        self.items[flags.animal_id] = replace(flags)
        return flags


class MemoryAppSettings:
    def __init__(self) -> None:
        self.values: dict[str, dict] = {}

    async def get(self, key: str):
        value = self.values.get(key)
        return dict(value) if value is not None else None

    async def set(self, key: str, value: dict):
        self.values[key] = dict(value)
        return value


class MemoryAlertFeed:
    def __init__(self) -> None:
        self.items: dict[UUID, Alert] = {}

    async def list(self):
        return list(self.items.values())

    async def get(self, alert_id: UUID):
        return self.items.get(alert_id)

    async def existing_ids(self, alert_ids):
        return {i for i in alert_ids if i in self.items}

    async def replace(self, alerts):
        published = []
        for a in alerts:
            current = self.items.get(a.id)
            published.append(replace(a, created_at=current.created_at) if current else a)
        self.items = {a.id: a for a in published}
        return published


class MemoryAudit:
    def __init__(self) -> None:
        self.entries: list = []

    async def add_many(self, entries):
        self.entries.extend(entries)
        return len(entries)

    async def list_since(self, since, limit: int = 200):
        recent = [e for e in self.entries if e.created_at >= since]
        return sorted(recent, key=lambda e: e.created_at, reverse=True)[:limit]


class MemoryRecipients:
    def __init__(self) -> None:
        self.recipients: list[Recipient] = []

    async def list_recipients(self):
        return list(self.recipients)


class MemoryUnitOfWork:
    def __init__(self) -> None:
        self.breeding_records = MemoryBreedingRecords()
        self.vaccination_records = MemoryRows()
        self.inventory_items = MemoryRows()
        self.animal_flags = MemoryAnimalFlags()
        self.app_settings = MemoryAppSettings()
        self.alerts = MemoryAlertFeed()
        self.notification_states = InMemoryNotificationStateRepository()
        self.alert_audit = MemoryAudit()
        self.recipients = MemoryRecipients()
        self.commits = 0
        self.rollbacks = 0

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    async def commit(self) -> None:
        self.commits += 1

    async def rollback(self) -> None:
        self.rollbacks += 1


@pytest.fixture()
def today() -> date:
    return TODAY


@pytest.fixture()
def clock() -> FixedClock:
    return FixedClock(NOW)


@pytest.fixture()
def channel() -> RecordingChannel:
    return RecordingChannel()


@pytest.fixture()
def memory_uow() -> MemoryUnitOfWork:
    return MemoryUnitOfWork()


@pytest.fixture()
def test_settings(tmp_path) -> Settings:
    db_path = tmp_path / "test.db"
    return Settings.model_validate(
        {
            "database_url": f"sqlite+aiosqlite:///{db_path}",
            "log_level": "INFO",
            "environment": "test",
            "farm_timezone": "UTC",
            "scheduler_enabled": False,
        }
    )


@pytest.fixture()
def app(test_settings: Settings, channel: RecordingChannel, clock: FixedClock):
    return create_app(settings=test_settings, delivery_channel=channel, clock=clock)


@pytest.fixture()
async def client(app) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        engine = app.state.engine
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)
        yield client
        await engine.dispose()
