from __future__ import annotations

from typing import Protocol
from uuid import UUID

from src.domain.models.alert import Alert


class AlertFeedRepository(Protocol):
    async def list(self) -> list[Alert]: ...

    async def get(self, alert_id: UUID) -> Alert | None: ...

    async def existing_ids(self, alert_ids: list[UUID]) -> set[UUID]: ...

    # Replace the whole feed; keeps created_at of ids already present
    async def replace(self, alerts: list[Alert]) -> list[Alert]: ...
