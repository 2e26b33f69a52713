from __future__ import annotations

from datetime import datetime
from typing import Protocol

from src.domain.models.alert_audit import AlertAuditEntry


class AlertAuditRepository(Protocol):
    async def add_many(self, entries: list[AlertAuditEntry]) -> int: ...

    # Newest first
    async def list_since(self, since: datetime, limit: int = 200) -> list[AlertAuditEntry]: ...
