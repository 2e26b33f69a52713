from __future__ import annotations

from datetime import datetime, timedelta, timezone

from src.application.errors import ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.alert_audit import AlertAuditEntry

MAX_HISTORY_DAYS = 365


async def execute(
    uow: UnitOfWork, days: int = 30, now: datetime | None = None, limit: int = 200
) -> list[AlertAuditEntry]:
    """Delivered and failed notifications of the last `days` days, newest first."""
    if not 0 < days <= MAX_HISTORY_DAYS:
        raise ValidationError(f"days must be between 1 and {MAX_HISTORY_DAYS}")
    since = (now or datetime.now(timezone.utc)) - timedelta(days=days)
    return await uow.alert_audit.list_since(since, limit=limit)
