from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID


@dataclass(slots=True)
class NotificationState:
    alert_id: UUID
    read: bool = False
    read_at: datetime | None = None
    snooze_until: datetime | None = None
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def mark_as_read(self, at: datetime) -> bool:
        if self.read:
            return False
        self.read = True
        self.read_at = at
        self.updated_at = at
        return True

    def snooze(self, until: datetime, at: datetime) -> None:
        self.snooze_until = until
        self.updated_at = at

    def unsnooze(self, at: datetime) -> None:
        self.snooze_until = None
        self.updated_at = at

    def is_snoozed(self, now: datetime) -> bool:
        return self.snooze_until is not None and self.snooze_until > now
