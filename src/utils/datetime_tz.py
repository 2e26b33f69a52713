from __future__ import annotations

from datetime import date, datetime, time, timezone

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

DEFAULT_TIMEZONE_NAME = "UTC"
DEFAULT_TZ = ZoneInfo(DEFAULT_TIMEZONE_NAME)


def resolve_tz(name: str | None) -> ZoneInfo:
    """Return the ZoneInfo for `name`, falling back to DEFAULT_TZ when unknown."""
    if not name:
        return DEFAULT_TZ
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return DEFAULT_TZ


def ensure_aware(dt: datetime) -> datetime:
    """Attach UTC to naive datetimes; aware values are returned unchanged."""
    if dt.tzinfo is None or dt.tzinfo.utcoffset(dt) is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def parse_date_or_none(value: date | datetime | str | None) -> date | None:
    """Parse a calendar date, returning None for missing or invalid input.

    Accepts date/datetime objects and ISO date or datetime strings (with optional
    trailing 'Z'). Never raises.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    s = value.strip()
    if not s:
        return None
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(s).date()
    except ValueError:
        pass
    try:
        return date.fromisoformat(s[:10])
    except ValueError:
        return None


def days_between(start: date, end: date) -> int:
    """Calendar-day difference `end - start` (negative when `start` is after `end`)."""
    return (end - start).days


def local_now(tz: ZoneInfo | None = None, now: datetime | None = None) -> datetime:
    current = ensure_aware(now) if now is not None else datetime.now(timezone.utc)
    return current.astimezone(tz or DEFAULT_TZ)


def parse_hhmm(value: str | None) -> time | None:
    """Parse 'HH:MM' (seconds tolerated) into a time; None when invalid."""
    if not value:
        return None
    parts = value.strip().split(":")
    if len(parts) < 2:
        return None
    try:
        hour, minute = int(parts[0]), int(parts[1])
        return time(hour, minute)
    except ValueError:
        return None
