from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from typing import Any, Mapping

from src.domain.value_objects.rule_type import SessionTriggerMode

ALERT_CONFIG_KEY = "alert_configuration"
SESSION_SCHEDULE_KEY = "milking_sessions"


@dataclass(slots=True)
class AlertCategories:
    reminders: bool = True
    alerts: bool = True
    updates: bool = True


@dataclass(slots=True)
class AlertConfig:
    pd_check_window_min_days: int = 45
    pd_check_window_max_days: int = 60
    expected_gestation_days: int = 283
    delivery_urgent_days: int = 3
    delivery_upcoming_days: int = 14
    vaccination_lead_days: int = 7
    low_stock_enabled: bool = True
    categories: AlertCategories = field(default_factory=AlertCategories)
    session_trigger_mode: str = SessionTriggerMode.EXACT.value

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> AlertConfig:
        """Build a config from a stored mapping; absent or unknown keys use defaults."""
        config = cls()
        if not data:
            return config
        for f in fields(cls):
            if f.name == "categories" or f.name not in data or data[f.name] is None:
                continue
            setattr(config, f.name, data[f.name])
        cats = data.get("categories")
        if isinstance(cats, Mapping):
            for name in ("reminders", "alerts", "updates"):
                if name in cats and cats[name] is not None:
                    setattr(config.categories, name, bool(cats[name]))
        return config

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class SessionSchedule:
    morning_session_start: str | None = None
    morning_session_end: str | None = None
    evening_session_start: str | None = None
    evening_session_end: str | None = None
    collection_start_time: str | None = None
    collection_end_time: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> SessionSchedule:
        if not data:
            return cls()
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
