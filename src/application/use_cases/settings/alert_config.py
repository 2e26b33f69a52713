from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from src.application.errors import ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.alert_config import ALERT_CONFIG_KEY, AlertConfig
from src.domain.value_objects.rule_type import SessionTriggerMode

logger = logging.getLogger(__name__)


async def load_alert_config(uow: UnitOfWork) -> AlertConfig:
    """Stored alert configuration, or defaults when it is missing or unreadable."""
    try:
        stored = await uow.app_settings.get(ALERT_CONFIG_KEY)
    except Exception as exc:
        logger.warning("Alert configuration unavailable, using defaults: %s", exc)
        return AlertConfig()
    return AlertConfig.from_mapping(stored)


async def get(uow: UnitOfWork) -> AlertConfig:
    return await load_alert_config(uow)


@dataclass(slots=True)
class UpdateAlertConfigInput:
    changes: dict[str, Any]


def validate(config: AlertConfig) -> None:
    day_fields = (
        "pd_check_window_min_days",
        "pd_check_window_max_days",
        "expected_gestation_days",
        "delivery_urgent_days",
        "delivery_upcoming_days",
        "vaccination_lead_days",
    )
    for name in day_fields:
        value = getattr(config, name)
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ValidationError(f"{name} must be a non-negative integer")
    if config.pd_check_window_min_days > config.pd_check_window_max_days:
        raise ValidationError("pd_check_window_min_days must not exceed pd_check_window_max_days")
    if config.expected_gestation_days == 0:
        raise ValidationError("expected_gestation_days must be positive")
    if config.delivery_urgent_days > config.delivery_upcoming_days:
        raise ValidationError("delivery_urgent_days must not exceed delivery_upcoming_days")
    modes = {m.value for m in SessionTriggerMode}
    if config.session_trigger_mode not in modes:
        raise ValidationError(
            f"Invalid session_trigger_mode. Must be one of: {', '.join(sorted(modes))}"
        )


async def update(uow: UnitOfWork, payload: UpdateAlertConfigInput) -> AlertConfig:
    current = (await load_alert_config(uow)).to_dict()
    for key, value in payload.changes.items():
        if key == "categories" and isinstance(value, dict):
            current["categories"].update({k: v for k, v in value.items() if v is not None})
        elif value is not None:
            current[key] = value
    config = AlertConfig.from_mapping(current)
    validate(config)
    await uow.app_settings.set(ALERT_CONFIG_KEY, config.to_dict())
    await uow.commit()
    return config
