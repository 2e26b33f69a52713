from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class AlertCategoriesSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    reminders: bool = True
    alerts: bool = True
    updates: bool = True


class AlertConfigResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    pd_check_window_min_days: int
    pd_check_window_max_days: int
    expected_gestation_days: int
    delivery_urgent_days: int
    delivery_upcoming_days: int
    vaccination_lead_days: int
    low_stock_enabled: bool
    categories: AlertCategoriesSchema
    session_trigger_mode: str


class AlertCategoriesUpdate(BaseModel):
    reminders: bool | None = None
    alerts: bool | None = None
    updates: bool | None = None


class AlertConfigUpdate(BaseModel):
    pd_check_window_min_days: int | None = Field(default=None, ge=0)
    pd_check_window_max_days: int | None = Field(default=None, ge=0)
    expected_gestation_days: int | None = Field(default=None, gt=0)
    delivery_urgent_days: int | None = Field(default=None, ge=0)
    delivery_upcoming_days: int | None = Field(default=None, ge=0)
    vaccination_lead_days: int | None = Field(default=None, ge=0)
    low_stock_enabled: bool | None = None
    categories: AlertCategoriesUpdate | None = None
    session_trigger_mode: Literal["exact", "catch_up"] | None = None


class SessionScheduleSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    morning_session_start: str | None = None
    morning_session_end: str | None = None
    evening_session_start: str | None = None
    evening_session_end: str | None = None
    collection_start_time: str | None = None
    collection_end_time: str | None = None
