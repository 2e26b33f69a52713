from __future__ import annotations

import pytest

pytestmark = pytest.mark.asyncio


async def test_alert_settings_defaults_then_partial_update(client):
    resp = await client.get("/api/v1/settings/alerts")
    assert resp.status_code == 200
    body = resp.json()
    assert body["pd_check_window_max_days"] == 60
    assert body["categories"] == {"reminders": True, "alerts": True, "updates": True}
    assert body["session_trigger_mode"] == "exact"

    resp = await client.put(
        "/api/v1/settings/alerts",
        json={"delivery_urgent_days": 5, "categories": {"updates": False}},
    )
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["delivery_urgent_days"] == 5
    assert body["delivery_upcoming_days"] == 14
    assert body["categories"] == {"reminders": True, "alerts": True, "updates": False}

    assert (await client.get("/api/v1/settings/alerts")).json() == body


async def test_alert_settings_reject_inverted_window(client):
    resp = await client.put(
        "/api/v1/settings/alerts",
        json={"pd_check_window_min_days": 70, "pd_check_window_max_days": 60},
    )
    assert resp.status_code == 422
    assert resp.json()["code"] == "validation_error"


async def test_alert_settings_reject_unknown_mode(client):
    resp = await client.put("/api/v1/settings/alerts", json={"session_trigger_mode": "hourly"})
    assert resp.status_code == 422


async def test_session_schedule_round_trip(client):
    resp = await client.get("/api/v1/settings/sessions")
    assert resp.json()["morning_session_start"] is None

    resp = await client.put(
        "/api/v1/settings/sessions",
        json={"morning_session_start": "5:30", "evening_session_start": "17:00"},
    )
    assert resp.status_code == 200, resp.text
    assert resp.json()["morning_session_start"] == "05:30"

    resp = await client.put("/api/v1/settings/sessions", json={"evening_session_start": ""})
    body = resp.json()
    assert body["evening_session_start"] is None
    assert body["morning_session_start"] == "05:30"


async def test_session_schedule_rejects_bad_time(client):
    resp = await client.put("/api/v1/settings/sessions", json={"collection_end_time": "9pm"})
    assert resp.status_code == 422
