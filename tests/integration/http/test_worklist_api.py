from __future__ import annotations

from datetime import date
from uuid import uuid4

import pytest

from src.infrastructure.db.orm.animal import AnimalORM
from src.infrastructure.db.orm.breeding_record import BreedingRecordORM

pytestmark = pytest.mark.asyncio


async def seed_herd(app) -> dict:
    ids = {"pd": uuid4(), "due": uuid4(), "calved": uuid4(), "idle": uuid4()}
    async with app.state.session_factory() as session:
        session.add_all(
            [
                AnimalORM(id=ids["pd"], tag="12"),
                AnimalORM(id=ids["due"], tag="7"),
                AnimalORM(id=ids["calved"], tag="3"),
                AnimalORM(id=ids["idle"], tag="40"),
            ]
        )
        await session.flush()
        session.add_all(
            [
                BreedingRecordORM(id=uuid4(), animal_id=ids["pd"], event_date=date(2026, 1, 20)),
                BreedingRecordORM(
                    id=uuid4(),
                    animal_id=ids["due"],
                    event_date=date(2025, 6, 2),
                    pregnancy_check_done=True,
                    pregnancy_result="positive",
                    expected_delivery_date=date(2026, 3, 12),
                ),
                BreedingRecordORM(
                    id=uuid4(),
                    animal_id=ids["calved"],
                    event_date=date(2025, 5, 1),
                    pregnancy_check_done=True,
                    pregnancy_result="positive",
                    actual_delivery_date=date(2026, 2, 8),
                ),
            ]
        )
        await session.commit()
    return ids


async def test_worklist_groups_and_order(client, app):
    await seed_herd(app)

    resp = await client.get("/api/v1/worklist")
    assert resp.status_code == 200, resp.text
    items = resp.json()["items"]
    assert [i["animal_tag"] for i in items] == ["7", "12"]
    assert items[0]["group_label"] == "About to deliver"
    assert items[0]["days_to_delivery"] == 2
    assert items[1]["group_label"] == "PD due"
    assert items[1]["days_since_event"] == 49

    delivered = (await client.get("/api/v1/worklist", params={"include_delivered": True})).json()
    assert {i["animal_tag"] for i in delivered["items"]} == {"3", "7", "12"}


async def test_worklist_filters(client, app):
    await seed_herd(app)
    pd = (await client.get("/api/v1/worklist", params={"filter": "pd_due"})).json()
    assert [i["animal_tag"] for i in pd["items"]] == ["12"]

    resp = await client.get("/api/v1/worklist", params={"filter": "pregnant"})
    assert resp.status_code == 422


async def test_group_move_flag_lifecycle(client, app):
    ids = await seed_herd(app)
    url = f"/api/v1/animals/{ids['idle']}/group-move"

    resp = await client.patch(url, json={"needs_group_move": True})
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["needs_group_move"] is True
    assert body["needs_group_move_at"] is not None

    flagged = (await client.get("/api/v1/worklist", params={"filter": "flagged"})).json()
    assert [i["animal_tag"] for i in flagged["items"]] == ["40"]

    resp = await client.patch(url, json={"moved_to_group": True})
    body = resp.json()
    assert body["moved_to_group"] is True
    assert body["moved_to_group_at"] is not None
    flagged = (await client.get("/api/v1/worklist", params={"filter": "flagged"})).json()
    assert flagged["items"] == []

    resp = await client.patch(url, json={"needs_group_move": False, "moved_to_group": False})
    body = resp.json()
    assert body["moved_to_group"] is False
    assert body["needs_group_move"] is False


async def test_group_move_unknown_animal(client):
    resp = await client.patch(
        f"/api/v1/animals/{uuid4()}/group-move", json={"needs_group_move": True}
    )
    assert resp.status_code == 404
