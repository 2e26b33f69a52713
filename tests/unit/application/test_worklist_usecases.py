from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from uuid import uuid4

import pytest

from src.application.errors import NotFound, ValidationError
from src.application.use_cases.reproduction import get_worklist, update_group_move_flag
from src.domain.models.animal_flags import AnimalFlags
from src.domain.models.breeding_record import BreedingRecord
from src.domain.value_objects.sort_group import SortGroup

TODAY = date(2026, 3, 10)


def record(tag: str, days_ago: int, **kwargs) -> BreedingRecord:
    return BreedingRecord(
        id=uuid4(),
        animal_id=kwargs.pop("animal_id", None) or uuid4(),
        animal_tag=tag,
        event_date=TODAY - timedelta(days=days_ago),
        **kwargs,
    )


@pytest.fixture()
def herd(memory_uow):
    delivered_id = uuid4()
    memory_uow.breeding_records.rows = [
        record("1", 50),
        record("2", 281, pregnancy_check_done=True, pregnancy_result="positive"),
        record("3", 300, animal_id=delivered_id, actual_delivery_date=TODAY - timedelta(days=5)),
        record("4", 70),
    ]
    flagged = AnimalFlags(animal_id=uuid4(), animal_tag="5", needs_group_move=True,
                          needs_group_move_at=datetime(2026, 3, 1, tzinfo=timezone.utc))
    memory_uow.animal_flags.items[flagged.animal_id] = flagged
    return memory_uow


def tags(entries):
    return [e.animal_tag for e in entries]


async def test_full_worklist_hides_delivered_by_default(herd):
    entries = await get_worklist.execute(herd, get_worklist.WorklistQuery(today=TODAY))
    assert tags(entries) == ["2", "1", "4", "5"]
    assert [e.group for e in entries] == [
        SortGroup.ABOUT_TO_DELIVER,
        SortGroup.PREGNANCY_CHECK_DUE,
        SortGroup.PREGNANCY_CHECK_OVERDUE,
        SortGroup.FLAGGED,
    ]


async def test_include_delivered(herd):
    query = get_worklist.WorklistQuery(today=TODAY, include_delivered=True)
    entries = await get_worklist.execute(herd, query)
    assert tags(entries)[-1] == "3"
    assert entries[-1].group is SortGroup.DEFAULT


@pytest.mark.parametrize(
    ("name", "expected"),
    [("about_to_deliver", ["2"]), ("pd_due", ["1", "4"]), ("flagged", ["5"])],
)
async def test_filters(herd, name, expected):
    query = get_worklist.WorklistQuery(today=TODAY, filter=name)
    assert tags(await get_worklist.execute(herd, query)) == expected


async def test_unknown_filter(herd):
    with pytest.raises(ValidationError):
        await get_worklist.execute(herd, get_worklist.WorklistQuery(today=TODAY, filter="x"))


async def test_group_move_flag_lifecycle(memory_uow):
    animal_id = uuid4()
    memory_uow.animal_flags.items[animal_id] = AnimalFlags(animal_id=animal_id, animal_tag="9")
    at = datetime(2026, 3, 10, 9, 0, tzinfo=timezone.utc)

    flags = await update_group_move_flag.execute(
        memory_uow, animal_id, update_group_move_flag.GroupMoveInput(needs_group_move=True), at
    )
    assert flags.is_flagged
    assert flags.needs_group_move_at == at

    flags = await update_group_move_flag.execute(
        memory_uow, animal_id, update_group_move_flag.GroupMoveInput(moved_to_group=True), at
    )
    assert not flags.is_flagged
    assert flags.moved_to_group_at == at

    flags = await update_group_move_flag.execute(
        memory_uow, animal_id, update_group_move_flag.GroupMoveInput(needs_group_move=False)
    )
    assert not flags.needs_group_move and not flags.moved_to_group
    assert memory_uow.commits == 3


async def test_group_move_unknown_animal(memory_uow):
    with pytest.raises(NotFound):
        await update_group_move_flag.execute(
            memory_uow, uuid4(), update_group_move_flag.GroupMoveInput(needs_group_move=True)
        )
