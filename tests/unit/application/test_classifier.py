from __future__ import annotations

import logging
from datetime import date, datetime, timedelta, timezone
from uuid import uuid4

from src.application.reproduction.classifier import (
    build_worklist,
    classify,
    select_active_record,
)
from src.domain.models.alert_config import AlertConfig
from src.domain.models.animal_flags import AnimalFlags
from src.domain.models.breeding_record import BreedingRecord
from src.domain.value_objects.sort_group import SortGroup

TODAY = date(2026, 3, 10)


def make_record(animal_id=None, *, days_ago: int, **kwargs) -> BreedingRecord:
    return BreedingRecord(
        id=uuid4(),
        animal_id=animal_id or uuid4(),
        event_date=TODAY - timedelta(days=days_ago),
        **kwargs,
    )


def confirmed(days_to_delivery: int, **kwargs) -> BreedingRecord:
    return make_record(
        days_ago=283 - days_to_delivery,
        pregnancy_check_done=True,
        pregnancy_result="positive",
        **kwargs,
    )


def test_about_to_deliver_two_days_before_expected_delivery():
    result = classify(confirmed(2), None, TODAY)
    assert result.group is SortGroup.ABOUT_TO_DELIVER
    assert result.days_to_delivery == 2


def test_stored_expected_delivery_date_wins_over_gestation():
    record = make_record(
        days_ago=100,
        pregnancy_check_done=True,
        pregnancy_result="positive",
        expected_delivery_date=TODAY + timedelta(days=10),
    )
    assert classify(record, None, TODAY).group is SortGroup.ABOUT_TO_DELIVER


def test_move_to_milking_window_has_priority():
    result = classify(confirmed(60), None, TODAY)
    assert result.group is SortGroup.MOVE_TO_MILKING_GROUP


def test_pd_due_at_window_end_and_overdue_one_day_later():
    due = classify(make_record(days_ago=60), None, TODAY)
    overdue = classify(make_record(days_ago=61), None, TODAY)
    assert due.group is SortGroup.PREGNANCY_CHECK_DUE
    assert due.days_since_event == 60
    assert overdue.group is SortGroup.PREGNANCY_CHECK_OVERDUE


def test_pd_window_follows_configuration():
    config = AlertConfig(pd_check_window_min_days=30, pd_check_window_max_days=40)
    assert classify(make_record(days_ago=35), None, TODAY, config).group is (
        SortGroup.PREGNANCY_CHECK_DUE
    )
    assert classify(make_record(days_ago=44), None, TODAY).group is SortGroup.DEFAULT


def test_checked_open_record_falls_to_default():
    record = make_record(days_ago=70, pregnancy_check_done=True, pregnancy_result="negative")
    assert classify(record, None, TODAY).group is SortGroup.DEFAULT


def test_flag_applies_only_until_move_confirmed():
    animal_id = uuid4()
    flags = AnimalFlags(animal_id=animal_id)
    flags.flag_for_move(datetime(2026, 3, 1, tzinfo=timezone.utc))
    assert classify(None, flags, TODAY).group is SortGroup.FLAGGED

    flags.confirm_move(datetime(2026, 3, 2, tzinfo=timezone.utc))
    assert classify(None, flags, TODAY).group is SortGroup.DEFAULT


def test_date_groups_take_precedence_over_flag():
    flags = AnimalFlags(animal_id=uuid4(), needs_group_move=True)
    assert classify(confirmed(2), flags, TODAY).group is SortGroup.ABOUT_TO_DELIVER


def test_delivered_record_is_never_active():
    animal_id = uuid4()
    delivered = make_record(animal_id, days_ago=20, actual_delivery_date=TODAY)
    active = make_record(animal_id, days_ago=50, service_number=2)
    assert select_active_record([delivered, active]) is active


def test_multiple_active_records_use_latest_and_warn(caplog):
    animal_id = uuid4()
    older = make_record(animal_id, days_ago=90)
    newer = make_record(animal_id, days_ago=50, service_number=2)
    with caplog.at_level(logging.WARNING):
        assert select_active_record([newer, older]) is newer
    assert "undelivered breeding records" in caplog.text


def test_build_worklist_uses_active_record_and_keeps_latest():
    animal_id = uuid4()
    delivered = make_record(
        animal_id, days_ago=400, actual_delivery_date=TODAY - timedelta(days=100), animal_tag="7"
    )
    active = make_record(animal_id, days_ago=50, service_number=1, animal_tag="7")
    flagged_only = AnimalFlags(animal_id=uuid4(), animal_tag="12", needs_group_move=True)

    entries = build_worklist(
        [delivered, active], {flagged_only.animal_id: flagged_only}, TODAY
    )
    by_animal = {e.animal_id: e for e in entries}

    cow = by_animal[animal_id]
    assert cow.record is active
    assert cow.latest_record is active
    assert cow.group is SortGroup.PREGNANCY_CHECK_DUE
    assert cow.animal_tag == "7"

    flagged = by_animal[flagged_only.animal_id]
    assert flagged.group is SortGroup.FLAGGED
    assert flagged.animal_tag == "12"
    assert flagged.record is None
