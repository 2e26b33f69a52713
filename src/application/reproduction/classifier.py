from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from uuid import UUID

from src.domain.models.alert_config import AlertConfig
from src.domain.models.animal_flags import AnimalFlags
from src.domain.models.breeding_record import BreedingRecord
from src.domain.value_objects.sort_group import SortGroup
from src.utils.datetime_tz import days_between

logger = logging.getLogger(__name__)

MOVE_TO_MILKING_MIN_DAYS = 45
MOVE_TO_MILKING_MAX_DAYS = 75
ABOUT_TO_DELIVER_MAX_DAYS = 35


@dataclass(slots=True)
class Classification:
    group: SortGroup
    days_since_event: int | None = None
    days_to_delivery: int | None = None


@dataclass(slots=True)
class WorklistEntry:
    animal_id: UUID
    animal_tag: str | None
    group: SortGroup
    record: BreedingRecord | None
    latest_record: BreedingRecord | None
    flags: AnimalFlags
    days_since_event: int | None = None
    days_to_delivery: int | None = None

    @property
    def event_date(self) -> date | None:
        source = self.record or self.latest_record
        return source.event_date if source else None


def select_active_record(records: Iterable[BreedingRecord]) -> BreedingRecord | None:
    """Latest non-terminal record by (event_date, service_number).

    Records without an event date rank below dated ones. More than one non-terminal
    record for the same animal breaks the one-active-record invariant; it is logged
    and the latest one still wins.
    """
    active = [r for r in records if not r.is_terminal]
    if not active:
        return None
    if len(active) > 1:
        logger.warning(
            "Animal %s has %d undelivered breeding records; using the latest",
            active[0].animal_id,
            len(active),
        )
    return max(active, key=_record_order_key)


def latest_record(records: Iterable[BreedingRecord]) -> BreedingRecord | None:
    items = list(records)
    return max(items, key=_record_order_key) if items else None


def _record_order_key(record: BreedingRecord) -> tuple[int, int, int]:
    if record.event_date is None:
        return (0, 0, record.service_number or 0)
    return (1, record.event_date.toordinal(), record.service_number or 0)


def classify(
    record: BreedingRecord | None,
    flags: AnimalFlags | None,
    today: date,
    config: AlertConfig | None = None,
) -> Classification:
    """Assign the lifecycle group for one animal; first matching group wins."""
    config = config or AlertConfig()
    days_since: int | None = None
    days_to_delivery: int | None = None

    if record is not None and not record.is_terminal:
        if record.event_date is not None:
            days_since = days_between(record.event_date, today)
        edd = record.expected_delivery(config.expected_gestation_days)
        if edd is not None:
            days_to_delivery = days_between(today, edd)

        if record.is_confirmed_pregnant and days_to_delivery is not None:
            if MOVE_TO_MILKING_MIN_DAYS <= days_to_delivery <= MOVE_TO_MILKING_MAX_DAYS:
                return Classification(SortGroup.MOVE_TO_MILKING_GROUP, days_since, days_to_delivery)
            if 0 <= days_to_delivery <= ABOUT_TO_DELIVER_MAX_DAYS:
                return Classification(SortGroup.ABOUT_TO_DELIVER, days_since, days_to_delivery)

        if not record.pregnancy_check_done and days_since is not None:
            if config.pd_check_window_min_days <= days_since <= config.pd_check_window_max_days:
                return Classification(SortGroup.PREGNANCY_CHECK_DUE, days_since, days_to_delivery)
            if days_since > config.pd_check_window_max_days:
                return Classification(
                    SortGroup.PREGNANCY_CHECK_OVERDUE, days_since, days_to_delivery
                )

    if flags is not None and flags.is_flagged:
        return Classification(SortGroup.FLAGGED, days_since, days_to_delivery)
    return Classification(SortGroup.DEFAULT, days_since, days_to_delivery)


def build_worklist(
    records: Iterable[BreedingRecord],
    flags_by_animal: dict[UUID, AnimalFlags],
    today: date,
    config: AlertConfig | None = None,
) -> list[WorklistEntry]:
    """Classify every animal that has breeding history or flags (unsorted)."""
    by_animal: dict[UUID, list[BreedingRecord]] = {}
    for record in records:
        by_animal.setdefault(record.animal_id, []).append(record)

    entries: list[WorklistEntry] = []
    for animal_id in set(by_animal) | set(flags_by_animal):
        history = by_animal.get(animal_id, [])
        active = select_active_record(history)
        latest = latest_record(history)
        flags = flags_by_animal.get(animal_id) or AnimalFlags(animal_id=animal_id)
        result = classify(active, flags, today, config)
        tag = next(
            (r.animal_tag for r in (active, latest) if r and r.animal_tag), flags.animal_tag
        )
        entries.append(
            WorklistEntry(
                animal_id=animal_id,
                animal_tag=tag,
                group=result.group,
                record=active,
                latest_record=latest,
                flags=flags,
                days_since_event=result.days_since_event,
                days_to_delivery=result.days_to_delivery,
            )
        )
    return entries
