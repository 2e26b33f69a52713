from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from src.application.errors import ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.reproduction.classifier import WorklistEntry, build_worklist
from src.application.reproduction.comparator import sort_worklist
from src.application.use_cases.settings.alert_config import load_alert_config
from src.domain.value_objects.sort_group import SortGroup

WORKLIST_FILTERS = {
    "all": None,
    "about_to_deliver": {SortGroup.ABOUT_TO_DELIVER},
    "pd_due": {SortGroup.PREGNANCY_CHECK_DUE, SortGroup.PREGNANCY_CHECK_OVERDUE},
    "flagged": {SortGroup.FLAGGED},
}


@dataclass(slots=True)
class WorklistQuery:
    today: date
    filter: str = "all"
    include_delivered: bool = False


async def execute(uow: UnitOfWork, query: WorklistQuery) -> list[WorklistEntry]:
    if query.filter not in WORKLIST_FILTERS:
        raise ValidationError(
            f"Invalid filter. Must be one of: {', '.join(WORKLIST_FILTERS)}"
        )
    config = await load_alert_config(uow)
    records = await uow.breeding_records.list()
    flags = {f.animal_id: f for f in await uow.animal_flags.list()}
    entries = build_worklist(records, flags, query.today, config)

    if not query.include_delivered:
        # Animals whose most recent record ended in a delivery drop out unless flagged.
        entries = [
            e
            for e in entries
            if e.record is not None
            or e.flags.is_flagged
            or not (e.latest_record and e.latest_record.actual_delivery_date)
        ]
    groups = WORKLIST_FILTERS[query.filter]
    if groups is not None:
        entries = [e for e in entries if e.group in groups]
    return sort_worklist(entries)
