from __future__ import annotations

from collections.abc import Sequence
from datetime import date, timedelta
from decimal import Decimal, InvalidOperation
from typing import Any, Protocol

from src.application.reproduction.comparator import numeric_tag
from src.domain.models.alert import CandidateAlert
from src.domain.models.alert_config import AlertConfig
from src.domain.models.breeding_record import BreedingRecord, PregnancyResult
from src.domain.models.inventory_item import InventoryItem
from src.domain.models.vaccination_record import VaccinationRecord
from src.domain.value_objects.rule_type import RuleType, UrgencyBucket
from src.utils.datetime_tz import days_between, parse_date_or_none


class AlertRule(Protocol):
    """A rule pulls its slice of records (`fetch`) and evaluates it without side effects."""

    rule_type: RuleType

    def enabled(self, config: AlertConfig) -> bool: ...

    async def fetch(self, source: Any, config: AlertConfig, today: date) -> Sequence[Any]: ...

    def evaluate(
        self, rows: Sequence[Any], config: AlertConfig, today: date
    ) -> list[CandidateAlert]: ...


def _by_tag(subject: dict[str, Any]) -> tuple[int, str]:
    tag = subject.get("animal_tag")
    return (numeric_tag(tag), str(tag or ""))


def _as_number(value: Any) -> float | None:
    if value is None:
        return None
    try:
        return float(Decimal(str(value)))
    except (InvalidOperation, ValueError):
        return None


class PregnancyCheckDueRule:
    rule_type = RuleType.PREGNANCY_CHECK_DUE

    def enabled(self, config: AlertConfig) -> bool:
        return config.categories.reminders

    async def fetch(
        self, source: Any, config: AlertConfig, today: date
    ) -> Sequence[BreedingRecord]:
        cutoff = today - timedelta(days=config.pd_check_window_max_days)
        return await source.breeding_records.list_pending_checks(cutoff)

    def evaluate(
        self, rows: Sequence[BreedingRecord], config: AlertConfig, today: date
    ) -> list[CandidateAlert]:
        cutoff = today - timedelta(days=config.pd_check_window_max_days)
        subjects: list[dict[str, Any]] = []
        for record in rows:
            if record.pregnancy_check_done or record.pregnancy_result or record.is_terminal:
                continue
            event_date = parse_date_or_none(record.event_date)
            if event_date is None or event_date > cutoff:
                continue
            days_since = days_between(event_date, today)
            subjects.append(
                {
                    "animal_id": str(record.animal_id),
                    "animal_tag": record.animal_tag,
                    "ai_date": event_date.isoformat(),
                    "service_no": record.service_number,
                    "days_since_event": days_since,
                    "days_overdue": days_since - config.pd_check_window_max_days,
                }
            )
        if not subjects:
            return []
        subjects.sort(key=lambda s: (-s["days_since_event"], *_by_tag(s)))
        return [CandidateAlert(self.rule_type.value, UrgencyBucket.DUE.value, subjects)]


class DeliveryImminentRule:
    rule_type = RuleType.DELIVERY_IMMINENT

    def enabled(self, config: AlertConfig) -> bool:
        return config.categories.reminders

    async def fetch(
        self, source: Any, config: AlertConfig, today: date
    ) -> Sequence[BreedingRecord]:
        end = today + timedelta(days=config.delivery_upcoming_days)
        return await source.breeding_records.list_expected_deliveries(today, end)

    def evaluate(
        self, rows: Sequence[BreedingRecord], config: AlertConfig, today: date
    ) -> list[CandidateAlert]:
        urgent: list[dict[str, Any]] = []
        upcoming: list[dict[str, Any]] = []
        for record in rows:
            if record.is_terminal or record.pregnancy_result != PregnancyResult.POSITIVE.value:
                continue
            edd = parse_date_or_none(record.expected_delivery(config.expected_gestation_days))
            if edd is None:
                continue
            days_until = days_between(today, edd)
            subject = {
                "animal_id": str(record.animal_id),
                "animal_tag": record.animal_tag,
                "expected_delivery": edd.isoformat(),
                "days_remaining": days_until,
            }
            if 0 <= days_until <= config.delivery_urgent_days:
                urgent.append(subject)
            elif config.delivery_urgent_days < days_until <= config.delivery_upcoming_days:
                upcoming.append(subject)

        candidates = []
        for bucket, subjects in (
            (UrgencyBucket.URGENT, urgent),
            (UrgencyBucket.UPCOMING, upcoming),
        ):
            if subjects:
                subjects.sort(key=lambda s: (s["days_remaining"], *_by_tag(s)))
                candidates.append(CandidateAlert(self.rule_type.value, bucket.value, subjects))
        return candidates


class VaccinationDueRule:
    rule_type = RuleType.VACCINATION_DUE

    def enabled(self, config: AlertConfig) -> bool:
        return config.categories.reminders

    async def fetch(
        self, source: Any, config: AlertConfig, today: date
    ) -> Sequence[VaccinationRecord]:
        # Whole history: a re-administration supersedes older due dates.
        return await source.vaccination_records.list()

    @staticmethod
    def latest_per_vaccine(rows: Sequence[VaccinationRecord]) -> list[VaccinationRecord]:
        latest: dict[tuple[str, str], VaccinationRecord] = {}
        for record in rows:
            key = (str(record.animal_id), str(record.vaccine_id or record.vaccine_name or ""))
            current = latest.get(key)
            if current is None or _administered(record) >= _administered(current):
                latest[key] = record
        return list(latest.values())

    def evaluate(
        self, rows: Sequence[VaccinationRecord], config: AlertConfig, today: date
    ) -> list[CandidateAlert]:
        overdue: list[dict[str, Any]] = []
        upcoming: list[dict[str, Any]] = []
        for record in self.latest_per_vaccine(rows):
            due = parse_date_or_none(record.next_due_date)
            if due is None:
                continue
            days_until = days_between(today, due)
            subject = {
                "animal_id": str(record.animal_id),
                "animal_tag": record.animal_tag,
                "vaccine_name": record.vaccine_name or "Unknown",
                "due_date": due.isoformat(),
                "days_remaining": days_until,
                "overdue": days_until <= 0,
            }
            if days_until <= 0:
                overdue.append(subject)
            elif days_until <= config.vaccination_lead_days:
                upcoming.append(subject)

        candidates = []
        for bucket, subjects in (
            (UrgencyBucket.OVERDUE, overdue),
            (UrgencyBucket.UPCOMING, upcoming),
        ):
            if subjects:
                subjects.sort(
                    key=lambda s: (s["days_remaining"], *_by_tag(s), s["vaccine_name"])
                )
                candidates.append(CandidateAlert(self.rule_type.value, bucket.value, subjects))
        return candidates


def _administered(record: VaccinationRecord) -> int:
    administered = parse_date_or_none(record.administered_date)
    return administered.toordinal() if administered else 0


class LowStockRule:
    rule_type = RuleType.LOW_STOCK

    def enabled(self, config: AlertConfig) -> bool:
        return config.low_stock_enabled and config.categories.alerts

    async def fetch(
        self, source: Any, config: AlertConfig, today: date
    ) -> Sequence[InventoryItem]:
        return await source.inventory_items.list()

    def evaluate(
        self, rows: Sequence[InventoryItem], config: AlertConfig, today: date
    ) -> list[CandidateAlert]:
        subjects: list[dict[str, Any]] = []
        for item in rows:
            current = _as_number(item.current_stock)
            minimum = _as_number(item.minimum_stock_level)
            if current is None or minimum is None:
                continue
            if not 0 < current <= minimum:
                continue
            subjects.append(
                {
                    "id": str(item.id),
                    "name": item.name,
                    "current_stock": current,
                    "minimum_stock_level": minimum,
                    "unit": item.unit,
                }
            )
        if not subjects:
            return []
        subjects.sort(key=lambda s: (str(s["name"]).lower(), s["id"]))
        return [CandidateAlert(self.rule_type.value, UrgencyBucket.LOW.value, subjects)]


def default_rules() -> list[AlertRule]:
    return [PregnancyCheckDueRule(), DeliveryImminentRule(), VaccinationDueRule(), LowStockRule()]
