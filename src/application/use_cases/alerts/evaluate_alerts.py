from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from uuid import UUID

from src.application.alerts.aggregator import aggregate
from src.application.alerts.engine import RuleEngine, RuleFailure
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.settings.alert_config import load_alert_config
from src.domain.models.alert import Alert
from src.infrastructure.services.alert_delivery_service import (
    AlertDeliveryService,
    DeliveryReport,
)

logger = logging.getLogger(__name__)

# Read/snooze state outlives its alert by this long before being pruned.
STATE_RETENTION_DAYS = 7


@dataclass(slots=True)
class EvaluationResult:
    evaluation_date: date
    alerts: list[Alert] = field(default_factory=list)
    new_alert_ids: list[UUID] = field(default_factory=list)
    failures: list[RuleFailure] = field(default_factory=list)
    delivery: DeliveryReport | None = None


async def execute(
    uow: UnitOfWork,
    *,
    today: date,
    now: datetime,
    engine: RuleEngine | None = None,
    delivery_service: AlertDeliveryService | None = None,
) -> EvaluationResult:
    """Run all rules, publish the day's alerts and deliver the ones not seen before.

    Re-running on the same day with the same data yields the same alert ids, so the
    feed converges and nothing is delivered twice.
    """
    config = await load_alert_config(uow)
    engine = engine or RuleEngine()
    outcome = await engine.evaluate(uow, config, today)
    alerts = aggregate(outcome.candidates, today, now, config)
    if outcome.failures:
        alerts.extend(await _carried_over(uow, alerts, outcome.failures, today))

    existing = await uow.alerts.existing_ids([a.id for a in alerts])
    published = await uow.alerts.replace(alerts)
    pruned = await uow.notification_states.prune(
        now - timedelta(days=STATE_RETENTION_DAYS), keep=[a.id for a in published]
    )
    if pruned:
        logger.debug("Pruned %d stale notification states", pruned)
    await uow.commit()

    result = EvaluationResult(
        evaluation_date=today,
        alerts=published,
        new_alert_ids=[a.id for a in published if a.id not in existing],
        failures=outcome.failures,
    )
    logger.info(
        "Alert evaluation %s: alerts=%d new=%d failed_rules=%d",
        today.isoformat(),
        len(published),
        len(result.new_alert_ids),
        len(outcome.failures),
    )

    if delivery_service is None or not result.new_alert_ids:
        return result
    try:
        recipients = await uow.recipients.list_recipients()
    except Exception as exc:
        logger.error("Could not load alert recipients: %s", exc, exc_info=True)
        return result
    new_ids = set(result.new_alert_ids)
    result.delivery = await delivery_service.deliver_alerts(
        [a for a in published if a.id in new_ids], recipients
    )
    await uow.commit()
    return result


async def _carried_over(
    uow: UnitOfWork, alerts: list[Alert], failures: list[RuleFailure], today: date
) -> list[Alert]:
    """Today's feed alerts of rules that failed this cycle, kept until the rule recovers."""
    failed = {f.rule_type for f in failures}
    computed = {a.id for a in alerts}
    kept = [
        a
        for a in await uow.alerts.list()
        if a.type in failed and a.evaluation_date == today and a.id not in computed
    ]
    if kept:
        logger.warning(
            "Keeping %d alert(s) from failed rules: %s", len(kept), ", ".join(sorted(failed))
        )
    return kept
