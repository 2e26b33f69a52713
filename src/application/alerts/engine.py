from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from src.application.alerts.rules import AlertRule, default_rules
from src.domain.models.alert import CandidateAlert
from src.domain.models.alert_config import AlertConfig

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RuleFailure:
    rule_type: str
    error: str


@dataclass(slots=True)
class RuleEngineResult:
    candidates: list[CandidateAlert] = field(default_factory=list)
    failures: list[RuleFailure] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)


class RuleEngine:
    """Runs every rule in isolation; a failing rule contributes no candidates."""

    def __init__(self, rules: Iterable[AlertRule] | None = None) -> None:
        self.rules = list(rules) if rules is not None else default_rules()

    async def evaluate(self, source: Any, config: AlertConfig, today: date) -> RuleEngineResult:
        result = RuleEngineResult()
        for rule in self.rules:
            name = rule.rule_type.value
            if not rule.enabled(config):
                logger.debug("Rule %s disabled by configuration", name)
                result.skipped.append(name)
                continue
            try:
                rows = await rule.fetch(source, config, today)
                found = rule.evaluate(rows, config, today)
            except Exception as exc:
                logger.error("Alert rule %s failed: %s", name, exc, exc_info=True)
                result.failures.append(RuleFailure(rule_type=name, error=str(exc)))
                await _reset_source(source)
                continue
            logger.debug("Rule %s produced %d candidate(s)", name, len(found))
            result.candidates.extend(found)
        return result


async def _reset_source(source: Any) -> None:
    # A failed query can leave the session unusable for the remaining rules.
    rollback = getattr(source, "rollback", None)
    if rollback is None:
        return
    try:
        await rollback()
    except Exception as exc:
        logger.warning("Could not reset record source after rule failure: %s", exc)
