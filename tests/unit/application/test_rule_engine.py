from __future__ import annotations

from datetime import date
from types import SimpleNamespace

from src.application.alerts.engine import RuleEngine
from src.domain.models.alert import CandidateAlert
from src.domain.models.alert_config import AlertConfig
from src.domain.value_objects.rule_type import RuleType

TODAY = date(2026, 3, 10)


class StaticRule:
    def __init__(self, rule_type: RuleType, *, enabled: bool = True, error=None) -> None:
        self.rule_type = rule_type
        self._enabled = enabled
        self._error = error

    def enabled(self, config):
        return self._enabled

    async def fetch(self, source, config, today):
        if self._error:
            raise self._error
        return ["row"]

    def evaluate(self, rows, config, today):
        return [CandidateAlert(self.rule_type.value, "due", [{"row": r} for r in rows])]


def make_source():
    calls = []

    async def rollback():
        calls.append("rollback")

    return SimpleNamespace(rollback=rollback, calls=calls)


async def test_failing_rule_is_isolated_and_logged(caplog):
    source = make_source()
    engine = RuleEngine(
        [
            StaticRule(RuleType.PREGNANCY_CHECK_DUE, error=RuntimeError("db down")),
            StaticRule(RuleType.LOW_STOCK),
        ]
    )

    result = await engine.evaluate(source, AlertConfig(), TODAY)

    assert [c.rule_type for c in result.candidates] == ["low_stock"]
    assert len(result.failures) == 1
    assert result.failures[0].rule_type == "pregnancy_check_due"
    assert "db down" in result.failures[0].error
    assert source.calls == ["rollback"]
    assert "Alert rule pregnancy_check_due failed" in caplog.text


async def test_disabled_rules_are_skipped():
    engine = RuleEngine(
        [StaticRule(RuleType.VACCINATION_DUE, enabled=False), StaticRule(RuleType.LOW_STOCK)]
    )
    result = await engine.evaluate(make_source(), AlertConfig(), TODAY)
    assert result.skipped == ["vaccination_due"]
    assert len(result.candidates) == 1
    assert result.failures == []
