#!/usr/bin/env python3
"""
Run one alert evaluation cycle and/or one session trigger check.

For cron-style deployments where the two periodic jobs are invoked independently
instead of running inside the API process.

Usage:
  python scripts/run_alert_check.py [--alerts] [--sessions]

With no flags both jobs run once.
"""

import asyncio
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.config.settings import get_settings
from src.infrastructure.db.session import (
    SQLAlchemyUnitOfWork,
    create_engine,
    create_session_factory,
)
from src.infrastructure.push.factory import build_delivery_channel
from src.infrastructure.scheduler.alert_tasks import (
    SessionTriggerChecker,
    run_alert_evaluation,
    run_session_check,
)
from src.config.logging import configure_logging
from src.utils.datetime_tz import resolve_tz


async def run(alerts: bool, sessions: bool) -> int:
    settings = get_settings()
    configure_logging(settings.log_level)
    engine = create_engine(settings.database_url)
    session_factory = create_session_factory(engine)
    channel = build_delivery_channel(settings)
    tz = resolve_tz(settings.farm_timezone)

    def uow_factory():
        return SQLAlchemyUnitOfWork(session_factory)

    exit_code = 0
    try:
        if alerts:
            result = await run_alert_evaluation(uow_factory, channel=channel, tz=tz)
            if result is None:
                print("❌ Alert evaluation failed, see logs")
                exit_code = 1
            else:
                sent = result.delivery.sent if result.delivery else 0
                print(
                    f"✅ Alerts for {result.evaluation_date}: {len(result.alerts)} active, "
                    f"{len(result.new_alert_ids)} new, {sent} notifications sent"
                )
                for failure in result.failures:
                    print(f"⚠️  Rule {failure.rule_type} failed: {failure.error}")
        if sessions:
            # A fresh checker has no fire history, so this only fires on an exact minute
            # match unless the stored trigger mode is catch_up.
            fired = await run_session_check(
                uow_factory, SessionTriggerChecker(), channel=channel, tz=tz
            )
            print(f"✅ Session triggers fired: {', '.join(fired) if fired else 'none'}")
    finally:
        await engine.dispose()
    return exit_code


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Run the periodic alert jobs once")
    parser.add_argument("--alerts", action="store_true", help="Evaluate alert rules")
    parser.add_argument("--sessions", action="store_true", help="Check milking session times")
    args = parser.parse_args()

    run_both = not (args.alerts or args.sessions)
    sys.exit(asyncio.run(run(args.alerts or run_both, args.sessions or run_both)))
