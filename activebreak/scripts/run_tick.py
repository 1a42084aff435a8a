# activebreak/scripts/run_tick.py
"""
Ручной прогон одного тика для пользователя.
Запуск:
    python -m activebreak.scripts.run_tick 42
    python -m activebreak.scripts.run_tick 42 --at 2025-01-02T09:05 --dry-run
    python -m activebreak.scripts.run_tick 42 --explain
"""
from __future__ import annotations

import argparse
import asyncio
import json
from datetime import datetime

from activebreak.config import settings
from activebreak.container import build_dispatcher, init_db
from activebreak.core.logging import setup_logging
from activebreak.db import SessionLocal, engine
from activebreak.repositories.rule_repo import RuleRepo
from activebreak.services.notification_service import LoggingNotificationSink
from activebreak.utils.dates import now_local


def _parse_args(argv=None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Run one reminder tick for a user")
    p.add_argument("user_id", type=int)
    p.add_argument("--at", type=datetime.fromisoformat, default=None,
                   help="evaluation instant, ISO format (default: now in REMINDER_TZ)")
    p.add_argument("--dry-run", action="store_true", help="evaluate only, no notifications, no log")
    p.add_argument("--explain", action="store_true", help="print every gate for every rule")
    p.add_argument("--init-db", action="store_true", help="create tables before running")
    return p.parse_args(argv)


async def run(args: argparse.Namespace) -> int:
    if args.init_db:
        await init_db()

    now = args.at or now_local(settings.REMINDER_TZ)
    async with SessionLocal() as session:
        dispatcher = build_dispatcher(session, LoggingNotificationSink(args.user_id))

        if args.explain:
            rules = await RuleRepo(session).list_enabled_rules(args.user_id)
            for rule in rules:
                report = await dispatcher.evaluator.explain(rule, now)
                print(json.dumps(report, ensure_ascii=False))
            return 0

        if args.dry_run:
            verdicts = await dispatcher.preview(args.user_id, now)
        else:
            verdicts = await dispatcher.run_tick(args.user_id, now)

    for v in verdicts:
        delivered = "" if v.delivered is None else f" delivered={v.delivered}"
        print(f"rule={v.rule_id} activity={v.activity_type_id} {v.outcome.value}{delivered} :: {v.reason}")
    return 0


def main(argv=None) -> int:
    setup_logging()
    args = _parse_args(argv)

    async def _main() -> int:
        try:
            return await run(args)
        finally:
            await engine.dispose()

    return asyncio.run(_main())


if __name__ == "__main__":
    raise SystemExit(main())
