# activebreak/main.py
from __future__ import annotations

import asyncio
import logging
import signal
from typing import Optional

from aiogram import Bot
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode
from apscheduler.schedulers.asyncio import AsyncIOScheduler

from activebreak.config import settings
from activebreak.core.logging import setup_logging
from activebreak.container import init_db
from activebreak.db import engine
from activebreak.scheduler.jobs import reminder_tick_job, setup_scheduler

# ---- Логи первыми ----
setup_logging()
logger = logging.getLogger("activebreak.main")


async def main() -> None:
    logger.info(
        "boot: starting with LOG_LEVEL=%s tz=%s tick=%sm bot=%s",
        settings.log_level,
        settings.REMINDER_TZ,
        settings.TICK_INTERVAL_MINUTES,
        bool(settings.BOT_TOKEN),
    )

    bot: Optional[Bot] = None
    if settings.BOT_TOKEN:
        bot = Bot(
            token=settings.BOT_TOKEN,
            default=DefaultBotProperties(parse_mode=ParseMode.HTML),
        )
    else:
        logger.warning("BOT_TOKEN is empty: reminders go to the log only")

    # DB init: в проде миграции через Alembic, create_all только если явно включили
    if settings.INIT_DB_ON_START:
        try:
            await init_db()
            logger.info("DB init done (create_all enabled by ENV)")
        except Exception:
            logger.exception("DB init failed (dev-only path)")
    else:
        logger.info("DB init skipped (use alembic upgrade head)")

    # ---------- Scheduler ----------
    scheduler = AsyncIOScheduler(timezone=settings.REMINDER_TZ)
    setup_scheduler(scheduler, bot)
    scheduler.start()

    # первый тик сразу, не ждём интервала
    await reminder_tick_job(bot)

    # Корректное завершение по сигналам
    stop_evt = asyncio.Event()
    loop = asyncio.get_running_loop()

    def _stop(*_: object) -> None:
        stop_evt.set()

    for sig in (signal.SIGTERM, signal.SIGINT):
        try:
            loop.add_signal_handler(sig, _stop)
        except NotImplementedError:
            pass

    await stop_evt.wait()

    # ---------- Shutdown ----------
    try:
        scheduler.shutdown(wait=False)
    except Exception:
        logger.exception("scheduler shutdown failed")

    if bot is not None:
        try:
            await bot.session.close()
        except Exception:
            logger.exception("bot session close failed")

    try:
        await engine.dispose()
    except Exception:
        logger.exception("engine dispose failed")


if __name__ == "__main__":
    asyncio.run(main())
