# activebreak/scheduler/jobs.py
"""
Адаптер к периодическому планировщику (APScheduler).
Движок про расписание ничего не знает: здесь только «дёрнуть run_tick
для каждого пользователя раз в N минут».
"""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from aiogram.client.bot import Bot
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from sqlalchemy.ext.asyncio import AsyncSession

from activebreak.config import settings
from activebreak.container import build_dispatcher, build_sink
from activebreak.db import SessionLocal
from activebreak.reminders.domain import Verdict
from activebreak.reminders.errors import StoreUnavailable
from activebreak.repositories.rule_repo import RuleRepo
from activebreak.utils.dates import now_local

logger = logging.getLogger(__name__)

TICK_JOB_ID = "reminder_tick_job"


async def _resolve_user_ids() -> List[int]:
    if settings.TICK_USER_IDS:
        return list(settings.TICK_USER_IDS)
    async with SessionLocal() as session:  # type: AsyncSession
        try:
            return await RuleRepo(session).list_users_with_enabled_rules()
        except StoreUnavailable:
            logger.exception("tick_users_not_loaded")
            return []


async def tick_user(user_id: int, bot: Optional[Bot]) -> List[Verdict]:
    """Один тик для одного пользователя: своя сессия, свой канал."""
    async with SessionLocal() as session:  # type: AsyncSession
        sink, language = await build_sink(session, user_id, bot)
        dispatcher = build_dispatcher(session, sink, language=language)
        return await dispatcher.run_tick(user_id, now_local(settings.REMINDER_TZ))


async def reminder_tick_job(bot: Optional[Bot], user_ids: Optional[Iterable[int]] = None) -> None:
    """
    Периодическая задача: для каждого пользователя прогоняем его правила.
    Падение на одном пользователе не останавливает остальных.
    """
    ids = list(user_ids) if user_ids is not None else await _resolve_user_ids()
    if not ids:
        return

    for user_id in ids:
        try:
            verdicts = await tick_user(user_id, bot)
        except Exception:
            logger.exception("tick_failed", extra={"user_id": user_id})
            continue
        fired = sum(1 for v in verdicts if v.fired)
        logger.info("tick_done: rules=%s fired=%s", len(verdicts), fired, extra={"user_id": user_id})


def setup_scheduler(scheduler: AsyncIOScheduler, bot: Optional[Bot]) -> None:
    """
    Регистрирует общую задачу-тик.
    Вызывается один раз при старте приложения.
    """
    scheduler.add_job(
        reminder_tick_job,
        trigger="interval",
        minutes=settings.TICK_INTERVAL_MINUTES,
        kwargs={"bot": bot},
        id=TICK_JOB_ID,
        replace_existing=True,
        coalesce=True,
        max_instances=1,          # тики не перекрываются
        misfire_grace_time=60,    # если проспали, даём минуту на отработку
    )


class ReminderScheduler:
    """
    Поштучное включение/выключение напоминаний для пользователя
    (когда он сам включил/выключил напоминания в настройках).
    """

    def __init__(self, scheduler: AsyncIOScheduler, bot: Optional[Bot]):
        self.scheduler = scheduler
        self.bot = bot

    @staticmethod
    def job_id(user_id: int) -> str:
        return f"reminder_tick_{user_id}"

    def is_running(self, user_id: int) -> bool:
        return self.scheduler.get_job(self.job_id(user_id)) is not None

    async def start(self, user_id: int, run_now: bool = True) -> List[Verdict]:
        self.scheduler.add_job(
            reminder_tick_job,
            trigger="interval",
            minutes=settings.TICK_INTERVAL_MINUTES,
            kwargs={"bot": self.bot, "user_ids": [user_id]},
            id=self.job_id(user_id),
            replace_existing=True,
            coalesce=True,
            max_instances=1,
            misfire_grace_time=60,
        )
        logger.info("reminders_started", extra={"user_id": user_id})
        if not run_now:
            return []
        # сразу одна проверка, не дожидаясь первого интервала
        return await tick_user(user_id, self.bot)

    def stop(self, user_id: int) -> bool:
        if not self.is_running(user_id):
            return False
        self.scheduler.remove_job(self.job_id(user_id))
        logger.info("reminders_stopped", extra={"user_id": user_id})
        return True
