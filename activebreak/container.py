# activebreak/container.py
from __future__ import annotations

import logging
from typing import Dict, Optional

from aiogram import Bot
from sqlalchemy.ext.asyncio import AsyncSession

from activebreak.config import Settings, settings as default_settings
from activebreak.db import engine
from activebreak.models.base import Base
import activebreak.models  # noqa: F401  регистрируем все таблицы в metadata

from activebreak.reminders.domain import EngineTuning
from activebreak.reminders.dispatcher import ReminderDispatcher
from activebreak.reminders.errors import StoreUnavailable
from activebreak.reminders.evaluator import RuleEvaluator
from activebreak.reminders.protocols import NotificationSink

from activebreak.repositories.activity_repo import ActivityRepo
from activebreak.repositories.catalog_repo import CatalogRepo
from activebreak.repositories.rule_repo import RuleRepo
from activebreak.repositories.trigger_log_repo import TriggerLogRepo
from activebreak.repositories.user_repo import UserRepo

from activebreak.services.notification_service import (
    LoggingNotificationSink,
    TelegramNotificationSink,
)

logger = logging.getLogger(__name__)

# chat_id -> {notification_id: message_id}, живёт до рестарта процесса
_telegram_slots: Dict[int, Dict[int, int]] = {}


async def init_db() -> None:
    """
    Dev-инициализация БД: создаём таблицы, если их нет.
    В проде используй alembic upgrade head.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def build_sink(
    session: AsyncSession,
    user_id: int,
    bot: Optional[Bot],
) -> tuple[NotificationSink, Optional[str]]:
    """
    Канал для пользователя + его язык (если известен).
    Нет бота или у пользователя нет tg_id, пишем в лог.
    """
    if bot is None:
        return LoggingNotificationSink(user_id), None

    try:
        user = await UserRepo(session).get(user_id)
    except StoreUnavailable:
        logger.warning("user lookup failed, falling back to log sink", extra={"user_id": user_id})
        return LoggingNotificationSink(user_id), None

    if user is None or user.tg_id is None or user.blocked:
        return LoggingNotificationSink(user_id), getattr(user, "language_code", None)
    chat_id = int(user.tg_id)
    sink = TelegramNotificationSink(bot, chat_id, slots=_telegram_slots.setdefault(chat_id, {}))
    return sink, user.language_code


def build_dispatcher(
    session: AsyncSession,
    sink: NotificationSink,
    *,
    language: Optional[str] = None,
    cfg: Settings = default_settings,
) -> ReminderDispatcher:
    """
    Единая сборка движка: репозитории на одной сессии + канал уведомлений.
    Все зависимости передаём явно.
    """
    lang = language if language in {"en", "zh"} else cfg.NOTIFICATION_LANGUAGE
    tuning = EngineTuning.from_settings(cfg)

    activities = ActivityRepo(session)
    trigger_log = TriggerLogRepo(session)

    return ReminderDispatcher(
        rules=RuleRepo(session),
        evaluator=RuleEvaluator(activities, trigger_log, tuning),
        trigger_log=trigger_log,
        catalog=CatalogRepo(session, language=lang),
        sink=sink,
        language=lang,
        fallback_activity_name=cfg.FALLBACK_ACTIVITY_NAME,
        tz=cfg.REMINDER_TZ,
    )
