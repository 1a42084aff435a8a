# activebreak/services/notification_service.py
from __future__ import annotations

import html
import logging
from typing import Dict, Optional

from aiogram.client.bot import Bot
from aiogram.enums import ParseMode
from aiogram.exceptions import TelegramAPIError, TelegramBadRequest

from activebreak.reminders.domain import SendResult

logger = logging.getLogger(__name__)


class TelegramNotificationSink:
    """
    Шлёт напоминания в личку Telegram.

    «Слот» уведомления (notification_id) эмулируем так: помним message_id
    последнего сообщения в слоте и удаляем его, только когда новое ушло.
    Память процесса: после рестарта старое сообщение просто останется.
    """

    def __init__(self, bot: Bot, chat_id: int, slots: Optional[Dict[int, int]] = None):
        self.bot = bot
        self.chat_id = chat_id
        # notification_id -> message_id; снаружи можно передать общий на процесс
        self._slots: Dict[int, int] = slots if slots is not None else {}

    async def _drop(self, message_id: int) -> None:
        try:
            await self.bot.delete_message(self.chat_id, message_id)
        except TelegramBadRequest:
            # уже удалено или старше 48 часов, для замены слота ок
            logger.debug("previous reminder %s not deleted", message_id)
        except TelegramAPIError as e:
            logger.warning("previous reminder %s not deleted: %s", message_id, e)

    async def send(self, notification_id: int, title: str, body: str) -> SendResult:
        text = f"<b>{html.escape(title)}</b>\n{html.escape(body)}"
        try:
            msg = await self.bot.send_message(self.chat_id, text, parse_mode=ParseMode.HTML)
        except TelegramAPIError as e:
            return SendResult.failure(f"telegram: {e}")
        previous = self._slots.get(notification_id)
        self._slots[notification_id] = msg.message_id
        if previous is not None:
            await self._drop(previous)
        return SendResult.success()


class LoggingNotificationSink:
    """Без бота: только пишем в лог. Для локального запуска и dry-run."""

    def __init__(self, user_id: int | None = None):
        self.user_id = user_id

    async def send(self, notification_id: int, title: str, body: str) -> SendResult:
        logger.info(
            "notification id=%s title=%r body=%r", notification_id, title, body,
            extra={"user_id": self.user_id if self.user_id is not None else "-"},
        )
        return SendResult.success()
