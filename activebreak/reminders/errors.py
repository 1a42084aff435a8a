# activebreak/reminders/errors.py
from __future__ import annotations


class ReminderError(Exception):
    """Базовая ошибка движка напоминаний."""


class StoreUnavailable(ReminderError):
    """Чтение/запись в хранилище не удалась (БД недоступна, транзакция упала и т.п.)."""

    def __init__(self, operation: str, cause: BaseException | None = None):
        self.operation = operation
        self.cause = cause
        msg = f"store unavailable during {operation}"
        if cause is not None:
            msg += f": {cause!r}"
        super().__init__(msg)


class NotificationDeliveryFailed(ReminderError):
    """Канал уведомлений отказал или упал."""

    def __init__(self, notification_id: int, reason: str):
        self.notification_id = notification_id
        self.reason = reason
        super().__init__(f"notification {notification_id} not delivered: {reason}")


class InvalidRule(ReminderError):
    """Битые данные правила (неположительный интервал, нет окна и т.д.)."""

    def __init__(self, rule_id, reason: str):
        self.rule_id = rule_id
        self.reason = reason
        super().__init__(f"invalid rule {rule_id}: {reason}")
