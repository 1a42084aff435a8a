# activebreak/reminders/protocols.py
"""
Внешние хранилища и каналы, которые нужны движку.
Реализации на SQLAlchemy лежат в activebreak.repositories, канал Telegram:
в activebreak.services.notification_service. Все ошибки хранилищ должны
приходить как StoreUnavailable.
"""
from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence

from activebreak.reminders.domain import SendResult


class RuleStore(Protocol):
    async def list_enabled_rules(self, user_id: int) -> Sequence: ...


class ActivityStore(Protocol):
    async def find_in_range(
        self, user_id: int, activity_type_id: int, start: datetime, end: datetime
    ) -> Sequence: ...


class TriggerLogStore(Protocol):
    async def find_recent(
        self, user_id: int, activity_type_id: int, since: datetime
    ) -> Sequence: ...

    async def append(
        self, user_id: int, activity_type_id: int, triggered_at: datetime
    ) -> None: ...


class ActivityCatalog(Protocol):
    async def name_of(self, activity_type_id: int) -> str | None: ...


class NotificationSink(Protocol):
    async def send(self, notification_id: int, title: str, body: str) -> SendResult: ...
