from __future__ import annotations

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from activebreak.models.trigger_log import TriggerLogEntry
from activebreak.repositories._guard import store_call


class TriggerLogRepo:
    """Журнал срабатываний: только чтение свежих записей и добавление новых."""

    def __init__(self, s: AsyncSession) -> None:
        self.s = s

    @store_call("find_recent")
    async def find_recent(
        self, user_id: int, activity_type_id: int, since: datetime
    ) -> list[TriggerLogEntry]:
        q = await self.s.execute(
            select(TriggerLogEntry)
            .where(
                TriggerLogEntry.user_id == user_id,
                TriggerLogEntry.activity_type_id == activity_type_id,
                TriggerLogEntry.triggered_at > since,
            )
            .order_by(TriggerLogEntry.triggered_at.desc())
        )
        return list(q.scalars().all())

    @store_call("append")
    async def append(self, user_id: int, activity_type_id: int, triggered_at: datetime) -> TriggerLogEntry:
        e = TriggerLogEntry(
            user_id=user_id,
            activity_type_id=activity_type_id,
            triggered_at=triggered_at,
        )
        self.s.add(e)
        await self.s.commit()
        await self.s.refresh(e)
        return e
