from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from activebreak.models.reminder_rule import ReminderRule
from activebreak.repositories._guard import store_call


class RuleRepo:
    def __init__(self, s: AsyncSession) -> None:
        self.s = s

    @store_call("list_enabled_rules")
    async def list_enabled_rules(self, user_id: int) -> list[ReminderRule]:
        q = await self.s.execute(
            select(ReminderRule)
            .where(ReminderRule.user_id == user_id)
            .where(ReminderRule.enabled.is_(True))
            .where(ReminderRule.deleted.is_(False))
            .order_by(ReminderRule.id)
        )
        return list(q.scalars().all())

    @store_call("list_users_with_enabled_rules")
    async def list_users_with_enabled_rules(self) -> list[int]:
        q = await self.s.execute(
            select(ReminderRule.user_id)
            .where(ReminderRule.enabled.is_(True))
            .where(ReminderRule.deleted.is_(False))
            .distinct()
            .order_by(ReminderRule.user_id)
        )
        return list(q.scalars().all())
