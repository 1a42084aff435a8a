from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from activebreak.models.activity_record import ActivityRecord
from activebreak.repositories._guard import store_call


class ActivityRepo:
    def __init__(self, s: AsyncSession):
        self.s = s

    @store_call("find_in_range")
    async def find_in_range(
        self, user_id: int, activity_type_id: int, start: datetime, end: datetime
    ) -> list[ActivityRecord]:
        # границы включительно; удалённые записи не считаются
        q = await self.s.execute(
            select(ActivityRecord).where(
                ActivityRecord.user_id == user_id,
                ActivityRecord.activity_type_id == activity_type_id,
                ActivityRecord.begin_time >= start,
                ActivityRecord.begin_time <= end,
                ActivityRecord.deleted.is_(False),
            )
        )
        return list(q.scalars().all())
