from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from activebreak.models.user import User
from activebreak.repositories._guard import store_call


class UserRepository:
    def __init__(self, session: AsyncSession):
        self.s = session

    @store_call("get_user")
    async def get(self, user_id: int) -> User | None:
        q = await self.s.execute(select(User).where(User.id == user_id))
        return q.scalar_one_or_none()


UserRepo = UserRepository
__all__ = ["UserRepository", "UserRepo"]
