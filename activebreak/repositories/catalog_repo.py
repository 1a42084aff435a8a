from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from activebreak.models.physical_activity import PhysicalActivity, PhysicalActivityName
from activebreak.repositories._guard import store_call


class CatalogRepo:
    """Справочник активностей: человекочитаемое имя по id, с учётом языка."""

    def __init__(self, s: AsyncSession, language: str = "en") -> None:
        self.s = s
        self.language = language

    @store_call("name_of")
    async def name_of(self, activity_type_id: int) -> str | None:
        q = await self.s.execute(
            select(PhysicalActivityName.name).where(
                PhysicalActivityName.activity_type_id == activity_type_id,
                PhysicalActivityName.language_code == self.language,
            )
        )
        localized = q.scalar_one_or_none()
        if localized:
            return localized

        # нет перевода, берём базовое имя
        q = await self.s.execute(
            select(PhysicalActivity.name).where(PhysicalActivity.id == activity_type_id)
        )
        return q.scalar_one_or_none()
