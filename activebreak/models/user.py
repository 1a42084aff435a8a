# activebreak/models/user.py
from __future__ import annotations

from sqlalchemy import Column, Integer, BigInteger, String, Boolean, DateTime, func

from activebreak.models.base import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    # куда слать напоминания; у локальных пользователей может не быть
    tg_id = Column(BigInteger, nullable=True, index=True, unique=True)

    username = Column(String(64), nullable=True)
    language_code = Column(String(10), nullable=True)

    blocked = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=False), nullable=False, server_default=func.now())
