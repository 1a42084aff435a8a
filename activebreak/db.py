# activebreak/db.py
from __future__ import annotations

from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from activebreak.config import settings
from activebreak.models.base import Base  # реэкспорт для container/migrations


# === 1. Настройка движка ===
# Примеры DSN:
#   sqlite+aiosqlite:///./activebreak.db
#   postgresql+asyncpg://app:app@db:5432/app
engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.SQL_ECHO,
    pool_pre_ping=True,
)


# === 2. Сессия ===
SessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


__all__ = ["Base", "engine", "SessionLocal"]
