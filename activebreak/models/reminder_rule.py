# activebreak/models/reminder_rule.py
from __future__ import annotations

from datetime import datetime, time

from sqlalchemy import Boolean, DateTime, Integer, Time
from sqlalchemy.orm import Mapped, mapped_column

from activebreak.models.base import Base


class ReminderRule(Base):
    """
    Настройка напоминания пользователя для одного типа активности.
    Для движка только чтение; удаление мягкое (deleted), т.к. на правило
    могут ссылаться записи журнала срабатываний.
    """
    __tablename__ = "reminder_rules"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(Integer, index=True, nullable=False)
    activity_type_id: Mapped[int] = mapped_column(Integer, nullable=False)

    enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    # < 1440: минутный шаг; >= 1440: дневной режим через interval_days
    interval_minutes: Mapped[int] = mapped_column(Integer, nullable=False)
    interval_days: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    window_start: Mapped[time] = mapped_column(Time, nullable=False)
    window_end: Mapped[time] = mapped_column(Time, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False), default=datetime.now, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        default=datetime.now,
        onupdate=datetime.now,
        nullable=False,
    )
    deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    def __repr__(self) -> str:
        return (
            f"<ReminderRule id={self.id} user={self.user_id} activity={self.activity_type_id} "
            f"every={self.interval_minutes}m/{self.interval_days}d "
            f"window={self.window_start}-{self.window_end} enabled={self.enabled}>"
        )
