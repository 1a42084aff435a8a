from datetime import datetime

from sqlalchemy import Boolean, DateTime, Integer, Index
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class ActivityRecord(Base):
    __tablename__ = "activity_records"
    __table_args__ = (
        Index("ix_activity_records_lookup", "user_id", "activity_type_id", "begin_time"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False)
    activity_type_id: Mapped[int] = mapped_column(Integer, nullable=False)
    duration_minutes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    calories_burned: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    begin_time: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)
    end_time: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)
    deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
