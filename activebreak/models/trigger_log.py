from datetime import datetime

from sqlalchemy import DateTime, Integer, Index
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class TriggerLogEntry(Base):
    """Журнал срабатываний. Только append: движок не обновляет и не удаляет записи."""
    __tablename__ = "reminder_trigger_logs"
    __table_args__ = (
        Index("ix_trigger_logs_lookup", "user_id", "activity_type_id", "triggered_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False)
    activity_type_id: Mapped[int] = mapped_column(Integer, nullable=False)
    triggered_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)

    def __repr__(self) -> str:
        return (
            f"<TriggerLogEntry user={self.user_id} activity={self.activity_type_id} "
            f"at={self.triggered_at}>"
        )
