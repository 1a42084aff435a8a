from sqlalchemy import Boolean, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base


class PhysicalActivity(Base):
    __tablename__ = "physical_activities"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    calories_per_minute: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    default_duration: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    names = relationship(
        "PhysicalActivityName",
        back_populates="activity",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<PhysicalActivity id={self.id} name={self.name}>"


class PhysicalActivityName(Base):
    """Локализованное название активности (en / zh)."""
    __tablename__ = "physical_activity_names"
    __table_args__ = (UniqueConstraint("activity_type_id", "language_code"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    activity_type_id: Mapped[int] = mapped_column(
        ForeignKey("physical_activities.id"), nullable=False, index=True
    )
    language_code: Mapped[str] = mapped_column(String(10), nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)

    activity = relationship("PhysicalActivity", back_populates="names")
