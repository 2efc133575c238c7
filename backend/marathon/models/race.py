"""Race and distance category models."""

import enum
from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from marathon.database import Base
from marathon.models.base import TimestampMixin


class RaceStatus(str, enum.Enum):
    """Race moderation status."""

    PENDING = "Pending"
    APPROVED = "Approved"
    CANCELLED = "Cancelled"
    REJECTED = "Rejected"


class Race(Base, TimestampMixin):
    """Race table model."""

    __tablename__ = "races"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    location: Mapped[str] = mapped_column(String(300), nullable=False)
    race_date: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    organizer_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    status: Mapped[str] = mapped_column(
        String(50), nullable=False, default=RaceStatus.PENDING.value
    )

    # Owned distance categories; distances refer back by race_id only
    distances = relationship(
        "RaceDistance",
        cascade="all, delete-orphan",
        order_by="RaceDistance.distance_in_km",
    )

    def is_upcoming(self, now: datetime) -> bool:
        """True while the race is strictly in the future."""
        return self.race_date > now

    def __repr__(self) -> str:
        return f"<Race(id={self.id}, name='{self.name}', race_date={self.race_date})>"


class RaceDistance(Base, TimestampMixin):
    """Distance category table model (a timed race within a race)."""

    __tablename__ = "race_distances"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    race_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("races.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)  # e.g. Half Marathon
    distance_in_km: Mapped[float] = mapped_column(Float, nullable=False)
    registration_fee: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    max_participants: Mapped[int] = mapped_column(Integer, nullable=False)
    start_time: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    __table_args__ = (
        CheckConstraint("distance_in_km > 0", name="check_distance_positive"),
        CheckConstraint("registration_fee >= 0", name="check_fee_non_negative"),
        CheckConstraint("max_participants > 0", name="check_max_participants_positive"),
    )

    def __repr__(self) -> str:
        return f"<RaceDistance(id={self.id}, race_id={self.race_id}, name='{self.name}')>"
