"""Registration and result models."""

import enum
from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Float, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from marathon.database import Base
from marathon.models.base import TimestampMixin, utcnow


class PaymentStatus(str, enum.Enum):
    """Registration payment status."""

    PENDING = "Pending"
    PAID = "Paid"
    CANCELLED = "Cancelled"


class ResultStatus(str, enum.Enum):
    """Race outcome status."""

    DID_NOT_START = "DidNotStart"
    FINISHED = "Finished"
    DNF = "DNF"


class Registration(Base, TimestampMixin):
    """Registration table model: one runner in one distance category."""

    __tablename__ = "registrations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    runner_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    race_distance_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("race_distances.id"), nullable=False, index=True
    )
    registration_date: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    payment_status: Mapped[str] = mapped_column(
        String(50), nullable=False, default=PaymentStatus.PENDING.value
    )
    bib_number: Mapped[str | None] = mapped_column(String(10), nullable=True, unique=True)

    # Owned outcome, keyed by registration_id
    result = relationship("Result", uselist=False, cascade="all, delete-orphan")

    __table_args__ = (
        # A cancelled row is reactivated instead of duplicated, so one row per pair
        UniqueConstraint("runner_id", "race_distance_id", name="uq_runner_race_distance"),
        CheckConstraint(
            "payment_status IN ('Pending', 'Paid', 'Cancelled')",
            name="check_registration_payment_status",
        ),
    )

    @property
    def is_cancelled(self) -> bool:
        return self.payment_status == PaymentStatus.CANCELLED.value

    def __repr__(self) -> str:
        return (
            f"<Registration(id={self.id}, runner_id={self.runner_id}, "
            f"race_distance_id={self.race_distance_id}, status={self.payment_status})>"
        )


class Result(Base, TimestampMixin):
    """Result table model (at most one per registration)."""

    __tablename__ = "results"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    registration_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("registrations.id"), nullable=False, unique=True
    )
    completion_seconds: Mapped[float | None] = mapped_column(Float, nullable=True)
    overall_rank: Mapped[int | None] = mapped_column(Integer, nullable=True)
    gender_rank: Mapped[int | None] = mapped_column(Integer, nullable=True)
    age_category_rank: Mapped[int | None] = mapped_column(Integer, nullable=True)
    status: Mapped[str] = mapped_column(
        String(50), nullable=False, default=ResultStatus.DID_NOT_START.value
    )

    __table_args__ = (
        CheckConstraint(
            "status IN ('DidNotStart', 'Finished', 'DNF')", name="check_result_status"
        ),
    )

    @property
    def is_finished(self) -> bool:
        return self.status == ResultStatus.FINISHED.value

    def __repr__(self) -> str:
        return f"<Result(id={self.id}, registration_id={self.registration_id}, status={self.status})>"
