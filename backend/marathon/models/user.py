"""User model."""

import enum
from datetime import date

from sqlalchemy import Boolean, Date, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from marathon.database import Base
from marathon.models.base import TimestampMixin


class UserRole(str, enum.Enum):
    """User role enum."""

    RUNNER = "Runner"
    ORGANIZER = "Organizer"
    ADMIN = "Admin"


class User(Base, TimestampMixin):
    """User table model (runners, organizers and admins)."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    full_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(256), nullable=False, unique=True)
    phone_number: Mapped[str | None] = mapped_column(String(20), nullable=True)
    date_of_birth: Mapped[date | None] = mapped_column(Date, nullable=True)
    gender: Mapped[str | None] = mapped_column(String(10), nullable=True)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default=UserRole.RUNNER.value)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    # Bearer token issued by the auth service, exchanged by the web client
    api_token: Mapped[str | None] = mapped_column(String(64), nullable=True, unique=True)

    def age_on(self, today: date) -> int | None:
        """Age in whole years on the given day."""
        if self.date_of_birth is None:
            return None
        dob = self.date_of_birth
        return today.year - dob.year - ((today.month, today.day) < (dob.month, dob.day))

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"
