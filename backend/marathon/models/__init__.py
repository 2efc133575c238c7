"""SQLAlchemy models."""

from marathon.models.race import Race, RaceDistance, RaceStatus
from marathon.models.registration import PaymentStatus, Registration, Result, ResultStatus
from marathon.models.user import User, UserRole

__all__ = [
    "User",
    "UserRole",
    "Race",
    "RaceDistance",
    "RaceStatus",
    "Registration",
    "Result",
    "PaymentStatus",
    "ResultStatus",
]
