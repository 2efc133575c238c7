"""Data access repositories."""

from marathon.repositories.base import BaseRepository
from marathon.repositories.race_repository import RaceRepository
from marathon.repositories.registration_repository import (
    RegistrationContext,
    RegistrationRepository,
)
from marathon.repositories.result_repository import ResultContext, ResultRepository
from marathon.repositories.user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "RaceRepository",
    "RegistrationRepository",
    "RegistrationContext",
    "ResultRepository",
    "ResultContext",
]
