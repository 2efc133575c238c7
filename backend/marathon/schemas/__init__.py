"""Pydantic schemas."""

from marathon.schemas.common import (
    ApiResponse,
    BaseSchema,
    Page,
    ResultStatusEnum,
    TimestampSchema,
)
from marathon.schemas.profile import (
    PersonalRecord,
    RecentActivity,
    RunnerDashboardResponse,
    RunnerDashboardStatistics,
    RunnerProfileResponse,
    RunnerProfileStatistics,
)
from marathon.schemas.race import (
    AvailableRaceResponse,
    RaceDistanceResponse,
    RaceSummaryResponse,
)
from marathon.schemas.registration import (
    RegistrationCreate,
    RegistrationDetailResponse,
    RegistrationResponse,
    RunnerInfoResponse,
)
from marathon.schemas.result import ResultCreate, ResultResponse

__all__ = [
    # Common
    "BaseSchema",
    "TimestampSchema",
    "Page",
    "ApiResponse",
    "ResultStatusEnum",
    # Race
    "RaceSummaryResponse",
    "RaceDistanceResponse",
    "AvailableRaceResponse",
    # Registration
    "RegistrationCreate",
    "RegistrationResponse",
    "RegistrationDetailResponse",
    "RunnerInfoResponse",
    # Result
    "ResultCreate",
    "ResultResponse",
    # Profile
    "RunnerProfileStatistics",
    "RunnerProfileResponse",
    "RecentActivity",
    "PersonalRecord",
    "RunnerDashboardStatistics",
    "RunnerDashboardResponse",
]
