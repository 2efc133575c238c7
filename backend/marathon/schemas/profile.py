"""Runner profile and dashboard schemas."""

from datetime import date, datetime

from pydantic import Field

from marathon.schemas.common import BaseSchema
from marathon.schemas.race import AvailableRaceResponse
from marathon.schemas.registration import RegistrationResponse
from marathon.schemas.result import ResultResponse


class RunnerProfileStatistics(BaseSchema):
    """Aggregated registration and performance figures."""

    total_registrations: int = 0
    active_registrations: int = 0
    completed_races: int = 0
    cancelled_registrations: int = 0

    total_races_finished: int = 0
    total_distance_run: float = Field(0.0, description="km")
    top_3_finishes: int = 0
    top_10_finishes: int = 0

    best_5k: str | None = None
    best_10k: str | None = None
    best_half_marathon: str | None = None
    best_marathon: str | None = None

    days_since_joined: int = 0
    years_active: int = 0


class RecentActivity(BaseSchema):
    activity_type: str  # Registration / Result
    description: str
    activity_date: datetime
    icon: str | None = None
    badge_class: str | None = None


class PersonalRecord(BaseSchema):
    """Best time for one distance."""

    distance_name: str
    distance_in_km: float
    best_time_seconds: float
    formatted_time: str
    race_name: str
    race_date: datetime
    average_pace: str | None = None


class RunnerProfileResponse(BaseSchema):
    """Runner profile with statistics."""

    id: int
    full_name: str
    email: str
    phone_number: str | None = None
    date_of_birth: date | None = None
    gender: str | None = None
    age: int | None = None
    is_active: bool
    created_at: datetime

    statistics: RunnerProfileStatistics
    recent_activities: list[RecentActivity] = Field(default_factory=list)
    personal_records: list[PersonalRecord] = Field(default_factory=list)


class RunnerDashboardStatistics(BaseSchema):
    total_registrations: int = 0
    completed_races: int = 0
    upcoming_races: int = 0
    pending_registrations: int = 0


class RunnerDashboardResponse(BaseSchema):
    """Dashboard tabs: statistics, available races, registrations, results."""

    statistics: RunnerDashboardStatistics
    available_races: list[AvailableRaceResponse] = Field(default_factory=list)
    my_registrations: list[RegistrationResponse] = Field(default_factory=list)
    my_results: list[ResultResponse] = Field(default_factory=list)
