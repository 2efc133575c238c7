"""Registration schemas."""

from datetime import date, datetime

from pydantic import Field

from marathon.schemas.common import BaseSchema
from marathon.schemas.race import RaceDistanceResponse, RaceSummaryResponse
from marathon.schemas.result import ResultResponse


class RegistrationCreate(BaseSchema):
    """Schema for registering to a distance category."""

    race_distance_id: int = Field(..., description="Distance category ID")
    race_id: int | None = Field(None, description="Race ID, checked against the distance")


class RegistrationResponse(BaseSchema):
    """Registration with race and distance echo."""

    id: int
    registration_date: datetime
    payment_status: str
    bib_number: str | None = None

    race_id: int
    race_name: str
    location: str
    race_date: datetime
    race_image_url: str | None = None

    race_distance_id: int
    distance_name: str
    distance_in_km: float
    registration_fee: float
    start_time: datetime

    can_cancel: bool
    has_result: bool
    display_status: str


class RunnerInfoResponse(BaseSchema):
    """Runner contact details."""

    id: int
    full_name: str
    email: str
    phone_number: str | None = None
    date_of_birth: date | None = None
    gender: str | None = None
    age: int | None = None


class RegistrationDetailResponse(BaseSchema):
    """Registration with full race, distance, runner and result."""

    id: int
    registration_date: datetime
    payment_status: str
    bib_number: str | None = None
    can_cancel: bool
    display_status: str

    race: RaceSummaryResponse
    race_distance: RaceDistanceResponse
    runner: RunnerInfoResponse
    result: ResultResponse | None = None
