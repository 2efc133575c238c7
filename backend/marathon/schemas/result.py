"""Race result schemas."""

from datetime import datetime, timedelta

from pydantic import Field, computed_field, field_validator

from marathon.schemas.common import BaseSchema, ResultStatusEnum

MEDALS = {1: "gold", 2: "silver", 3: "bronze"}


class ResultCreate(BaseSchema):
    """Schema for recording a result.

    ``completionTime`` accepts seconds or ``HH:MM:SS``.
    """

    completion_time: timedelta | None = Field(None, description="Finish time")
    overall_rank: int | None = Field(None, ge=1)
    gender_rank: int | None = Field(None, ge=1)
    age_category_rank: int | None = Field(None, ge=1)
    status: ResultStatusEnum = ResultStatusEnum.DID_NOT_START

    @field_validator("completion_time")
    @classmethod
    def validate_completion_time(cls, v: timedelta | None) -> timedelta | None:
        if v is not None and v < timedelta(0):
            raise ValueError("Completion time cannot be negative")
        return v


class ResultResponse(BaseSchema):
    """Result with race and distance context."""

    id: int
    registration_id: int
    completion_seconds: float | None = None
    overall_rank: int | None = None
    gender_rank: int | None = None
    age_category_rank: int | None = None
    status: str

    race_id: int
    race_name: str
    location: str
    race_date: datetime
    distance_name: str
    distance_in_km: float

    formatted_time: str | None = None
    average_pace: str | None = Field(None, description="min/km")

    @computed_field(alias="isTopThree")
    @property
    def is_top_three(self) -> bool:
        return self.overall_rank is not None and self.overall_rank <= 3

    @computed_field
    @property
    def medal(self) -> str | None:
        return MEDALS.get(self.overall_rank) if self.overall_rank else None
