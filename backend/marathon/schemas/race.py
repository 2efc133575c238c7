"""Race catalog schemas."""

from datetime import datetime

from pydantic import Field, computed_field

from marathon.schemas.common import BaseSchema


class RaceDistanceResponse(BaseSchema):
    """Distance category with its current occupancy."""

    id: int
    race_id: int
    name: str
    distance_in_km: float
    registration_fee: float
    max_participants: int
    start_time: datetime
    current_participants: int = 0

    @computed_field(alias="availableSlots")
    @property
    def available_slots(self) -> int:
        return max(self.max_participants - self.current_participants, 0)

    @computed_field(alias="isFull")
    @property
    def is_full(self) -> bool:
        return self.current_participants >= self.max_participants

    @computed_field(alias="percentageFilled")
    @property
    def percentage_filled(self) -> float:
        if self.max_participants <= 0:
            return 0.0
        return round(self.current_participants / self.max_participants * 100, 2)


class RaceSummaryResponse(BaseSchema):
    """Race metadata."""

    id: int
    name: str
    description: str | None = None
    location: str
    race_date: datetime
    image_url: str | None = None
    status: str
    organizer_id: int


class AvailableRaceResponse(RaceSummaryResponse):
    """Race open for registration, with its distance categories."""

    distances: list[RaceDistanceResponse] = Field(default_factory=list)
    is_already_registered: bool = False

    @computed_field(alias="totalParticipants")
    @property
    def total_participants(self) -> int:
        return sum(d.current_participants for d in self.distances)

    @computed_field(alias="availableSlots")
    @property
    def available_slots(self) -> int:
        return sum(d.available_slots for d in self.distances)
