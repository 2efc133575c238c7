"""Race catalog service (read-only from the registration side)."""

from collections.abc import Callable
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from marathon.exceptions import NotFoundError
from marathon.models import Race, RaceDistance
from marathon.models.base import utcnow
from marathon.repositories import RaceRepository, RegistrationRepository
from marathon.schemas import (
    AvailableRaceResponse,
    Page,
    RaceDistanceResponse,
    RaceSummaryResponse,
)


def to_distance_response(distance: RaceDistance, occupancy: int) -> RaceDistanceResponse:
    """Convert RaceDistance model to RaceDistanceResponse."""
    return RaceDistanceResponse(
        id=distance.id,
        race_id=distance.race_id,
        name=distance.name,
        distance_in_km=distance.distance_in_km,
        registration_fee=distance.registration_fee,
        max_participants=distance.max_participants,
        start_time=distance.start_time,
        current_participants=occupancy,
    )


def to_race_summary(race: Race) -> RaceSummaryResponse:
    """Convert Race model to RaceSummaryResponse."""
    return RaceSummaryResponse(
        id=race.id,
        name=race.name,
        description=race.description,
        location=race.location,
        race_date=race.race_date,
        image_url=race.image_url,
        status=race.status,
        organizer_id=race.organizer_id,
    )


class CatalogService:
    """Service for race and distance category lookups."""

    def __init__(self, session: AsyncSession, clock: Callable[[], datetime] = utcnow):
        self.session = session
        self.clock = clock
        self.race_repo = RaceRepository(session)
        self.registration_repo = RegistrationRepository(session)

    async def get_distance_category(
        self, distance_id: int, for_update: bool = False
    ) -> tuple[RaceDistance, Race]:
        """Get a distance category and its race, or raise NotFoundError."""
        found = await self.race_repo.get_distance(distance_id, for_update=for_update)
        if found is None:
            raise NotFoundError("Race distance not found")
        return found

    async def get_available_races(
        self, runner_id: int, skip: int = 0, limit: int = 10
    ) -> list[AvailableRaceResponse]:
        """Approved upcoming races annotated with occupancy for one runner."""
        races = await self.race_repo.get_available_races(self.clock(), skip=skip, limit=limit)

        distance_ids = [d.id for race in races for d in race.distances]
        occupancy = await self.race_repo.get_occupancy_map(distance_ids)
        registered = await self.registration_repo.get_active_distance_ids(runner_id, distance_ids)

        return [
            AvailableRaceResponse(
                id=race.id,
                name=race.name,
                description=race.description,
                location=race.location,
                race_date=race.race_date,
                image_url=race.image_url,
                status=race.status,
                organizer_id=race.organizer_id,
                distances=[to_distance_response(d, occupancy[d.id]) for d in race.distances],
                is_already_registered=any(d.id in registered for d in race.distances),
            )
            for race in races
        ]

    async def list_available_races(
        self, runner_id: int, page: int = 1, page_size: int = 10
    ) -> Page[AvailableRaceResponse]:
        """Page of races a runner can register for."""
        items = await self.get_available_races(
            runner_id, skip=(page - 1) * page_size, limit=page_size
        )
        total = await self.race_repo.count_available_races(self.clock())
        return Page[AvailableRaceResponse](
            items=items, total_count=total, page_number=page, page_size=page_size
        )
