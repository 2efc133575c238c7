"""Race result repository."""

from typing import NamedTuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from marathon.models import Race, RaceDistance, Registration, Result
from marathon.repositories.base import BaseRepository


class ResultContext(NamedTuple):
    """A result joined with its registration, distance category and race."""

    result: Result
    registration: Registration
    distance: RaceDistance
    race: Race


class ResultRepository(BaseRepository[Result]):
    """Repository for Result model."""

    def __init__(self, session: AsyncSession):
        super().__init__(Result, session)

    def _runner_query(self, runner_id: int):
        return (
            select(Result, Registration, RaceDistance, Race)
            .join(Registration, Result.registration_id == Registration.id)
            .join(RaceDistance, Registration.race_distance_id == RaceDistance.id)
            .join(Race, RaceDistance.race_id == Race.id)
            .where(Registration.runner_id == runner_id)
        )

    async def get_by_registration(self, registration_id: int) -> Result | None:
        """Get the result recorded for a registration."""
        result = await self.session.execute(
            select(Result).where(Result.registration_id == registration_id)
        )
        return result.scalar_one_or_none()

    async def get_by_runner(
        self, runner_id: int, skip: int = 0, limit: int | None = None
    ) -> list[ResultContext]:
        """Get a runner's results, most recent race first."""
        query = (
            self._runner_query(runner_id)
            .order_by(Race.race_date.desc(), Result.id.desc())
            .offset(skip)
        )
        if limit is not None:
            query = query.limit(limit)

        result = await self.session.execute(query)
        return [ResultContext(*row) for row in result.all()]

    async def count_by_runner(self, runner_id: int) -> int:
        """Count a runner's results."""
        result = await self.session.execute(
            select(func.count(Result.id))
            .join(Registration, Result.registration_id == Registration.id)
            .where(Registration.runner_id == runner_id)
        )
        return result.scalar_one()
