"""Race and distance category repository."""

from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from marathon.models import PaymentStatus, Race, RaceDistance, RaceStatus, Registration
from marathon.repositories.base import BaseRepository


class RaceRepository(BaseRepository[Race]):
    """Repository for Race and RaceDistance models."""

    def __init__(self, session: AsyncSession):
        super().__init__(Race, session)

    async def get_distance(
        self, distance_id: int, for_update: bool = False
    ) -> tuple[RaceDistance, Race] | None:
        """Get a distance category together with its race.

        With ``for_update`` the distance row is locked until the transaction
        ends, which serializes registrations for that category on backends
        that support row locks.
        """
        query = (
            select(RaceDistance, Race)
            .join(Race, RaceDistance.race_id == Race.id)
            .where(RaceDistance.id == distance_id)
        )
        if for_update:
            query = query.with_for_update(of=RaceDistance)

        result = await self.session.execute(query)
        row = result.one_or_none()
        if row is None:
            return None
        return row[0], row[1]

    async def get_occupancy(self, distance_id: int) -> int:
        """Count non-cancelled registrations for a distance category."""
        result = await self.session.execute(
            select(func.count(Registration.id)).where(
                Registration.race_distance_id == distance_id,
                Registration.payment_status != PaymentStatus.CANCELLED.value,
            )
        )
        return result.scalar_one()

    async def get_occupancy_map(self, distance_ids: list[int]) -> dict[int, int]:
        """Occupancy for several distance categories; missing ids map to 0."""
        if not distance_ids:
            return {}

        result = await self.session.execute(
            select(Registration.race_distance_id, func.count(Registration.id))
            .where(
                Registration.race_distance_id.in_(distance_ids),
                Registration.payment_status != PaymentStatus.CANCELLED.value,
            )
            .group_by(Registration.race_distance_id)
        )
        counts = {distance_id: 0 for distance_id in distance_ids}
        counts.update({distance_id: count for distance_id, count in result.all()})
        return counts

    def _available_query(self, now: datetime):
        return select(Race).where(
            Race.status == RaceStatus.APPROVED.value,
            Race.race_date > now,
        )

    async def get_available_races(
        self, now: datetime, skip: int = 0, limit: int = 10
    ) -> list[Race]:
        """Get approved upcoming races with their distances, soonest first."""
        result = await self.session.execute(
            self._available_query(now)
            .options(selectinload(Race.distances))
            .order_by(Race.race_date, Race.id)
            .offset(skip)
            .limit(limit)
        )
        return list(result.scalars().all())

    async def count_available_races(self, now: datetime) -> int:
        """Count approved upcoming races."""
        subquery = self._available_query(now).subquery()
        result = await self.session.execute(select(func.count()).select_from(subquery))
        return result.scalar_one()
