"""Registration repository."""

from datetime import datetime
from typing import NamedTuple

from sqlalchemy import DateTime, Integer, String, func, insert, literal, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased, selectinload

from marathon.models import PaymentStatus, Race, RaceDistance, Registration
from marathon.repositories.base import BaseRepository


class RegistrationContext(NamedTuple):
    """A registration joined with its distance category and race."""

    registration: Registration
    distance: RaceDistance
    race: Race


def _occupancy_below(distance: RaceDistance):
    """SQL condition: the category still has a free slot."""
    counted = aliased(Registration)
    occupancy = (
        select(func.count(counted.id))
        .where(
            counted.race_distance_id == distance.id,
            counted.payment_status != PaymentStatus.CANCELLED.value,
        )
        .scalar_subquery()
    )
    return occupancy < distance.max_participants


class RegistrationRepository(BaseRepository[Registration]):
    """Repository for Registration model."""

    def __init__(self, session: AsyncSession):
        super().__init__(Registration, session)

    def _context_query(self):
        return (
            select(Registration, RaceDistance, Race)
            .join(RaceDistance, Registration.race_distance_id == RaceDistance.id)
            .join(Race, RaceDistance.race_id == Race.id)
            .options(selectinload(Registration.result))
            .execution_options(populate_existing=True)
        )

    async def get_by_runner_and_distance(
        self, runner_id: int, distance_id: int
    ) -> Registration | None:
        """Get the most recent registration for a runner and distance, any status."""
        result = await self.session.execute(
            select(Registration)
            .where(
                Registration.runner_id == runner_id,
                Registration.race_distance_id == distance_id,
            )
            .order_by(Registration.registration_date.desc(), Registration.id.desc())
            .limit(1)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_context(self, registration_id: int) -> RegistrationContext | None:
        """Get a registration with its distance, race and result."""
        result = await self.session.execute(
            self._context_query().where(Registration.id == registration_id)
        )
        row = result.one_or_none()
        return RegistrationContext(*row) if row else None

    async def get_by_runner(
        self, runner_id: int, skip: int = 0, limit: int | None = None
    ) -> list[RegistrationContext]:
        """Get a runner's registrations, newest first."""
        query = (
            self._context_query()
            .where(Registration.runner_id == runner_id)
            .order_by(Registration.registration_date.desc(), Registration.id.desc())
            .offset(skip)
        )
        if limit is not None:
            query = query.limit(limit)

        result = await self.session.execute(query)
        return [RegistrationContext(*row) for row in result.all()]

    async def count_by_runner(self, runner_id: int) -> int:
        """Count a runner's registrations, any status."""
        return await self.count(filters={"runner_id": runner_id})

    async def get_active_distance_ids(self, runner_id: int, distance_ids: list[int]) -> set[int]:
        """Subset of distance ids the runner holds a non-cancelled registration for."""
        if not distance_ids:
            return set()

        result = await self.session.execute(
            select(Registration.race_distance_id).where(
                Registration.runner_id == runner_id,
                Registration.race_distance_id.in_(distance_ids),
                Registration.payment_status != PaymentStatus.CANCELLED.value,
            )
        )
        return set(result.scalars().all())

    async def insert_if_capacity(
        self, runner_id: int, distance: RaceDistance, now: datetime
    ) -> bool:
        """Insert a Pending registration only while the category has a free slot.

        The occupancy test and the insert are one statement. Returns False when
        the category was full at write time.
        """
        table = Registration.__table__
        row = select(
            literal(runner_id, Integer),
            literal(distance.id, Integer),
            literal(now, DateTime),
            literal(PaymentStatus.PENDING.value, String),
            literal(now, DateTime),
            literal(now, DateTime),
        ).where(_occupancy_below(distance))

        result = await self.session.execute(
            insert(table).from_select(
                [
                    table.c.runner_id,
                    table.c.race_distance_id,
                    table.c.registration_date,
                    table.c.payment_status,
                    table.c.created_at,
                    table.c.updated_at,
                ],
                row,
            )
        )
        return result.rowcount == 1

    async def reactivate_if_capacity(
        self, registration_id: int, distance: RaceDistance, now: datetime
    ) -> bool:
        """Turn a Cancelled registration back into Pending while a slot is free.

        The registration date restarts and the bib number is cleared. Returns
        False when the row is no longer Cancelled or the category is full.
        """
        result = await self.session.execute(
            update(Registration.__table__)
            .where(
                Registration.__table__.c.id == registration_id,
                Registration.__table__.c.payment_status == PaymentStatus.CANCELLED.value,
                _occupancy_below(distance),
            )
            .values(
                payment_status=PaymentStatus.PENDING.value,
                registration_date=now,
                bib_number=None,
                updated_at=now,
            )
        )
        return result.rowcount == 1

    async def mark_paid_if_pending(self, registration_id: int, now: datetime) -> bool:
        """Move a Pending registration to Paid. False when it is no longer Pending."""
        table = Registration.__table__
        result = await self.session.execute(
            update(table)
            .where(
                table.c.id == registration_id,
                table.c.payment_status == PaymentStatus.PENDING.value,
            )
            .values(payment_status=PaymentStatus.PAID.value, updated_at=now)
        )
        return result.rowcount == 1

    async def cancel_if_active(self, registration_id: int, now: datetime) -> bool:
        """Cancel a Pending or Paid registration. False when it is already Cancelled."""
        table = Registration.__table__
        result = await self.session.execute(
            update(table)
            .where(
                table.c.id == registration_id,
                table.c.payment_status != PaymentStatus.CANCELLED.value,
            )
            .values(payment_status=PaymentStatus.CANCELLED.value, updated_at=now)
        )
        return result.rowcount == 1

    async def claim_bib_number(self, registration_id: int, bib_number: str) -> bool:
        """Write a bib number onto a registration that has none yet."""
        table = Registration.__table__
        result = await self.session.execute(
            update(table)
            .where(table.c.id == registration_id, table.c.bib_number.is_(None))
            .values(bib_number=bib_number)
        )
        return result.rowcount == 1

    async def bib_number_exists(self, bib_number: str) -> bool:
        """Check whether a bib number is already held by any registration."""
        result = await self.session.execute(
            select(func.count(Registration.id)).where(Registration.bib_number == bib_number)
        )
        return result.scalar_one() > 0
