"""Registration ledger: signup, payment, cancellation and listing."""

import logging
from collections.abc import Callable
from datetime import datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from marathon.exceptions import (
    BadRequestError,
    CapacityExceededError,
    ConflictError,
    NotFoundError,
)
from marathon.models import PaymentStatus, RaceStatus, User
from marathon.models.base import utcnow
from marathon.repositories import RegistrationContext, RegistrationRepository
from marathon.schemas import (
    Page,
    RegistrationDetailResponse,
    RegistrationResponse,
    RunnerInfoResponse,
)
from marathon.services.bib_numbers import BibNumberGenerator
from marathon.services.catalog_service import (
    CatalogService,
    to_distance_response,
    to_race_summary,
)
from marathon.services.result_service import to_result_response

logger = logging.getLogger(__name__)


def can_cancel(payment_status: str, race_date: datetime, now: datetime) -> bool:
    return race_date > now and payment_status != PaymentStatus.CANCELLED.value


def display_status(payment_status: str, race_date: datetime, now: datetime) -> str:
    """Human-readable registration status."""
    if payment_status == PaymentStatus.PENDING.value:
        return "Pending Payment"
    if payment_status == PaymentStatus.PAID.value:
        return "Confirmed" if race_date > now else "Completed"
    if payment_status == PaymentStatus.CANCELLED.value:
        return "Cancelled"
    return payment_status


def to_registration_response(ctx: RegistrationContext, now: datetime) -> RegistrationResponse:
    """Convert a registration context to RegistrationResponse."""
    registration, distance, race = ctx
    return RegistrationResponse(
        id=registration.id,
        registration_date=registration.registration_date,
        payment_status=registration.payment_status,
        bib_number=registration.bib_number,
        race_id=race.id,
        race_name=race.name,
        location=race.location,
        race_date=race.race_date,
        race_image_url=race.image_url,
        race_distance_id=distance.id,
        distance_name=distance.name,
        distance_in_km=distance.distance_in_km,
        registration_fee=distance.registration_fee,
        start_time=distance.start_time,
        can_cancel=can_cancel(registration.payment_status, race.race_date, now),
        has_result=registration.result is not None,
        display_status=display_status(registration.payment_status, race.race_date, now),
    )


class RegistrationService:
    """Service for the registration lifecycle.

    Pending -> Paid (payment), Pending/Paid -> Cancelled (cancel),
    Cancelled -> Pending (registering again reuses the row).
    """

    def __init__(
        self,
        session: AsyncSession,
        clock: Callable[[], datetime] = utcnow,
        bib_generator: BibNumberGenerator | None = None,
    ):
        self.session = session
        self.clock = clock
        self.catalog = CatalogService(session, clock=clock)
        self.registration_repo = RegistrationRepository(session)
        self.bib_generator = bib_generator or BibNumberGenerator(session)

    async def register(
        self, runner_id: int, race_distance_id: int, race_id: int | None = None
    ) -> RegistrationResponse:
        """Register a runner for a distance category."""
        now = self.clock()
        distance, race = await self.catalog.get_distance_category(
            race_distance_id, for_update=True
        )

        if race_id is not None and race.id != race_id:
            raise BadRequestError("Distance does not belong to this race")
        if race.status != RaceStatus.APPROVED.value:
            raise BadRequestError("Race is not approved for registration")
        if not race.is_upcoming(now):
            raise BadRequestError("Race has already taken place")

        existing = await self.registration_repo.get_by_runner_and_distance(runner_id, distance.id)
        if existing is not None and not existing.is_cancelled:
            raise ConflictError("You are already registered for this distance")

        occupancy = await self.catalog.race_repo.get_occupancy(distance.id)
        if occupancy >= distance.max_participants:
            raise CapacityExceededError("This distance is full")

        try:
            if existing is not None:
                written = await self.registration_repo.reactivate_if_capacity(
                    existing.id, distance, now
                )
            else:
                written = await self.registration_repo.insert_if_capacity(runner_id, distance, now)
        except IntegrityError:
            logger.warning(
                "Duplicate registration runner=%s distance=%s", runner_id, distance.id
            )
            raise ConflictError("You are already registered for this distance")

        if not written:
            current = await self.registration_repo.get_by_runner_and_distance(
                runner_id, distance.id
            )
            if current is not None and not current.is_cancelled:
                raise ConflictError("You are already registered for this distance")
            logger.warning("Distance %s filled up during registration", distance.id)
            raise CapacityExceededError("This distance is full")

        registration = await self.registration_repo.get_by_runner_and_distance(
            runner_id, distance.id
        )
        logger.info(
            "%s registration %s runner=%s distance=%s",
            "Reactivated" if existing is not None else "Created",
            registration.id,
            runner_id,
            distance.id,
        )
        ctx = await self.registration_repo.get_context(registration.id)
        return to_registration_response(ctx, now)

    async def _get_owned(self, registration_id: int, runner_id: int) -> RegistrationContext:
        ctx = await self.registration_repo.get_context(registration_id)
        if ctx is None or ctx.registration.runner_id != runner_id:
            raise NotFoundError("Registration not found")
        return ctx

    @staticmethod
    def _check_payable(registration) -> None:
        if registration.payment_status == PaymentStatus.PAID.value:
            raise ConflictError("Registration is already paid")
        if registration.is_cancelled:
            raise BadRequestError("Cannot pay for a cancelled registration")

    async def confirm_payment(self, registration_id: int, runner_id: int) -> RegistrationResponse:
        """Mark a registration Paid and assign its bib number.

        The status change only applies to a row that is still Pending, so of
        two concurrent payments one wins and the other sees the new status.
        """
        now = self.clock()
        registration = (await self._get_owned(registration_id, runner_id)).registration
        self._check_payable(registration)

        paid = await self.registration_repo.mark_paid_if_pending(registration.id, now)
        await self.session.refresh(registration, ["payment_status", "bib_number", "updated_at"])
        if not paid:
            logger.warning("Registration %s changed state during payment", registration.id)
            self._check_payable(registration)
            raise ConflictError("Registration is no longer pending")

        if registration.bib_number is None:
            await self.bib_generator.assign(registration.id)

        ctx = await self.registration_repo.get_context(registration.id)
        logger.info(
            "Registration %s paid, bib=%s", registration.id, ctx.registration.bib_number
        )
        return to_registration_response(ctx, now)

    async def cancel(self, registration_id: int, runner_id: int) -> None:
        """Cancel a registration before its race, releasing the slot."""
        now = self.clock()
        registration, _, race = await self._get_owned(registration_id, runner_id)

        if not race.is_upcoming(now):
            raise BadRequestError("Race has already taken place")
        if registration.is_cancelled:
            raise BadRequestError("Registration is already cancelled")

        # Bib number is kept until the registration is reactivated
        if not await self.registration_repo.cancel_if_active(registration.id, now):
            logger.warning("Registration %s cancelled concurrently", registration.id)
            raise BadRequestError("Registration is already cancelled")
        await self.session.refresh(registration, ["payment_status", "bib_number", "updated_at"])
        logger.info("Registration %s cancelled", registration.id)

    async def get_registrations(
        self, runner_id: int, skip: int = 0, limit: int | None = None
    ) -> list[RegistrationResponse]:
        now = self.clock()
        contexts = await self.registration_repo.get_by_runner(runner_id, skip=skip, limit=limit)
        return [to_registration_response(ctx, now) for ctx in contexts]

    async def list_registrations(
        self, runner_id: int, page: int = 1, page_size: int = 10
    ) -> Page[RegistrationResponse]:
        """Page of a runner's registrations, newest first."""
        items = await self.get_registrations(
            runner_id, skip=(page - 1) * page_size, limit=page_size
        )
        total = await self.registration_repo.count_by_runner(runner_id)
        return Page[RegistrationResponse](
            items=items, total_count=total, page_number=page, page_size=page_size
        )

    async def get_registration(self, registration_id: int, runner: User) -> RegistrationDetailResponse:
        """Registration detail with race, distance, runner and result."""
        now = self.clock()
        registration, distance, race = await self._get_owned(registration_id, runner.id)
        occupancy = await self.catalog.race_repo.get_occupancy(distance.id)

        result = None
        if registration.result is not None:
            result = to_result_response(registration.result, registration, distance, race)

        return RegistrationDetailResponse(
            id=registration.id,
            registration_date=registration.registration_date,
            payment_status=registration.payment_status,
            bib_number=registration.bib_number,
            can_cancel=can_cancel(registration.payment_status, race.race_date, now),
            display_status=display_status(registration.payment_status, race.race_date, now),
            race=to_race_summary(race),
            race_distance=to_distance_response(distance, occupancy),
            runner=RunnerInfoResponse(
                id=runner.id,
                full_name=runner.full_name,
                email=runner.email,
                phone_number=runner.phone_number,
                date_of_birth=runner.date_of_birth,
                gender=runner.gender,
                age=runner.age_on(now.date()),
            ),
            result=result,
        )
