"""Runner statistics: profile and dashboard rollups.

Everything here is recomputed from the registration ledger and results on
every call.
"""

from collections.abc import Callable
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from marathon.exceptions import NotFoundError
from marathon.models import PaymentStatus, ResultStatus, User
from marathon.models.base import utcnow
from marathon.repositories import RegistrationContext, RegistrationRepository, UserRepository
from marathon.schemas import (
    PersonalRecord,
    RecentActivity,
    RunnerDashboardResponse,
    RunnerDashboardStatistics,
    RunnerProfileResponse,
    RunnerProfileStatistics,
)
from marathon.services.catalog_service import CatalogService
from marathon.services.registration_service import to_registration_response
from marathon.services.result_service import ResultService
from marathon.utils.formatting import format_duration, format_pace

# (statistics field, min km, max km), bounds inclusive
DISTANCE_BANDS = (
    ("best_5k", 4.5, 5.5),
    ("best_10k", 9.5, 10.5),
    ("best_half_marathon", 20.0, 22.0),
    ("best_marathon", 41.0, 43.0),
)

RECENT_REGISTRATIONS = 5
RECENT_RESULTS = 5
RECENT_ACTIVITY_LIMIT = 10


def _finished(contexts: list[RegistrationContext]) -> list[RegistrationContext]:
    return [
        ctx
        for ctx in contexts
        if ctx.registration.result is not None and ctx.registration.result.is_finished
    ]


def best_times_by_band(contexts: list[RegistrationContext]) -> dict[str, float | None]:
    """Fastest finished time (seconds) per standard distance band."""
    best: dict[str, float | None] = {field: None for field, _, _ in DISTANCE_BANDS}
    for ctx in _finished(contexts):
        seconds = ctx.registration.result.completion_seconds
        if seconds is None:
            continue
        for field, low, high in DISTANCE_BANDS:
            if low <= ctx.distance.distance_in_km <= high:
                if best[field] is None or seconds < best[field]:
                    best[field] = seconds
    return best


def personal_records(contexts: list[RegistrationContext]) -> list[PersonalRecord]:
    """Best finished time per (distance, distance name), shortest distance first."""
    fastest: dict[tuple[float, str], RegistrationContext] = {}
    for ctx in _finished(contexts):
        seconds = ctx.registration.result.completion_seconds
        if seconds is None:
            continue
        key = (ctx.distance.distance_in_km, ctx.distance.name)
        current = fastest.get(key)
        if current is None or seconds < current.registration.result.completion_seconds:
            fastest[key] = ctx

    records = []
    for (distance_in_km, distance_name), ctx in sorted(fastest.items()):
        seconds = ctx.registration.result.completion_seconds
        records.append(
            PersonalRecord(
                distance_name=distance_name,
                distance_in_km=distance_in_km,
                best_time_seconds=seconds,
                formatted_time=format_duration(seconds),
                race_name=ctx.race.name,
                race_date=ctx.race.race_date,
                average_pace=format_pace(seconds, distance_in_km),
            )
        )
    return records


def recent_activities(contexts: list[RegistrationContext]) -> list[RecentActivity]:
    """Latest registrations and results merged into one feed."""
    registrations = sorted(
        contexts, key=lambda ctx: ctx.registration.registration_date, reverse=True
    )[:RECENT_REGISTRATIONS]
    with_results = sorted(
        (ctx for ctx in contexts if ctx.registration.result is not None),
        key=lambda ctx: ctx.race.race_date,
        reverse=True,
    )[:RECENT_RESULTS]

    activities = [
        RecentActivity(
            activity_type="Registration",
            description=f"Registered for {ctx.race.name} - {ctx.distance.name}",
            activity_date=ctx.registration.registration_date,
            icon="registration",
            badge_class=ctx.registration.payment_status.lower(),
        )
        for ctx in registrations
    ]
    for ctx in with_results:
        result = ctx.registration.result
        if result.is_finished and result.completion_seconds is not None:
            description = (
                f"Finished {ctx.race.name} - {ctx.distance.name} "
                f"in {format_duration(result.completion_seconds)}"
            )
        else:
            description = f"{ctx.race.name} - {ctx.distance.name}: {result.status}"
        activities.append(
            RecentActivity(
                activity_type="Result",
                description=description,
                activity_date=ctx.race.race_date,
                icon="result",
                badge_class=result.status.lower(),
            )
        )

    activities.sort(key=lambda activity: activity.activity_date, reverse=True)
    return activities[:RECENT_ACTIVITY_LIMIT]


def compute_statistics(
    contexts: list[RegistrationContext], joined_at: datetime, now: datetime
) -> RunnerProfileStatistics:
    """Registration counts, distance run, podiums and best times."""
    finished = _finished(contexts)
    ranks = [
        ctx.registration.result.overall_rank
        for ctx in contexts
        if ctx.registration.result is not None and ctx.registration.result.overall_rank is not None
    ]
    best = {
        field: format_duration(seconds) for field, seconds in best_times_by_band(contexts).items()
    }
    days_since_joined = max((now - joined_at).days, 0)

    return RunnerProfileStatistics(
        total_registrations=len(contexts),
        active_registrations=sum(
            1
            for ctx in contexts
            if ctx.registration.payment_status == PaymentStatus.PAID.value
            and ctx.race.is_upcoming(now)
        ),
        completed_races=len(finished),
        cancelled_registrations=sum(1 for ctx in contexts if ctx.registration.is_cancelled),
        total_races_finished=len(finished),
        total_distance_run=round(sum(ctx.distance.distance_in_km for ctx in finished), 2),
        top_3_finishes=sum(1 for rank in ranks if rank <= 3),
        top_10_finishes=sum(1 for rank in ranks if rank <= 10),
        days_since_joined=days_since_joined,
        years_active=days_since_joined // 365,
        **best,
    )


def compute_dashboard_statistics(
    contexts: list[RegistrationContext], now: datetime
) -> RunnerDashboardStatistics:
    return RunnerDashboardStatistics(
        total_registrations=len(contexts),
        completed_races=len(_finished(contexts)),
        upcoming_races=sum(
            1
            for ctx in contexts
            if not ctx.registration.is_cancelled and ctx.race.is_upcoming(now)
        ),
        pending_registrations=sum(
            1
            for ctx in contexts
            if ctx.registration.payment_status == PaymentStatus.PENDING.value
        ),
    )


class StatisticsService:
    """Service for runner profile and dashboard queries."""

    def __init__(self, session: AsyncSession, clock: Callable[[], datetime] = utcnow):
        self.session = session
        self.clock = clock
        self.user_repo = UserRepository(session)
        self.registration_repo = RegistrationRepository(session)
        self.catalog = CatalogService(session, clock=clock)
        self.result_service = ResultService(session)

    async def get_profile(self, runner_id: int) -> RunnerProfileResponse:
        """Runner profile with statistics, recent activity and personal records."""
        user = await self.user_repo.get(runner_id)
        if user is None:
            raise NotFoundError("User not found")

        now = self.clock()
        contexts = await self.registration_repo.get_by_runner(runner_id)
        return RunnerProfileResponse(
            id=user.id,
            full_name=user.full_name,
            email=user.email,
            phone_number=user.phone_number,
            date_of_birth=user.date_of_birth,
            gender=user.gender,
            age=user.age_on(now.date()),
            is_active=user.is_active,
            created_at=user.created_at,
            statistics=compute_statistics(contexts, user.created_at, now),
            recent_activities=recent_activities(contexts),
            personal_records=personal_records(contexts),
        )

    async def get_dashboard(self, runner: User) -> RunnerDashboardResponse:
        """Dashboard overview for a runner."""
        now = self.clock()
        contexts = await self.registration_repo.get_by_runner(runner.id)
        return RunnerDashboardResponse(
            statistics=compute_dashboard_statistics(contexts, now),
            available_races=await self.catalog.get_available_races(runner.id, limit=6),
            my_registrations=[to_registration_response(ctx, now) for ctx in contexts[:5]],
            my_results=await self.result_service.get_results(runner.id, limit=5),
        )
