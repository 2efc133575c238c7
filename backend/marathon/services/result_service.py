"""Result recording and listing."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from marathon.exceptions import NotFoundError
from marathon.models import Race, RaceDistance, Registration, Result
from marathon.repositories import RegistrationRepository, ResultRepository
from marathon.schemas import Page, ResultCreate, ResultResponse
from marathon.utils.formatting import format_duration, format_pace

logger = logging.getLogger(__name__)


def to_result_response(
    result: Result, registration: Registration, distance: RaceDistance, race: Race
) -> ResultResponse:
    """Convert a Result with its context to ResultResponse."""
    return ResultResponse(
        id=result.id,
        registration_id=registration.id,
        completion_seconds=result.completion_seconds,
        overall_rank=result.overall_rank,
        gender_rank=result.gender_rank,
        age_category_rank=result.age_category_rank,
        status=result.status,
        race_id=race.id,
        race_name=race.name,
        location=race.location,
        race_date=race.race_date,
        distance_name=distance.name,
        distance_in_km=distance.distance_in_km,
        formatted_time=format_duration(result.completion_seconds),
        average_pace=format_pace(result.completion_seconds, distance.distance_in_km),
    )


class ResultService:
    """Service for race outcomes."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.registration_repo = RegistrationRepository(session)
        self.result_repo = ResultRepository(session)

    async def record_result(self, registration_id: int, data: ResultCreate) -> ResultResponse:
        """Create the registration's result, or update the existing one."""
        ctx = await self.registration_repo.get_context(registration_id)
        if ctx is None:
            raise NotFoundError("Registration not found")

        values = {
            "completion_seconds": (
                data.completion_time.total_seconds() if data.completion_time is not None else None
            ),
            "overall_rank": data.overall_rank,
            "gender_rank": data.gender_rank,
            "age_category_rank": data.age_category_rank,
            "status": data.status.value,
        }

        existing = await self.result_repo.get_by_registration(registration_id)
        if existing is None:
            result = await self.result_repo.create({"registration_id": registration_id, **values})
            logger.info("Result recorded for registration %s: %s", registration_id, data.status.value)
        else:
            result = await self.result_repo.update(existing.id, values)
            logger.info("Result updated for registration %s: %s", registration_id, data.status.value)

        return to_result_response(result, ctx.registration, ctx.distance, ctx.race)

    async def get_results(
        self, runner_id: int, skip: int = 0, limit: int | None = None
    ) -> list[ResultResponse]:
        contexts = await self.result_repo.get_by_runner(runner_id, skip=skip, limit=limit)
        return [to_result_response(*ctx) for ctx in contexts]

    async def list_results(
        self, runner_id: int, page: int = 1, page_size: int = 10
    ) -> Page[ResultResponse]:
        """Page of a runner's results, most recent race first."""
        items = await self.get_results(runner_id, skip=(page - 1) * page_size, limit=page_size)
        total = await self.result_repo.count_by_runner(runner_id)
        return Page[ResultResponse](
            items=items, total_count=total, page_number=page, page_size=page_size
        )
