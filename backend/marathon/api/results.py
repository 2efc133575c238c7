"""Result API routes."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from marathon.api.pagination import PageParams, page_params
from marathon.database import get_db
from marathon.models import User, UserRole
from marathon.schemas import ApiResponse, Page, ResultCreate, ResultResponse
from marathon.security import get_current_runner, require_roles
from marathon.services import ResultService

router = APIRouter(tags=["results"])


@router.post(
    "/registrations/{registration_id}/result",
    response_model=ApiResponse[ResultResponse],
)
async def record_result(
    registration_id: int,
    data: ResultCreate,
    db: AsyncSession = Depends(get_db),
    _: User = Depends(require_roles(UserRole.ORGANIZER, UserRole.ADMIN)),
):
    """Record or update the outcome of a registration."""
    service = ResultService(db)
    result = await service.record_result(registration_id, data)
    return ApiResponse[ResultResponse](message="Result recorded.", data=result)


@router.get("/results", response_model=Page[ResultResponse])
async def list_my_results(
    paging: PageParams = Depends(page_params),
    db: AsyncSession = Depends(get_db),
    runner: User = Depends(get_current_runner),
):
    """List the current runner's results."""
    service = ResultService(db)
    return await service.list_results(runner.id, paging.page, paging.page_size)
