"""Runner profile and dashboard API routes."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from marathon.database import get_db
from marathon.models import User
from marathon.schemas import RunnerDashboardResponse, RunnerProfileResponse
from marathon.security import get_current_runner
from marathon.services import StatisticsService

router = APIRouter(tags=["profile"])


@router.get("/profile", response_model=RunnerProfileResponse)
async def get_profile(
    db: AsyncSession = Depends(get_db),
    runner: User = Depends(get_current_runner),
):
    """Profile with statistics, personal records and recent activity."""
    service = StatisticsService(db)
    return await service.get_profile(runner.id)


@router.get("/dashboard", response_model=RunnerDashboardResponse)
async def get_dashboard(
    db: AsyncSession = Depends(get_db),
    runner: User = Depends(get_current_runner),
):
    """Dashboard overview."""
    service = StatisticsService(db)
    return await service.get_dashboard(runner)
