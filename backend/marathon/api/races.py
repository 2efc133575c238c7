"""Race catalog API routes."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from marathon.api.pagination import PageParams, page_params
from marathon.database import get_db
from marathon.models import User
from marathon.schemas import AvailableRaceResponse, Page
from marathon.security import get_current_runner
from marathon.services import CatalogService

router = APIRouter(prefix="/races", tags=["races"])


@router.get("/available", response_model=Page[AvailableRaceResponse])
async def list_available_races(
    paging: PageParams = Depends(page_params),
    db: AsyncSession = Depends(get_db),
    runner: User = Depends(get_current_runner),
):
    """Approved upcoming races with per-distance occupancy."""
    service = CatalogService(db)
    return await service.list_available_races(runner.id, paging.page, paging.page_size)
