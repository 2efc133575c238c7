"""Registration API routes."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from marathon.api.pagination import PageParams, page_params
from marathon.database import get_db
from marathon.models import User
from marathon.schemas import (
    ApiResponse,
    Page,
    RegistrationCreate,
    RegistrationDetailResponse,
    RegistrationResponse,
)
from marathon.security import get_current_runner
from marathon.services import RegistrationService

router = APIRouter(prefix="/registrations", tags=["registrations"])


@router.post("", response_model=ApiResponse[RegistrationResponse], status_code=201)
async def register_for_distance(
    data: RegistrationCreate,
    db: AsyncSession = Depends(get_db),
    runner: User = Depends(get_current_runner),
):
    """Register the current runner for a distance category."""
    service = RegistrationService(db)
    registration = await service.register(runner.id, data.race_distance_id, data.race_id)
    return ApiResponse[RegistrationResponse](
        message="Registration successful. Please complete the payment.",
        data=registration,
    )


@router.get("", response_model=Page[RegistrationResponse])
async def list_my_registrations(
    paging: PageParams = Depends(page_params),
    db: AsyncSession = Depends(get_db),
    runner: User = Depends(get_current_runner),
):
    """List the current runner's registrations, newest first."""
    service = RegistrationService(db)
    return await service.list_registrations(runner.id, paging.page, paging.page_size)


@router.get("/{registration_id}", response_model=RegistrationDetailResponse)
async def get_registration(
    registration_id: int,
    db: AsyncSession = Depends(get_db),
    runner: User = Depends(get_current_runner),
):
    """Get one of the current runner's registrations."""
    service = RegistrationService(db)
    return await service.get_registration(registration_id, runner)


@router.post("/{registration_id}/pay", response_model=ApiResponse[RegistrationResponse])
async def confirm_payment(
    registration_id: int,
    db: AsyncSession = Depends(get_db),
    runner: User = Depends(get_current_runner),
):
    """Simulated payment: marks the registration paid and assigns a bib."""
    service = RegistrationService(db)
    registration = await service.confirm_payment(registration_id, runner.id)
    return ApiResponse[RegistrationResponse](message="Payment confirmed.", data=registration)


@router.delete("/{registration_id}", response_model=ApiResponse[None])
async def cancel_registration(
    registration_id: int,
    db: AsyncSession = Depends(get_db),
    runner: User = Depends(get_current_runner),
):
    """Cancel a registration before the race.

    Answers with the usual ApiResponse envelope, `data` left null.
    """
    service = RegistrationService(db)
    await service.cancel(registration_id, runner.id)
    return ApiResponse[None](message="Registration cancelled.")
