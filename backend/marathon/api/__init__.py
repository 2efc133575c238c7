"""API routers."""

from marathon.api.profile import router as profile_router
from marathon.api.races import router as races_router
from marathon.api.registrations import router as registrations_router
from marathon.api.results import router as results_router

__all__ = [
    "races_router",
    "registrations_router",
    "results_router",
    "profile_router",
]
