"""Business logic services."""

from marathon.services.bib_numbers import BibNumberGenerator
from marathon.services.catalog_service import CatalogService
from marathon.services.registration_service import RegistrationService
from marathon.services.result_service import ResultService
from marathon.services.statistics_service import StatisticsService

__all__ = [
    "BibNumberGenerator",
    "CatalogService",
    "RegistrationService",
    "ResultService",
    "StatisticsService",
]
