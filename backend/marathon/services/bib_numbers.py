"""Collision-checked bib number assignment."""

import logging
import random

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from marathon.config import Settings, get_settings
from marathon.exceptions import InternalError
from marathon.repositories import RegistrationRepository

logger = logging.getLogger(__name__)


class BibNumberGenerator:
    """Draws random bib numbers and claims them against the unique constraint.

    Each draw is checked, then written inside a savepoint; a constraint hit
    from a concurrent writer rolls back only that savepoint and draws again.
    """

    def __init__(
        self,
        session: AsyncSession,
        settings: Settings | None = None,
        rng: random.Random | None = None,
    ):
        self.session = session
        self.settings = settings or get_settings()
        self.rng = rng or random.SystemRandom()
        self.registration_repo = RegistrationRepository(session)

    def draw(self) -> str:
        number = self.rng.randint(self.settings.bib_number_min, self.settings.bib_number_max)
        return str(number)

    async def assign(self, registration_id: int) -> str:
        """Give a registration a fresh, globally unique bib number."""
        for attempt in range(1, self.settings.bib_number_max_attempts + 1):
            candidate = self.draw()
            if await self.registration_repo.bib_number_exists(candidate):
                logger.debug("Bib %s taken, attempt %d", candidate, attempt)
                continue

            try:
                async with self.session.begin_nested():
                    claimed = await self.registration_repo.claim_bib_number(
                        registration_id, candidate
                    )
            except IntegrityError:
                logger.warning("Bib %s claimed concurrently, attempt %d", candidate, attempt)
                continue

            if not claimed:
                raise InternalError("Registration already holds a bib number")
            return candidate

        raise InternalError("Could not allocate a unique bib number")
