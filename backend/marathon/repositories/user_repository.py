"""User repository."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from marathon.models import User
from marathon.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for User model."""

    def __init__(self, session: AsyncSession):
        super().__init__(User, session)

    async def get_by_token(self, token: str) -> User | None:
        """Get the user owning an API token."""
        result = await self.session.execute(select(User).where(User.api_token == token))
        return result.scalar_one_or_none()
