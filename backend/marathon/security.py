"""Bearer-token identity for API requests.

The web client keeps a cookie session and forwards the user's API token as
``Authorization: Bearer <token>``.
"""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from marathon.database import get_db
from marathon.exceptions import ForbiddenError, UnauthenticatedError
from marathon.models import User, UserRole
from marathon.repositories import UserRepository

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Resolve the calling user from the bearer token."""
    if credentials is None or not credentials.credentials:
        raise UnauthenticatedError("Authentication required")

    user = await UserRepository(db).get_by_token(credentials.credentials)
    if user is None:
        raise UnauthenticatedError("Invalid token")
    if not user.is_active:
        raise ForbiddenError("Account is disabled")
    return user


def require_roles(*roles: UserRole):
    """Dependency factory: the current user must hold one of the roles."""
    allowed = {role.value for role in roles}

    async def checker(user: User = Depends(get_current_user)) -> User:
        if user.role not in allowed:
            raise ForbiddenError("Insufficient permissions")
        return user

    return checker


get_current_runner = require_roles(UserRole.RUNNER)
