"""Authentication middleware."""

import logging
from typing import Optional
from uuid import UUID

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.models.user import User
from ..core.repositories.user_repository import UserRepository
from ..database import get_db_session
from ..exceptions import UnauthenticatedError
from ..security import get_user_id_from_token

logger = logging.getLogger(__name__)


class JWTBearer(HTTPBearer):
    """JWT Bearer token authentication.

    Resolves to the user id carried by the token. Every failure is a 401
    rather than HTTPBearer's default 403.
    """

    def __init__(self):
        super(JWTBearer, self).__init__(auto_error=False)

    async def __call__(self, request: Request) -> UUID:
        credentials: Optional[HTTPAuthorizationCredentials] = await super().__call__(request)
        if not credentials:
            raise UnauthenticatedError("Not authorized, no token")

        user_id = get_user_id_from_token(credentials.credentials)
        if not user_id:
            raise UnauthenticatedError("Not authorized, token failed")

        return user_id


async def get_current_user(
    request: Request,
    user_id: UUID = Depends(JWTBearer()),
    session: AsyncSession = Depends(get_db_session),
) -> User:
    """Resolve the token's user and attach it to the request state."""
    user = await UserRepository(session).get_by_id(user_id)
    if not user:
        logger.warning("Token references a missing user", extra={"user_id": str(user_id)})
        raise UnauthenticatedError("Not authorized, user not found")

    request.state.user = user
    return user


# Dependency for getting current user ID from JWT
async def get_current_user_id(user: User = Depends(get_current_user)) -> UUID:
    """Get current authenticated user ID."""
    return user.id
