"""Authentication service implementation."""

import logging
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from ...exceptions import DuplicateUserError, InvalidCredentialsError, NotFoundError
from ...security import (
    create_access_token,
    hash_password,
    needs_update,
    verify_against_decoy,
    verify_password,
)
from ..models.user import User
from ..repositories.user_repository import UserRepository
from ..schemas.auth import AuthResponse, LoginRequest, RegisterRequest, UserPublic
from ..validation import validate_credentials
from .interfaces import IAuthService

logger = logging.getLogger(__name__)


class AuthService(IAuthService):
    """Authentication service implementation."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_repo = UserRepository(session)

    async def register_user(self, request: RegisterRequest) -> AuthResponse:
        """Register new user."""
        credentials = validate_credentials(request.email, request.password)

        if await self.user_repo.is_email_taken(credentials.email):
            raise DuplicateUserError()

        # hashing blocks, run it off the event loop
        hashed_password = await run_in_threadpool(hash_password, credentials.password)

        try:
            user = await self.user_repo.create_user(
                {"email": credentials.email, "password_hash": hashed_password}
            )
        except IntegrityError:
            # lost a race with a concurrent registration for the same email
            raise DuplicateUserError() from None

        logger.info("User registered", extra={"user_id": str(user.id)})
        return self._auth_response(user, "User registered")

    async def authenticate_user(self, request: LoginRequest) -> AuthResponse:
        """Login user and return a JWT."""
        credentials = validate_credentials(request.email, request.password)

        user = await self.user_repo.get_by_email(credentials.email)
        if not user:
            # unknown emails cost one hash, the same as a wrong password
            await run_in_threadpool(verify_against_decoy, credentials.password)
            logger.warning("Login rejected")
            raise InvalidCredentialsError()

        if not await run_in_threadpool(verify_password, credentials.password, user.password_hash):
            logger.warning("Login rejected", extra={"user_id": str(user.id)})
            raise InvalidCredentialsError()

        if needs_update(user.password_hash):
            new_hash = await run_in_threadpool(hash_password, credentials.password)
            user = await self.user_repo.update_password_hash(user, new_hash)
            logger.info("Password hash upgraded", extra={"user_id": str(user.id)})

        logger.info("User logged in", extra={"user_id": str(user.id)})
        return self._auth_response(user, "Logged in")

    async def get_current_user(self, user_id: UUID) -> UserPublic:
        """Get user by ID."""
        user = await self.user_repo.get_by_id(user_id)
        if not user:
            raise NotFoundError("User")
        return UserPublic.model_validate(user)

    def _auth_response(self, user: User, message: str) -> AuthResponse:
        token = create_access_token(data={"sub": str(user.id)})
        return AuthResponse(
            success=True,
            message=message,
            token=token,
            user=UserPublic.model_validate(user),
        )
