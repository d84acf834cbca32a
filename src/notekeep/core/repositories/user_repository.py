"""User repository for database operations."""

from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.user import User


class UserRepository:
    """Repository for user database operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_user(self, user_data: dict) -> User:
        """Create new user.

        Raises IntegrityError (after rolling back) when the email is taken.
        """
        user = User(**user_data)
        self.session.add(user)
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            raise
        await self.session.refresh(user)
        return user

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID."""
        stmt = select(User).where(User.id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email, compared exactly as stored."""
        stmt = select(User).where(User.email == email)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def is_email_taken(self, email: str) -> bool:
        """Check if email exists."""
        user = await self.get_by_email(email)
        return user is not None

    async def update_password_hash(self, user: User, password_hash: str) -> User:
        """Replace the stored hash, e.g. after a scheme upgrade."""
        user.password_hash = password_hash
        user.touch()
        await self.session.commit()
        await self.session.refresh(user)
        return user
