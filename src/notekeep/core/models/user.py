"""
User model for authentication.
"""

from sqlalchemy import Index, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel


class User(BaseModel):
    """User account model with email/password auth."""

    __tablename__ = "users"

    # stored exactly as registered, lookups are case-sensitive
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    __table_args__ = (Index("idx_users_email", "email"),)

    def __repr__(self) -> str:
        return f"<User(email='{self.email}')>"
