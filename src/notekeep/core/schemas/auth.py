"""
Authentication schemas.

Request fields are optional at the schema level so that a missing field
reaches the explicit validation step and comes back as a 400 envelope.
"""

import uuid
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    """User registration request schema."""

    email: Optional[str] = Field(default=None, description="Account email")
    password: Optional[str] = Field(default=None, description="Plaintext password")

    model_config = ConfigDict(
        json_schema_extra={"example": {"email": "ada@example.com", "password": "s3cret-pass"}}
    )


class LoginRequest(BaseModel):
    """User login request schema."""

    email: Optional[str] = Field(default=None, description="Account email")
    password: Optional[str] = Field(default=None, description="Plaintext password")

    model_config = ConfigDict(
        json_schema_extra={"example": {"email": "ada@example.com", "password": "s3cret-pass"}}
    )


class UserPublic(BaseModel):
    """Public-safe user projection; never carries the password hash."""

    id: uuid.UUID = Field(description="User unique identifier")
    email: str = Field(description="Account email")

    model_config = ConfigDict(from_attributes=True)


class AuthResponse(BaseModel):
    """Register/login response: a fresh token plus the user."""

    success: bool = Field(default=True)
    message: str = Field(description="Outcome message")
    token: str = Field(description="Signed bearer token")
    user: UserPublic

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": True,
                "message": "Logged in",
                "token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                "user": {"id": "123e4567-e89b-12d3-a456-426614174000", "email": "ada@example.com"},
            }
        }
    )


class CurrentUserResponse(BaseModel):
    """Profile of the authenticated user."""

    success: bool = Field(default=True)
    user: UserPublic
