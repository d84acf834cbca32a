"""
Shared response schemas - the envelope pieces every endpoint reuses
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class MessageResponse(BaseModel):
    """Success envelope carrying only a message."""

    success: bool = Field(default=True, description="Operation success status")
    message: Optional[str] = Field(default=None, description="Human-readable message")


class ErrorResponse(BaseModel):
    """Standard error response schema."""

    success: bool = Field(default=False, description="Always false for errors")
    message: str = Field(description="Human-readable error message")

    model_config = ConfigDict(
        json_schema_extra={"example": {"success": False, "message": "Note not found"}}
    )
