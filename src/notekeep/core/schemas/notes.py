"""
Note management schemas.

These schemas define the API contracts for note CRUD, search, filtering
and tag management.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class NoteCreate(BaseModel):
    """Note creation request schema.

    Emptiness and the color set are checked by ``validate_note_create``.
    """

    title: Optional[str] = Field(default=None, description="Note title")
    content: Optional[str] = Field(default=None, description="Note content")
    tags: Optional[List[str]] = Field(default=None, description="Ordered note tags")
    color: Optional[str] = Field(default=None, description="yellow, blue, green or pink")
    is_pinned: Optional[bool] = Field(
        default=None,
        validation_alias=AliasChoices("is_pinned", "isPinned"),
        description="Whether the note is pinned",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Road Trip Plan",
                "content": "Fuel up, snacks, playlist",
                "tags": ["travel", "summer"],
                "color": "blue",
                "is_pinned": True,
            }
        }
    )


class NoteUpdate(BaseModel):
    """Note update request schema. Only supplied fields change."""

    title: Optional[str] = Field(default=None, description="Note title")
    content: Optional[str] = Field(default=None, description="Note content")


class TagRequest(BaseModel):
    """Body for tag add/remove."""

    tag: Optional[str] = Field(default=None, description="Tag to add or remove")


class NoteResponse(BaseModel):
    """Note representation."""

    id: uuid.UUID
    owner_id: uuid.UUID
    title: str
    content: str
    tags: List[str]
    is_pinned: bool
    color: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class NoteEnvelope(BaseModel):
    """Single-note envelope."""

    success: bool = True
    message: Optional[str] = None
    note: NoteResponse


class NoteListResponse(BaseModel):
    """Envelope for note lists."""

    success: bool = True
    count: int
    notes: List[NoteResponse]

    @classmethod
    def create(cls, notes: List[NoteResponse], **extra) -> "NoteListResponse":
        return cls(count=len(notes), notes=notes, **extra)


class NoteSearchResponse(NoteListResponse):
    """Search results."""


class NoteFilters(BaseModel):
    """Filters echoed back by the filter endpoint."""

    color: Optional[str] = None
    pinned: Optional[bool] = None


class NoteFilterResponse(NoteListResponse):
    """Filtered notes plus the filters that were applied."""

    filters: NoteFilters


class NoteTagResponse(NoteListResponse):
    """Notes carrying a tag, plus that tag."""

    tag: str
