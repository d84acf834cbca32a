# Note model for user content
import uuid
from enum import Enum
from typing import List

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel
from .types import StringListType


class NoteColor(str, Enum):
    """Color categories a note can carry."""

    YELLOW = "yellow"
    BLUE = "blue"
    GREEN = "green"
    PINK = "pink"


DEFAULT_COLOR = NoteColor.YELLOW


class Note(BaseModel):
    """Note owned by exactly one user."""

    __tablename__ = "notes"

    title: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)

    # ordered, duplicates rejected by the service rather than the schema
    tags: Mapped[List[str]] = mapped_column(StringListType, nullable=False, default=list)

    is_pinned: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    color: Mapped[str] = mapped_column(String(10), default=DEFAULT_COLOR.value, nullable=False)

    # owner reference, set once at creation
    owner_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id"), nullable=False)

    __table_args__ = (
        CheckConstraint(
            "color IN ('yellow', 'blue', 'green', 'pink')", name="ck_notes_color"
        ),
        Index("idx_notes_owner_id", "owner_id"),
        Index("idx_notes_owner_pinned_created", "owner_id", "is_pinned", "created_at"),
    )

    def __repr__(self) -> str:
        truncated = self.title if len(self.title) <= 30 else (self.title[:30] + "...")
        return f"<Note(title='{truncated}', owner_id={self.owner_id})>"

    def has_tag(self, tag: str) -> bool:
        """Exact, case-sensitive tag membership."""
        return tag in (self.tags or [])

    def matches_keyword(self, keyword: str) -> bool:
        """Case-insensitive substring match on title, content or any tag."""
        needle = keyword.casefold()
        if needle in self.title.casefold() or needle in self.content.casefold():
            return True
        return any(needle in tag.casefold() for tag in (self.tags or []))
