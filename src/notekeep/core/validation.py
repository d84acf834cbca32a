"""
Explicit input validation.

Each function takes raw request values and returns a typed, trusted result
or raises ``ValidationError``. Services only ever work with the results.

A required text field counts as missing when it is absent or the empty
string; whitespace is kept as given.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from ..exceptions import ValidationError
from .models.note import DEFAULT_COLOR, NoteColor
from .schemas.notes import NoteCreate, NoteUpdate

_COLOR_NAMES = ", ".join(color.value for color in NoteColor)


@dataclass(frozen=True)
class Credentials:
    email: str
    password: str


@dataclass(frozen=True)
class NoteDraft:
    title: str
    content: str
    tags: List[str] = field(default_factory=list)
    color: NoteColor = DEFAULT_COLOR
    is_pinned: bool = False


@dataclass(frozen=True)
class NoteChanges:
    title: Optional[str] = None
    content: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return self.title is None and self.content is None


@dataclass(frozen=True)
class NoteFilter:
    # matched by equality, so an unknown color simply selects nothing
    color: Optional[str] = None
    pinned: Optional[bool] = None


def _is_missing(value: Optional[str]) -> bool:
    return not value


def validate_credentials(email: Optional[str], password: Optional[str]) -> Credentials:
    """Both fields present and non-empty. Email is kept exactly as given."""
    if _is_missing(email) or _is_missing(password):
        raise ValidationError("All fields required")
    return Credentials(email=email, password=password)


def validate_color(color: Optional[str]) -> NoteColor:
    """Map a color name onto the enumerated set; None means the default."""
    if color is None:
        return DEFAULT_COLOR
    try:
        return NoteColor(color)
    except ValueError:
        raise ValidationError(
            f"Invalid color '{color}'. Allowed: {_COLOR_NAMES}", field="color"
        ) from None


def validate_tag(tag: Optional[str]) -> str:
    if _is_missing(tag):
        raise ValidationError("Tag required", field="tag")
    return tag


def validate_keyword(keyword: Optional[str]) -> str:
    if _is_missing(keyword):
        raise ValidationError("Keyword required", field="keyword")
    return keyword


def validate_note_create(request: NoteCreate) -> NoteDraft:
    """Validate a create payload; title and content are required together."""
    if _is_missing(request.title) or _is_missing(request.content):
        raise ValidationError("Title and Content required")

    return NoteDraft(
        title=request.title,
        content=request.content,
        tags=list(request.tags or []),
        color=validate_color(request.color),
        is_pinned=bool(request.is_pinned),
    )


def validate_note_update(request: NoteUpdate) -> NoteChanges:
    """Only non-empty fields are applied; anything else leaves the note as is."""
    return NoteChanges(
        title=None if _is_missing(request.title) else request.title,
        content=None if _is_missing(request.content) else request.content,
    )


def parse_note_filter(color: Optional[str], pinned: Optional[str]) -> NoteFilter:
    """Build a filter from query values.

    An empty color counts as absent. Any supplied pinned value other
    than "true" selects unpinned notes.
    """
    parsed_pinned = None if pinned is None else pinned.strip().lower() == "true"
    return NoteFilter(color=color or None, pinned=parsed_pinned)
