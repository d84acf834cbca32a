"""
Pydantic schemas for validating and documenting API requests and responses.

Every response shares the envelope shape: a ``success`` flag, an optional
``message`` and the payload (``note``, ``notes``, ``token``/``user``...).
"""

from .auth import AuthResponse, CurrentUserResponse, LoginRequest, RegisterRequest, UserPublic
from .common import ErrorResponse, MessageResponse
from .notes import (
    NoteCreate,
    NoteEnvelope,
    NoteFilterResponse,
    NoteFilters,
    NoteListResponse,
    NoteResponse,
    NoteSearchResponse,
    NoteTagResponse,
    NoteUpdate,
    TagRequest,
)

__all__ = [
    # Auth schemas
    "RegisterRequest",
    "LoginRequest",
    "UserPublic",
    "AuthResponse",
    "CurrentUserResponse",
    # Note schemas
    "NoteCreate",
    "NoteUpdate",
    "TagRequest",
    "NoteResponse",
    "NoteEnvelope",
    "NoteListResponse",
    "NoteSearchResponse",
    "NoteFilters",
    "NoteFilterResponse",
    "NoteTagResponse",
    # Common schemas
    "MessageResponse",
    "ErrorResponse",
]
