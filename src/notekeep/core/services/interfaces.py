"""
Service interfaces for NoteKeep.
"""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from ..schemas.auth import AuthResponse, LoginRequest, RegisterRequest, UserPublic
from ..schemas.notes import (
    NoteCreate,
    NoteEnvelope,
    NoteFilterResponse,
    NoteListResponse,
    NoteResponse,
    NoteSearchResponse,
    NoteTagResponse,
    NoteUpdate,
)


class IAuthService(ABC):
    """Auth service for user management."""

    @abstractmethod
    async def register_user(self, request: RegisterRequest) -> AuthResponse:
        """Register new user and issue a token."""
        pass

    @abstractmethod
    async def authenticate_user(self, request: LoginRequest) -> AuthResponse:
        """Login user and issue a token."""
        pass

    @abstractmethod
    async def get_current_user(self, user_id: UUID) -> UserPublic:
        """Get user by ID."""
        pass


class INoteService(ABC):
    """Owner-scoped note operations."""

    @abstractmethod
    async def create_note(self, user_id: UUID, request: NoteCreate) -> NoteResponse:
        """Create a note owned by user_id."""
        pass

    @abstractmethod
    async def list_notes(self, user_id: UUID) -> NoteListResponse:
        """All notes, pinned-first then newest-first."""
        pass

    @abstractmethod
    async def get_note(self, note_id: str, user_id: UUID) -> NoteResponse:
        """Get one note."""
        pass

    @abstractmethod
    async def update_note(self, note_id: str, user_id: UUID, request: NoteUpdate) -> NoteResponse:
        """Update title/content."""
        pass

    @abstractmethod
    async def delete_note(self, note_id: str, user_id: UUID) -> None:
        """Delete a note."""
        pass

    @abstractmethod
    async def search_notes(self, user_id: UUID, keyword: Optional[str]) -> NoteSearchResponse:
        """Keyword search over title, content and tags."""
        pass

    @abstractmethod
    async def filter_notes(
        self, user_id: UUID, color: Optional[str], pinned: Optional[str]
    ) -> NoteFilterResponse:
        """Filter by color and/or pin state."""
        pass

    @abstractmethod
    async def notes_by_tag(self, user_id: UUID, tag: str) -> NoteTagResponse:
        """Notes carrying an exact tag."""
        pass

    @abstractmethod
    async def add_tag(self, note_id: str, user_id: UUID, tag: Optional[str]) -> NoteResponse:
        """Append a tag."""
        pass

    @abstractmethod
    async def remove_tag(self, note_id: str, user_id: UUID, tag: Optional[str]) -> NoteResponse:
        """Remove a tag if present."""
        pass

    @abstractmethod
    async def toggle_pin(self, note_id: str, user_id: UUID) -> NoteEnvelope:
        """Invert the pinned flag."""
        pass
