"""Note service implementation.

Every operation takes the authenticated owner's id and passes it down to
the repository. A note that exists but belongs to someone else raises the
same ``NotFoundError`` as a note that does not exist at all.
"""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from ...exceptions import DuplicateTagError, NotFoundError
from ..models.note import Note
from ..repositories.note_repository import NoteRepository
from ..schemas.notes import (
    NoteCreate,
    NoteEnvelope,
    NoteFilterResponse,
    NoteFilters,
    NoteListResponse,
    NoteResponse,
    NoteSearchResponse,
    NoteTagResponse,
    NoteUpdate,
)
from ..validation import (
    parse_note_filter,
    validate_keyword,
    validate_note_create,
    validate_note_update,
    validate_tag,
)
from .interfaces import INoteService

logger = logging.getLogger(__name__)


class NoteService(INoteService):
    """Note service implementation."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.note_repo = NoteRepository(session)

    async def create_note(self, user_id: UUID, request: NoteCreate) -> NoteResponse:
        """Create new note."""
        draft = validate_note_create(request)

        note = await self.note_repo.create_note(
            {
                "title": draft.title,
                "content": draft.content,
                "tags": draft.tags,
                "color": draft.color.value,
                "is_pinned": draft.is_pinned,
                "owner_id": user_id,
            }
        )
        logger.info("Note created", extra={"note_id": str(note.id), "user_id": str(user_id)})
        return self._to_response(note)

    async def list_notes(self, user_id: UUID) -> NoteListResponse:
        """List user notes, pinned first."""
        notes = await self.note_repo.list_user_notes(user_id)
        return NoteListResponse.create(self._to_responses(notes))

    async def get_note(self, note_id: str, user_id: UUID) -> NoteResponse:
        """Get note by ID."""
        note = await self._get_owned_note(note_id, user_id)
        return self._to_response(note)

    async def update_note(self, note_id: str, user_id: UUID, request: NoteUpdate) -> NoteResponse:
        """Update existing note."""
        changes = validate_note_update(request)
        note = await self._get_owned_note(note_id, user_id)

        if changes.is_empty:
            return self._to_response(note)

        if changes.title is not None:
            note.title = changes.title
        if changes.content is not None:
            note.content = changes.content

        note = await self.note_repo.save_note(note)
        return self._to_response(note)

    async def delete_note(self, note_id: str, user_id: UUID) -> None:
        """Delete note."""
        parsed_id = self._parse_note_id(note_id)
        if not await self.note_repo.delete_note(parsed_id, user_id):
            raise NotFoundError()
        logger.info("Note deleted", extra={"note_id": note_id, "user_id": str(user_id)})

    async def search_notes(self, user_id: UUID, keyword: Optional[str]) -> NoteSearchResponse:
        """Search notes by title, content or tag."""
        keyword = validate_keyword(keyword)
        notes = await self.note_repo.search_notes(user_id, keyword)
        return NoteSearchResponse.create(self._to_responses(notes))

    async def filter_notes(
        self, user_id: UUID, color: Optional[str], pinned: Optional[str]
    ) -> NoteFilterResponse:
        """Filter notes by color, pin state or both."""
        note_filter = parse_note_filter(color, pinned)
        notes = await self.note_repo.list_user_notes(
            user_id, color=note_filter.color, pinned=note_filter.pinned
        )
        return NoteFilterResponse.create(
            self._to_responses(notes),
            filters=NoteFilters(color=note_filter.color, pinned=note_filter.pinned),
        )

    async def notes_by_tag(self, user_id: UUID, tag: str) -> NoteTagResponse:
        """Notes carrying the exact tag."""
        notes = await self.note_repo.list_by_tag(user_id, tag)
        return NoteTagResponse.create(self._to_responses(notes), tag=tag)

    async def add_tag(self, note_id: str, user_id: UUID, tag: Optional[str]) -> NoteResponse:
        """Append a tag, rejecting one the note already has."""
        tag = validate_tag(tag)
        note = await self._get_owned_note(note_id, user_id)

        if note.has_tag(tag):
            raise DuplicateTagError(tag)

        # reassign so the change is flushed
        note.tags = [*note.tags, tag]
        note = await self.note_repo.save_note(note)
        return self._to_response(note)

    async def remove_tag(self, note_id: str, user_id: UUID, tag: Optional[str]) -> NoteResponse:
        """Remove a tag; a tag the note never had is a no-op."""
        tag = validate_tag(tag)
        note = await self._get_owned_note(note_id, user_id)

        note.tags = [t for t in note.tags if t != tag]
        note = await self.note_repo.save_note(note)
        return self._to_response(note)

    async def toggle_pin(self, note_id: str, user_id: UUID) -> NoteEnvelope:
        """Flip the pinned flag."""
        note = await self._get_owned_note(note_id, user_id)

        note.is_pinned = not note.is_pinned
        note = await self.note_repo.save_note(note)

        message = "Note pinned" if note.is_pinned else "Note unpinned"
        return NoteEnvelope(message=message, note=self._to_response(note))

    async def _get_owned_note(self, note_id: str, user_id: UUID) -> Note:
        parsed_id = self._parse_note_id(note_id)
        note = await self.note_repo.get_by_id_and_user(parsed_id, user_id)
        if not note:
            raise NotFoundError()
        return note

    @staticmethod
    def _parse_note_id(note_id: str) -> UUID:
        # a malformed id can't exist either, so it is reported the same way
        try:
            return UUID(str(note_id))
        except ValueError:
            raise NotFoundError() from None

    @staticmethod
    def _to_response(note: Note) -> NoteResponse:
        return NoteResponse.model_validate(note)

    def _to_responses(self, notes: List[Note]) -> List[NoteResponse]:
        return [self._to_response(note) for note in notes]
