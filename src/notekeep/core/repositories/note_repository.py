"""Note repository for database operations.

Every query here is scoped by owner id; there is no ``get_by_id``
without an owner.
"""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import and_, desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.note import Note

logger = logging.getLogger(__name__)


class NoteRepository:
    """Repository for note database operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_note(self, note_data: dict) -> Note:
        """Create new note."""
        note = Note(**note_data)
        self.session.add(note)
        await self.session.commit()
        await self.session.refresh(note)
        return note

    async def get_by_id_and_user(self, note_id: UUID, user_id: UUID) -> Optional[Note]:
        """Get note by ID if owned by user."""
        stmt = select(Note).where(and_(Note.id == note_id, Note.owner_id == user_id))
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def save_note(self, note: Note) -> Note:
        """Persist pending changes on a loaded note and bump its timestamp."""
        note.touch()
        await self.session.commit()
        await self.session.refresh(note)
        return note

    async def delete_note(self, note_id: UUID, user_id: UUID) -> bool:
        """Delete note if owned by user."""
        note = await self.get_by_id_and_user(note_id, user_id)
        if not note:
            logger.warning(f"Note {note_id} not found or not owned by user {user_id}")
            return False

        await self.session.delete(note)
        await self.session.commit()
        return True

    async def list_user_notes(
        self,
        user_id: UUID,
        color: Optional[str] = None,
        pinned: Optional[bool] = None,
        pinned_first: bool = True,
    ) -> List[Note]:
        """List user notes, optionally filtered by color and pin state.

        Ordered pinned-first (unless disabled), then newest-first.
        """
        stmt = select(Note).where(Note.owner_id == user_id)

        if color is not None:
            stmt = stmt.where(Note.color == color)
        if pinned is not None:
            stmt = stmt.where(Note.is_pinned == pinned)

        if pinned_first:
            stmt = stmt.order_by(desc(Note.is_pinned), desc(Note.created_at))
        else:
            stmt = stmt.order_by(desc(Note.created_at))

        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def search_notes(self, user_id: UUID, keyword: str) -> List[Note]:
        """Notes whose title, content or any tag contains keyword, newest-first."""
        # tags live in a list column, so matching runs after the owner-scoped fetch
        notes = await self.list_user_notes(user_id, pinned_first=False)
        return [note for note in notes if note.matches_keyword(keyword)]

    async def list_by_tag(self, user_id: UUID, tag: str) -> List[Note]:
        """Notes carrying exactly this tag, newest-first."""
        notes = await self.list_user_notes(user_id, pinned_first=False)
        return [note for note in notes if note.has_tag(tag)]
