"""Notes API endpoints.

Fixed paths (``/search``, ``/filter``, ``/tag/...``) are declared before
``/{note_id}`` so they are not captured as ids.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.models.user import User
from ..core.schemas.common import MessageResponse
from ..core.schemas.notes import (
    NoteCreate,
    NoteEnvelope,
    NoteFilterResponse,
    NoteListResponse,
    NoteSearchResponse,
    NoteTagResponse,
    NoteUpdate,
    TagRequest,
)
from ..core.services import NoteService
from ..database import get_db_session
from ..middleware.auth import get_current_user

router = APIRouter(prefix="/notes", tags=["notes"])


@router.post(
    "",
    response_model=NoteEnvelope,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_note(
    request: NoteCreate,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Create a new note."""
    note_service = NoteService(session)
    note = await note_service.create_note(current_user.id, request)
    return NoteEnvelope(note=note)


@router.get("", response_model=NoteListResponse)
async def list_notes(
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """List user notes, pinned first."""
    note_service = NoteService(session)
    return await note_service.list_notes(current_user.id)


@router.get("/search", response_model=NoteSearchResponse)
async def search_notes(
    keyword: Optional[str] = Query(None),
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Search notes by keyword."""
    note_service = NoteService(session)
    return await note_service.search_notes(current_user.id, keyword)


@router.get("/filter", response_model=NoteFilterResponse)
async def filter_notes(
    color: Optional[str] = Query(None),
    pinned: Optional[str] = Query(None),
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Filter notes by color, pinned status, or both."""
    note_service = NoteService(session)
    return await note_service.filter_notes(current_user.id, color, pinned)


@router.get("/tag/{tag_name}", response_model=NoteTagResponse)
async def notes_by_tag(
    tag_name: str,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Get notes carrying a tag."""
    note_service = NoteService(session)
    return await note_service.notes_by_tag(current_user.id, tag_name)


@router.get("/{note_id}", response_model=NoteEnvelope, response_model_exclude_none=True)
async def get_note(
    note_id: str,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Get a specific note."""
    note_service = NoteService(session)
    note = await note_service.get_note(note_id, current_user.id)
    return NoteEnvelope(note=note)


@router.put("/{note_id}", response_model=NoteEnvelope, response_model_exclude_none=True)
async def update_note(
    note_id: str,
    request: NoteUpdate,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Update a note's title and/or content."""
    note_service = NoteService(session)
    note = await note_service.update_note(note_id, current_user.id, request)
    return NoteEnvelope(note=note)


@router.put("/{note_id}/tags/add", response_model=NoteEnvelope, response_model_exclude_none=True)
async def add_tag(
    note_id: str,
    request: TagRequest,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Add a tag to a note."""
    note_service = NoteService(session)
    note = await note_service.add_tag(note_id, current_user.id, request.tag)
    return NoteEnvelope(note=note)


@router.put(
    "/{note_id}/tags/remove", response_model=NoteEnvelope, response_model_exclude_none=True
)
async def remove_tag(
    note_id: str,
    request: TagRequest,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Remove a tag from a note."""
    note_service = NoteService(session)
    note = await note_service.remove_tag(note_id, current_user.id, request.tag)
    return NoteEnvelope(note=note)


@router.put("/{note_id}/pin", response_model=NoteEnvelope)
async def toggle_pin(
    note_id: str,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Toggle a note's pinned status."""
    note_service = NoteService(session)
    return await note_service.toggle_pin(note_id, current_user.id)


@router.delete("/{note_id}", response_model=MessageResponse)
async def delete_note(
    note_id: str,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Delete a note."""
    note_service = NoteService(session)
    await note_service.delete_note(note_id, current_user.id)
    return MessageResponse(message="Note deleted")
