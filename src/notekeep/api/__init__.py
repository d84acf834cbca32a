"""API routers for NoteKeep."""

from .auth import router as auth_router
from .errors import register_exception_handlers
from .notes import router as notes_router

__all__ = ["auth_router", "notes_router", "register_exception_handlers"]
