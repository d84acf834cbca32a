"""
Database models for NoteKeep.

SQLAlchemy ORM models defining the schema. All models share the UUID
primary key and timestamp columns from ``BaseModel``.

Models included:
    - User: Account with email/password authentication
    - Note: Owner-scoped note with tags, pin flag and color
"""

from .base import BaseModel
from .note import Note, NoteColor
from .user import User

__all__ = [
    "BaseModel",
    "User",
    "Note",
    "NoteColor",
]
