"""
Application exception hierarchy.

Services raise these; the handlers registered in ``notekeep.api.errors``
turn them into ``{"success": false, "message": ...}`` responses with the
status code carried by each class.

    NoteKeepError (base)          → 500
    ├── ValidationError           → 400
    ├── UnauthenticatedError      → 401
    ├── InvalidCredentialsError   → 401
    ├── DuplicateUserError        → 400
    ├── DuplicateTagError         → 400
    ├── NotFoundError             → 404
    └── InternalError             → 500
"""

from typing import Any, Dict, Optional


class NoteKeepError(Exception):
    """
    Base exception for all NoteKeep errors.

    Attributes:
        message: User-facing description, safe to return to the client
        context: Extra debug info, logged but never returned
    """

    status_code = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NoteKeepError):
    """Client input is missing or malformed."""

    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class UnauthenticatedError(NoteKeepError):
    """Missing, malformed, expired or otherwise unusable bearer token."""

    status_code = 401

    def __init__(
        self,
        message: str = "Not authorized",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class InvalidCredentialsError(NoteKeepError):
    """
    Login failed.

    Raised both for an unknown email and for a wrong password so the
    response never reveals which check failed.
    """

    status_code = 401

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(message="Invalid credentials", context=context)


class DuplicateUserError(NoteKeepError):
    """An account with this email already exists."""

    status_code = 400

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(message="User already exists", context=context)


class DuplicateTagError(NoteKeepError):
    """The note already carries this tag."""

    status_code = 400

    def __init__(self, tag: str, context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        ctx["tag"] = tag
        super().__init__(message="Tag already exists", context=ctx)
        self.tag = tag


class NotFoundError(NoteKeepError):
    """
    The resource does not exist or belongs to someone else.

    Both cases share one message so non-owners learn nothing about
    which ids exist.
    """

    status_code = 404

    def __init__(
        self,
        resource: str = "Note",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=f"{resource} not found", context=context)
        self.resource = resource


class InternalError(NoteKeepError):
    """Unexpected store or runtime failure."""

    status_code = 500

    def __init__(
        self,
        message: str = "Server error",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
