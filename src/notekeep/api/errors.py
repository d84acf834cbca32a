"""Exception handlers producing the ``{"success": false, "message": ...}`` envelope."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..core.schemas.common import ErrorResponse
from ..exceptions import InternalError, NoteKeepError

logger = logging.getLogger(__name__)


def _envelope(status_code: int, message: str, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(message=message).model_dump(),
        headers=headers,
    )


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    # drop the "body"/"query"/"path" prefix
    location = ".".join(str(part) for part in first.get("loc", ())[1:])
    if first.get("type") == "json_invalid":
        return "Malformed JSON body"
    if location:
        return f"Invalid value for '{location}': {first.get('msg', 'invalid')}"
    return f"Invalid request: {first.get('msg', 'invalid')}"


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers.

        NoteKeepError          → its status_code (400/401/404/500)
        RequestValidationError → 400
        HTTPException          → its status code (unknown route, bad method)
        Exception              → 500, details logged server-side only
    """

    @app.exception_handler(NoteKeepError)
    async def handle_app_error(request: Request, exc: NoteKeepError):
        if exc.status_code >= 500:
            logger.error(
                "Application error on %s %s: %s | Context: %s",
                request.method, request.url.path, exc.message, exc.context,
            )
        else:
            logger.info(
                "Request rejected on %s %s: %s (%s)",
                request.method, request.url.path, exc.message, exc.status_code,
            )
        return _envelope(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        message = _describe_validation_error(exc)
        logger.info("Invalid request on %s %s: %s", request.method, request.url.path, message)
        return _envelope(400, message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return _envelope(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        error = InternalError(context={"exception_type": type(exc).__name__})
        logger.exception(
            "Unhandled error on %s %s | Context: %s",
            request.method, request.url.path, error.context,
        )
        return _envelope(error.status_code, error.message)
