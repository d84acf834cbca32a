"""
Logging for the NoteKeep backend.

Everything under the ``notekeep`` logger goes to stdout (JSON, or colored
text in debug mode) and, when ``log_dir`` is set, to rotating files.
Each HTTP request gets an id that is stamped on every record logged while
it is handled and echoed back in the ``X-Request-ID`` header.
"""
import json
import logging
import logging.config
import sys
import time
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from ..config import get_settings

REQUEST_ID_HEADER = "x-request-id"

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

# attributes every LogRecord has; anything else came in through ``extra``
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime", "request_id"}


class RequestIdFilter(logging.Filter):
    """Copies the current request id onto the record ("-" outside a request)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get() or "-"
        return True


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            'timestamp': datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'request_id': getattr(record, 'request_id', '-'),
            'location': f"{record.module}:{record.funcName}:{record.lineno}",
        }

        extra = {k: v for k, v in record.__dict__.items() if k not in _RECORD_ATTRS}
        if extra:
            entry['extra'] = extra

        if record.exc_info:
            entry['exception'] = self.formatException(record.exc_info)

        return json.dumps(entry, ensure_ascii=False, default=str)


class ColoredFormatter(logging.Formatter):
    """Level-colored console output for local development."""

    COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
    }
    RESET = '\033[0m'

    def format(self, record: logging.LogRecord) -> str:
        # copy, so the file handlers still see the bare level name
        record = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelname, '')
        record.levelname = f"{color}{record.levelname:<8}{self.RESET}"
        return super().format(record)


def _rotating_file(path: Path, level: str, formatter: str) -> Dict[str, Any]:
    return {
        'class': 'logging.handlers.RotatingFileHandler',
        'filename': str(path),
        'maxBytes': 10_000_000,
        'backupCount': 5,
        'encoding': 'utf-8',
        'formatter': formatter,
        'filters': ['request_id'],
        'level': level,
    }


def build_logging_config() -> Dict[str, Any]:
    """dictConfig mapping built from the current settings."""
    settings = get_settings()

    handlers: Dict[str, Any] = {
        'console': {
            'class': 'logging.StreamHandler',
            'stream': sys.stdout,
            'formatter': 'colored' if settings.debug else 'json',
            'filters': ['request_id'],
            'level': settings.log_level,
        },
    }
    if settings.log_dir:
        log_dir = Path(settings.log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers['file'] = _rotating_file(log_dir / 'notekeep.log', 'DEBUG', 'plain')
        handlers['error_file'] = _rotating_file(log_dir / 'error.log', 'ERROR', 'json')

    return {
        'version': 1,
        'disable_existing_loggers': False,
        'filters': {
            'request_id': {'()': RequestIdFilter},
        },
        'formatters': {
            'json': {'()': JSONFormatter},
            'colored': {
                '()': ColoredFormatter,
                'format': '%(asctime)s %(levelname)s [%(request_id)s] %(name)s: %(message)s',
                'datefmt': '%H:%M:%S',
            },
            'plain': {
                'format': '%(asctime)s %(levelname)-8s [%(request_id)s] %(name)s: %(message)s',
            },
        },
        'handlers': handlers,
        'loggers': {
            'notekeep': {
                'handlers': list(handlers),
                'level': 'DEBUG',
                'propagate': False,
            },
            'uvicorn': {'handlers': ['console'], 'level': 'INFO', 'propagate': False},
            'sqlalchemy.engine': {
                'handlers': ['console'],
                'level': 'INFO' if settings.database_echo else 'WARNING',
                'propagate': False,
            },
        },
    }


def setup_logging() -> None:
    """Apply the logging configuration."""
    settings = get_settings()
    logging.config.dictConfig(build_logging_config())
    get_logger('logging').info("Logging configured", extra={
        'log_level': settings.log_level,
        'log_dir': settings.log_dir or None,
        'environment': settings.environment,
    })


def get_logger(name: str) -> logging.Logger:
    """Logger under the ``notekeep`` namespace."""
    return logging.getLogger(f"notekeep.{name}")


class LoggingMiddleware:
    """Pure ASGI middleware: request id plus one line per request and response."""

    def __init__(self, app, logger_name: str = "http"):
        self.app = app
        self.logger = get_logger(logger_name)

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = dict(scope.get("headers") or [])
        incoming = headers.get(REQUEST_ID_HEADER.encode(), b"").decode("latin-1").strip()
        request_id = incoming[:64] or uuid.uuid4().hex[:12]
        token = request_id_var.set(request_id)

        started = time.perf_counter()
        method, path = scope["method"], scope["path"]
        self.logger.info("HTTP Request", extra={
            'method': method,
            'path': path,
            'client_ip': scope['client'][0] if scope.get('client') else 'unknown',
        })

        async def send_wrapper(message):
            if message["type"] == "http.response.start":
                message["headers"] = [
                    *message.get("headers", []),
                    (REQUEST_ID_HEADER.encode(), request_id.encode("latin-1")),
                ]
                self.logger.info("HTTP Response", extra={
                    'method': method,
                    'path': path,
                    'status_code': message.get('status', 0),
                    'duration_ms': round((time.perf_counter() - started) * 1000, 2),
                })
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as exc:
            self.logger.error("HTTP Request Failed", extra={
                'method': method,
                'path': path,
                'duration_ms': round((time.perf_counter() - started) * 1000, 2),
                'exception_type': type(exc).__name__,
            })
            raise
        finally:
            request_id_var.reset(token)
