"""Structured Logging — JSON formatter, request correlation and setup.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Every record carries request_id (None outside a request)
    - Extra fields (method, path, status_code, duration_ms, user_id, error_code)
      surfaced when present
    - JSON format in production, human-readable in development

Design Decisions:
    - ContextVar for the request id: set once by RequestIdMiddleware, visible to
      every log call made while serving that request without passing it around
    - setup_logging called once on startup via lifespan
"""

import logging
import json
from contextvars import ContextVar
from datetime import datetime, timezone

request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)

_EXTRA_FIELDS = (
    "request_id", "method", "path", "status_code", "duration_ms",
    "user_id", "error_code",
)


class RequestContextFilter(logging.Filter):
    """Attach the current request id to every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "request_id", None) is None:
            record.request_id = request_id_var.get()
        return True


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Configure logging for the application. Safe to call more than once."""
    for existing in list(logging.root.handlers):
        if getattr(existing, "_userapi_handler", False):
            logging.root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler._userapi_handler = True
    handler.addFilter(RequestContextFilter())
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s [%(request_id)s] %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
