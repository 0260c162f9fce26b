"""Structured Logging — JSON formatter and setup for production observability.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (record_kind, username, error_code, snapshot_path) surfaced when present
    - JSON format in production, human-readable in development
    - Password material never appears in an extra field

Design Decisions:
    - JSONFormatter on stdlib logging: no extra dependency for one formatter
    - setup_logging runs on every lifespan startup and replaces its own handler
      instead of stacking a new one
"""

import logging
import json
from datetime import datetime, timezone

_EXTRA_FIELDS = (
    "error_code", "path", "record_kind", "record_id",
    "username", "snapshot_path", "login_outcome",
)
_HANDLER_MARK = "_recordstore_handler"


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
        return json.dumps(log, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Configure logging for the application. Safe to call repeatedly."""
    for existing in logging.root.handlers[:]:
        if getattr(existing, _HANDLER_MARK, False):
            logging.root.removeHandler(existing)
    handler = logging.StreamHandler()
    setattr(handler, _HANDLER_MARK, True)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s — %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
