"""Structured Logging — JSON formatter and setup for pipeline observability.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (request_id, error_code, status_code, ...) surfaced when present
    - JSON format in production, human-readable text in development

Design Decisions:
    - stdlib logging + small JSONFormatter: no extra dependency for the library
    - setup_logging is opt-in: the library never configures logging on import
"""

import logging
import json
from datetime import datetime, timezone

EXTRA_FIELDS = (
    "request_id", "path", "method", "error_code", "status_code",
    "payload_type", "view_model_type", "codec",
)


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Configure root logging. Returns the installed handler."""
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s - %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler


def setup_logging_from_settings(settings) -> logging.Handler:
    return setup_logging(settings.log_level, settings.log_format)
