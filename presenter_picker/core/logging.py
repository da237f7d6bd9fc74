# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Structured JSON logging — machine-parseable, one JSON line per record.
Context passed through `extra=` (request_id, generation, phase, ...) is
copied into the record when present.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from presenter_picker.core.config import settings

CONTEXT_FIELDS: tuple[str, ...] = (
    "request_id", "generation", "phase", "method", "path", "status", "duration_ms",
)


class JSONFormatter(logging.Formatter):
    """Emit every log record as a single JSON line for machine parsing."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "service": settings.SERVICE_NAME,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                log_data[field] = value
        if record.exc_info and record.exc_info[1]:
            log_data["error"] = str(record.exc_info[1])
            log_data["error_type"] = type(record.exc_info[1]).__name__
        return json.dumps(log_data, ensure_ascii=False)


_handler = logging.StreamHandler(sys.stdout)
_handler.setFormatter(JSONFormatter())


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger that writes JSON lines to stdout."""
    logger = logging.getLogger(name or settings.SERVICE_NAME)
    if _handler not in logger.handlers:
        logger.setLevel(getattr(logging, settings.LOG_LEVEL, logging.INFO))
        logger.addHandler(_handler)
        logger.propagate = False
    return logger
