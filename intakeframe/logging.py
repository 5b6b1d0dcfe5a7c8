"""
Structured Logging — Engine and API Log Output

Everything under the `intakeframe` logger namespace goes through one
handler. JSON lines by default, for log shippers; a readable text line
for local runs of the CLI.

Pipeline stages attach their results as `extra=` fields (frame type,
integrity, scores, counts). Both formatters surface those fields: the
JSON formatter as top-level keys, the text formatter as a trailing
`key=value` list.

Usage:
    from intakeframe.logging import get_logger
    logger = get_logger("engine")
    logger.info("Metrics computed", extra={"frame_type": "analyst", "overall_score": 61})
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional

from intakeframe.config import settings


# extra= fields surfaced by the formatters, in output order
CONTEXT_FIELDS = (
    "session_id", "question_id", "frame_type", "integrity", "overall_score",
    "answers_count", "flags_count", "spec_path", "method", "path",
    "status_code", "duration_ms", "error_type", "error",
)


def record_context(record: logging.LogRecord) -> dict:
    """The CONTEXT_FIELDS a record actually carries."""
    context = {}
    for key in CONTEXT_FIELDS:
        val = getattr(record, key, None)
        if val is not None:
            context[key] = val
    return context


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(record_context(record))

        if record.exc_info and record.exc_info[0]:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable line with the context fields appended."""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s [%(levelname)-8s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = record_context(record)
        if context:
            line += " | " + " ".join(f"{k}={v}" for k, v in context.items())
        return line


def setup_logging(level: Optional[str] = None, fmt: Optional[str] = None) -> logging.Logger:
    """
    Configure the `intakeframe` logger. Safe to call more than once.

    Args:
        level: Overrides settings.LOG_LEVEL (e.g. "DEBUG").
        fmt: "json" or "text"; overrides settings.LOG_FORMAT.
    """
    level = (level or settings.LOG_LEVEL).upper()
    fmt = fmt or settings.LOG_FORMAT

    package_logger = logging.getLogger("intakeframe")
    package_logger.setLevel(getattr(logging, level, logging.INFO))
    package_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr if fmt == "text" else sys.stdout)
    handler.setFormatter(TextFormatter() if fmt == "text" else JSONFormatter())
    package_logger.addHandler(handler)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    return package_logger


def get_logger(name: str) -> logging.Logger:
    """Get a named logger under the intakeframe namespace."""
    return logging.getLogger(f"intakeframe.{name}")
