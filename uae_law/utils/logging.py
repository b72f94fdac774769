"""
Logging for the UAE law index.

Entry points (ingestion, database build, freshness check) call
``setup_logging()`` once; library modules only hold a module logger and pass
structured context through ``extra=`` built by the ``log_*`` helpers below.
With structured output enabled every record becomes one JSON line.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Any, Dict, Optional

from ..config.settings import settings

# LogRecord attributes that are not caller context
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}

PLAIN_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Per-request chatter from the HTTP stack and SQL echo
NOISY_LOGGERS = ("httpx", "httpcore", "sqlalchemy.engine")


class StructuredFormatter(logging.Formatter):
    """One JSON object per record; caller context lands under ``context``."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
        }

        context = {k: v for k, v in vars(record).items() if k not in _RECORD_ATTRS}
        if context:
            payload["context"] = context

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        # Arabic titles and provisions stay readable in the log stream
        return json.dumps(payload, ensure_ascii=False, default=str)


def _console_handler(level: int, structured: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(StructuredFormatter() if structured else logging.Formatter(PLAIN_FORMAT))
    return handler


def setup_logging(
    level: Optional[str] = None,
    structured: Optional[bool] = None,
    include_console: bool = True
) -> None:
    """
    Configure the root logger, replacing any handlers already attached.

    Args:
        level: Level name; defaults to ``settings.log_level``
        structured: JSON lines instead of plain text; defaults to ``settings.log_structured``
        include_console: Attach a stdout handler
    """
    numeric_level = getattr(logging, (level or settings.log_level).upper(), logging.INFO)
    if structured is None:
        structured = settings.log_structured

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
    root_logger.setLevel(numeric_level)

    if include_console:
        root_logger.addHandler(_console_handler(numeric_level, structured))

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Module logger (pass ``__name__``)."""
    return logging.getLogger(name)


def log_timing(operation: str, duration_ms: float, **context) -> Dict[str, Any]:
    """``extra=`` payload for a timed operation."""
    return {"event": "timing", "operation": operation, "duration_ms": round(duration_ms, 2), **context}


def log_error(error: Exception, **context) -> Dict[str, Any]:
    """``extra=`` payload describing a caught exception."""
    return {
        "event": "error",
        "error_type": type(error).__name__,
        "error_message": str(error),
        **context
    }


def log_document(document_id: str, legal_zone: Any, **counts) -> Dict[str, Any]:
    """
    ``extra=`` payload for a per-document ingestion or load event.

    Args:
        document_id: Canonical document id, e.g. ``fdl-45-2021``
        legal_zone: LegalZone member or its string value
        **counts: provisions=, definitions= and similar tallies
    """
    return {
        "event": "document",
        "document_id": document_id,
        "legal_zone": getattr(legal_zone, "value", legal_zone),
        **counts
    }


def log_api_request(
    method: str,
    url: str,
    status_code: Optional[int] = None,
    duration_ms: Optional[float] = None,
    **context
) -> Dict[str, Any]:
    """
    ``extra=`` payload for one outbound HTTP attempt.

    ``status_code`` and ``duration_ms`` are omitted when unknown, e.g. when
    the attempt failed before a response arrived.
    """
    payload: Dict[str, Any] = {"event": "api_request", "method": method, "url": url, **context}
    if status_code is not None:
        payload["status_code"] = status_code
    if duration_ms is not None:
        payload["duration_ms"] = round(duration_ms, 2)
    return payload
