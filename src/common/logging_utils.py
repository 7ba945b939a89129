"""Centralized logging configuration and structured logging helpers.

All modules obtain their logger via ``logging.getLogger(__name__)`` and rely on
``configure_logging()`` having been called once by the CLI entry point.
Structured fields travel through ``extra=extra_context(...)`` so that a
richer formatter can pick them up without changing call sites.
"""
from __future__ import annotations

import logging
import os
import sys
import time
from typing import Any, Dict, Optional
from urllib.parse import urlsplit, urlunsplit

from constants import Constants

_HANDLER_NAME = "winch-console"


def _resolve_level(default: str = "INFO") -> int:
    """Return the numeric level from WINCH_LOG_LEVEL, falling back to default."""
    name = os.environ.get(Constants.ENV_LOG_LEVEL, default).strip().upper()
    level = logging.getLevelName(name)
    if isinstance(level, int):
        return level
    return logging.INFO


def configure_logging(stream: Optional[Any] = None) -> None:
    """Install the console handler on the root logger.

    Safe to call more than once; the handler is only added the first time,
    but the level is re-read from the environment on every call.
    """
    root = logging.getLogger()
    root.setLevel(_resolve_level())

    for handler in root.handlers:
        if getattr(handler, "name", None) == _HANDLER_NAME:
            return

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(Constants.LOG_FORMAT))
    root.addHandler(handler)


def is_debug_enabled(logger: logging.Logger) -> bool:
    """True when DEBUG records from this logger would be emitted."""
    return logger.isEnabledFor(logging.DEBUG)


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build an ``extra`` mapping for structured log records, dropping None values."""
    return {k: v for k, v in fields.items() if v is not None}


def safe_url(url: str) -> str:
    """Strip userinfo, query string and fragment so URLs are safe to log."""
    try:
        parts = urlsplit(url)
    except ValueError:
        return "<invalid-url>"
    netloc = parts.hostname or ""
    if parts.port:
        netloc = f"{netloc}:{parts.port}"
    return urlunsplit((parts.scheme, netloc, parts.path, "", ""))


class Timer:
    """Context manager measuring wall-clock duration in milliseconds."""

    def __init__(self) -> None:
        self._start: Optional[float] = None
        self._end: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._end = time.perf_counter()

    def duration_ms(self) -> int:
        """Elapsed milliseconds; measured up to now while still inside the block."""
        if self._start is None:
            return 0
        end = self._end if self._end is not None else time.perf_counter()
        return int((end - self._start) * 1000)
