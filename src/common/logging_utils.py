"""Centralised logging configuration and structured-log helpers."""
from __future__ import annotations

import logging
import os
import time
from typing import Any, Dict, Optional
from urllib.parse import urlsplit, urlunsplit

from constants import Constants

_VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def configure_logging(log_file: Optional[str] = None) -> None:
    """Configure the root logger from the environment.

    The level comes from GAVCHECK_LOG_LEVEL (default INFO). Calling this
    more than once replaces previously installed handlers.

    Args:
        log_file: Optional path; when given, records go there instead of stderr.
    """
    level_name = os.environ.get(Constants.ENV_LOG_LEVEL, "INFO").upper()
    if level_name not in _VALID_LEVELS:
        level_name = "INFO"

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler: logging.Handler
    if log_file:
        handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(Constants.LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(getattr(logging, level_name))


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build an ``extra=`` payload, dropping fields that are None."""
    return {k: v for k, v in fields.items() if v is not None}


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when DEBUG records from this logger would be emitted."""
    return logger.isEnabledFor(logging.DEBUG)


def safe_url(url: str) -> str:
    """Strip credentials, query and fragment from a URL before logging it."""
    try:
        parts = urlsplit(url)
    except ValueError:
        return url
    netloc = parts.hostname or ""
    if parts.port:
        netloc = f"{netloc}:{parts.port}"
    return urlunsplit((parts.scheme, netloc, parts.path, "", ""))


class Timer:
    """Context manager measuring wall time in milliseconds."""

    def __init__(self) -> None:
        self._start = 0.0
        self._end: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        self._end = None
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self._end = time.perf_counter()

    def duration_ms(self) -> int:
        end = self._end if self._end is not None else time.perf_counter()
        return int((end - self._start) * 1000)
