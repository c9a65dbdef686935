"""Centralized logging setup and small helpers for structured debug output."""

from __future__ import annotations

import logging
import os
import sys
from typing import Any, Dict, Optional

from constants import Constants

_VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Handlers added by configure_logging, replaced on the next call
_HANDLERS: list = []


def _resolve_level(level: Optional[str]) -> int:
    name = (level or os.environ.get(Constants.ENV_LOG_LEVEL) or "INFO").upper()
    if name not in _VALID_LEVELS:
        name = "INFO"
    return getattr(logging, name)


class _BelowWarning(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < logging.WARNING


def configure_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> None:
    """Configure the root logger.

    Records up to INFO go to stdout and WARNING and above to stderr, both
    using ``Constants.LOG_FORMAT``. The level is
    taken from ``level`` (CLI), then the PEERCHECK_LOG_LEVEL environment
    variable, then INFO.

    Args:
        level: Level name such as "DEBUG".
        log_file: Optional path; adds a timestamped file handler.
    """
    root = logging.getLogger()
    while _HANDLERS:
        handler = _HANDLERS.pop()
        root.removeHandler(handler)
        handler.close()

    progress = logging.StreamHandler(sys.stdout)
    progress.addFilter(_BelowWarning())
    problems = logging.StreamHandler(sys.stderr)
    problems.setLevel(logging.WARNING)
    for console in (progress, problems):
        console.setFormatter(logging.Formatter(Constants.LOG_FORMAT))
        root.addHandler(console)
        _HANDLERS.append(console)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(Constants.LOG_FILE_FORMAT))
        root.addHandler(file_handler)
        _HANDLERS.append(file_handler)

    root.setLevel(_resolve_level(level))


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when DEBUG records would be emitted by ``logger``."""
    return logger.isEnabledFor(logging.DEBUG)


def extra_context(**kwargs: Any) -> Dict[str, Any]:
    """Build an ``extra`` mapping for structured log records, dropping None values."""
    return {k: v for k, v in kwargs.items() if v is not None}
