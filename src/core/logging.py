"""Logging setup.

Provides consistent logging across the codebase. The CLI calls
`setup_logging` once; every other module just asks for a named logger.
"""

from __future__ import annotations

import logging
import sys


def setup_logging(level: str = "INFO", format_string: str | None = None) -> None:
    """Configure the root logger.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        format_string: Custom format string (uses default if None)
    """

    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=format_string,
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def get_logger(name: str) -> logging.Logger:
    """Get logger for a module (typically `__name__`)."""

    return logging.getLogger(name)
