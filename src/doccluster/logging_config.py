"""Logging configuration for the command-line entry point."""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional


def setup_logging(
    level: Optional[str] = None,
    format_string: Optional[str] = None,
    include_timestamp: bool = True,
) -> None:
    """Configure the root logger with a stderr handler.

    Results go to stdout, so log records are kept off it.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               If None, reads from LOG_LEVEL env var or defaults to WARNING.
        format_string: Custom format string. If None, uses default format.
        include_timestamp: Whether to include timestamp in log messages.
    """
    if level is None:
        level = os.getenv("LOG_LEVEL", "WARNING")
    level = level.upper()

    if format_string is None:
        if include_timestamp:
            format_string = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
        else:
            format_string = "[%(levelname)s] %(name)s: %(message)s"

    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format=format_string,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=True,
    )
