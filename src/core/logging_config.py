"""
Loguru sink configuration shared by the CLI entry points.
"""

from __future__ import annotations

import sys

from loguru import logger

STDERR_FORMAT = "<dim>{time:HH:mm:ss}</dim> | <level>{level: <8}</level> | {message}"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{line} | {message}"


def configure_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Replace the default loguru sink with a compact stderr sink (and optional file)."""
    logger.remove()
    logger.add(sys.stderr, level=level, format=STDERR_FORMAT)
    if log_file:
        logger.add(
            log_file,
            level="DEBUG",
            format=FILE_FORMAT,
            rotation="5 MB",
            retention=3,
            encoding="utf-8",
        )
