"""
Core Module - Wiring shared by the CLI entry points.

Components:
- modes: Operating mode selection (API, Offline) and study service factory
- logging_config: Loguru sink setup
"""

from src.core.logging_config import configure_logging
from src.core.modes import OperatingMode, detect_mode, get_study_service

__all__ = [
    "OperatingMode",
    "configure_logging",
    "detect_mode",
    "get_study_service",
]
