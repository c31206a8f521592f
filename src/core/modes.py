"""
Vocab Study Operating Modes

Defines the two ways a study session can be served:
1. API Mode - Challenges and verdicts come from the GraphQL study service
2. Offline Mode - Challenges and verdicts come from a local JSON deck
"""

from __future__ import annotations

import os
from enum import Enum

from loguru import logger

from config import Settings
from src.integrations.gql_client import StudyGraphQLClient
from src.integrations.local_deck import LocalDeckService
from src.study.service import StudyService


class OperatingMode(str, Enum):
    """Operating mode for the study client."""

    API = "api"  # Remote GraphQL study service
    OFFLINE = "offline"  # Local deck, exact-match grading


def detect_mode(settings: Settings) -> OperatingMode:
    """
    Determine the operating mode.

    Detection logic:
    1. If VOCAB_OFFLINE is truthy, use offline
    2. Otherwise use the configured ``mode`` setting
    """
    if os.getenv("VOCAB_OFFLINE", "").lower() in ("1", "true", "yes", "on"):
        return OperatingMode.OFFLINE
    return OperatingMode(settings.mode)


def get_study_service(settings: Settings, mode: OperatingMode | None = None) -> StudyService:
    """Build the study service for the current mode."""
    mode = mode or detect_mode(settings)

    if mode == OperatingMode.OFFLINE:
        logger.info(f"Offline mode - grading from deck {settings.deck_path}")
        return LocalDeckService.from_file(settings.deck_path)

    logger.info(f"API mode - study service at {settings.gql_url}")
    return StudyGraphQLClient(**settings.get_client_config())
