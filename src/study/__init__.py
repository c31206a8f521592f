"""
Study Session Module.

Provides the client-side core of a vocabulary study session:
- Challenge data entity and its single-consumption queue
- Hint cascade for the challenge on screen
- Session controller (message -> state + command state machine)
- Async runtime executing commands against a study service
"""

from src.study.challenge import Challenge
from src.study.challenge_queue import ChallengeQueue
from src.study.controller import (
    SessionPhase,
    SessionState,
    SessionView,
    StudySessionController,
)
from src.study.hints import HintCascade, compute_available
from src.study.runtime import StudyRuntime
from src.study.service import (
    MalformedResponseError,
    RemoteServiceError,
    StudyService,
    StudyServiceError,
    TransportError,
)

__all__ = [
    "Challenge",
    "ChallengeQueue",
    "HintCascade",
    "compute_available",
    "SessionPhase",
    "SessionState",
    "SessionView",
    "StudySessionController",
    "StudyRuntime",
    "StudyService",
    "StudyServiceError",
    "TransportError",
    "MalformedResponseError",
    "RemoteServiceError",
]
