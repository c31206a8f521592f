"""
Contract for the remote study service, and the errors it may raise.

The session controller never talks to a service directly; the runtime
executes FetchBatch / SubmitAnswer commands against an object satisfying
StudyService and turns every StudyServiceError into an OperationFailed
message.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from src.study.challenge import Challenge


class StudyServiceError(Exception):
    """Base class for every failure reported by a study service."""


class TransportError(StudyServiceError):
    """Network failure, timeout, or non-success HTTP status."""


class MalformedResponseError(StudyServiceError):
    """Response payload could not be decoded into the expected shape."""


class RemoteServiceError(StudyServiceError):
    """The service answered but reported a business error (e.g. unknown subject)."""


@runtime_checkable
class StudyService(Protocol):
    """Remote grading service used by the study session."""

    async def fetch_batch(self, subject_id: int, limit: int) -> list[Challenge]:
        """Fetch up to ``limit`` challenges from the start of the subject's pool."""
        ...

    async def submit_answer(self, challenge: Challenge, answer_text: str) -> str:
        """Submit one answer and return the human-readable verdict."""
        ...

    async def close(self) -> None:
        """Release any held resources."""
        ...
