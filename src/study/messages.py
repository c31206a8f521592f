"""
Messages delivered to the study session controller, and the commands it
hands back to the runtime.

UI events (typing, submit, next, hint) and async task results are all
expressed as messages. Commands describe I/O the runtime must perform; the
result of each command comes back as exactly one message.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from src.study.challenge import Challenge


# =============================================================================
# Messages
# =============================================================================


@dataclass(frozen=True)
class BatchFetched:
    """A fetch completed successfully."""

    challenges: tuple[Challenge, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class DraftAnswerChanged:
    text: str


@dataclass(frozen=True)
class SubmitRequested:
    pass


@dataclass(frozen=True)
class VerdictReceived:
    """A submission was graded; ``text`` is displayed verbatim."""

    text: str


@dataclass(frozen=True)
class AdvanceRequested:
    pass


@dataclass(frozen=True)
class HintRequested:
    pass


@dataclass(frozen=True)
class OperationFailed:
    """Any async operation rejected; ``message`` is human readable."""

    message: str


Message = Union[
    BatchFetched,
    DraftAnswerChanged,
    SubmitRequested,
    VerdictReceived,
    AdvanceRequested,
    HintRequested,
    OperationFailed,
]


# =============================================================================
# Commands
# =============================================================================


@dataclass(frozen=True)
class FetchBatch:
    subject_id: int
    limit: int


@dataclass(frozen=True)
class SubmitAnswer:
    challenge: Challenge
    answer_text: str


Command = Union[FetchBatch, SubmitAnswer]


__all__ = [
    "AdvanceRequested",
    "BatchFetched",
    "Command",
    "DraftAnswerChanged",
    "FetchBatch",
    "HintRequested",
    "Message",
    "OperationFailed",
    "SubmitAnswer",
    "SubmitRequested",
    "VerdictReceived",
]
