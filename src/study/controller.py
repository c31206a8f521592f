"""
Study Session Controller: the state machine behind a study session.

The controller owns the challenge queue, the current challenge, the
learner's draft answer and the hint cascade. It never performs I/O:
``update`` applies one message synchronously and returns the command (if
any) the runtime must execute. Command results come back as messages.

Phases:
    LOADING -> PRESENTING <-> SHOWING_OUTCOME, with FAILED reachable from
    anywhere and left again by the next user action. Advancing out of FAILED
    after a failed submit presents the same challenge again for a resubmit;
    otherwise it moves to the next challenge or refetches.

Concurrent fetch/submit results are not fenced by request id; whichever
completion is delivered last is applied.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from loguru import logger

from src.study.challenge import Challenge
from src.study.challenge_queue import ChallengeQueue
from src.study.hints import HintCascade
from src.study.messages import (
    AdvanceRequested,
    BatchFetched,
    Command,
    DraftAnswerChanged,
    FetchBatch,
    HintRequested,
    Message,
    OperationFailed,
    SubmitAnswer,
    SubmitRequested,
    VerdictReceived,
)

DEFAULT_SUBJECT_ID = 1
DEFAULT_BATCH_LIMIT = 5


class SessionPhase(str, Enum):
    """What the session is currently showing."""

    LOADING = "loading"
    PRESENTING = "presenting"
    SHOWING_OUTCOME = "showing_outcome"
    FAILED = "failed"


@dataclass(frozen=True)
class SessionState:
    """
    Snapshot of the session. Replaced wholesale on every transition.

    ``challenge_version`` increases every time the current challenge is
    swapped, so views can tell a new challenge from an equal-looking one.
    """

    phase: SessionPhase = SessionPhase.LOADING
    challenge: Challenge = field(default_factory=Challenge.zero)
    draft: str = ""
    verdict: str = ""
    error: str = ""
    submitting: bool = False
    challenge_version: int = 0

    @property
    def has_challenge(self) -> bool:
        return not self.challenge.is_zero


@dataclass(frozen=True)
class SessionView:
    """Everything a view layer needs to render the session."""

    phase: SessionPhase
    prompt: str
    first_language_text: str
    word_count: int
    draft: str
    verdict: str
    error: str
    submitting: bool
    has_more_hints: bool
    revealed_hints: tuple[str, ...]


class StudySessionController:
    """
    Owns one study session and applies messages to it.

    Example:
        controller = StudySessionController(subject_id=1, limit=5)
        command = controller.start()             # FetchBatch(1, 5)
        controller.update(BatchFetched(batch))   # -> PRESENTING
    """

    def __init__(
        self,
        subject_id: int = DEFAULT_SUBJECT_ID,
        limit: int = DEFAULT_BATCH_LIMIT,
    ):
        if limit < 1:
            raise ValueError(f"limit must be at least 1, got {limit}")
        self.subject_id = subject_id
        self.limit = limit
        self.queue = ChallengeQueue()
        self.hints = HintCascade()
        self.state = SessionState()

        self._handlers: dict[type, Callable[[Any], Command | None]] = {
            BatchFetched: self._on_batch_fetched,
            DraftAnswerChanged: self._on_draft_changed,
            SubmitRequested: self._on_submit_requested,
            VerdictReceived: self._on_verdict_received,
            AdvanceRequested: self._on_advance_requested,
            HintRequested: self._on_hint_requested,
            OperationFailed: self._on_operation_failed,
        }

    # =========================================================================
    # Public API
    # =========================================================================

    @property
    def phase(self) -> SessionPhase:
        return self.state.phase

    def start(self) -> FetchBatch:
        """Command for the initial batch load."""
        return self._fetch_command()

    def update(self, message: Message) -> Command | None:
        """Apply one message; return the I/O command to run, if any."""
        handler = self._handlers.get(type(message))
        if handler is None:
            raise TypeError(f"Unsupported message: {message!r}")

        before = self.state.phase
        command = handler(message)
        logger.debug(
            f"{type(message).__name__}: {before.value} -> {self.state.phase.value}"
            + (f" (command: {type(command).__name__})" if command else "")
        )
        return command

    def view(self) -> SessionView:
        state = self.state
        challenge = state.challenge
        return SessionView(
            phase=state.phase,
            prompt=challenge.prompt,
            first_language_text=challenge.first_language_text,
            word_count=challenge.word_count,
            draft=state.draft,
            verdict=state.verdict,
            error=state.error,
            submitting=state.submitting,
            has_more_hints=self.hints.has_more,
            revealed_hints=tuple(self.hints.revealed),
        )

    # =========================================================================
    # Transitions
    # =========================================================================

    def _on_batch_fetched(self, message: BatchFetched) -> Command | None:
        self.queue.refill(message.challenges)
        challenge = self.queue.take_next()
        if challenge is None:
            logger.warning(f"Empty batch for subject {self.subject_id}; still loading")
            self._show_loading()
            return None

        self._present(challenge)
        return None

    def _on_draft_changed(self, message: DraftAnswerChanged) -> Command | None:
        if not self.state.has_challenge:
            logger.debug("Draft change ignored: no current challenge")
            return None
        self.state = replace(self.state, draft=message.text)
        return None

    def _on_submit_requested(self, message: SubmitRequested) -> Command | None:
        if not self.state.has_challenge:
            logger.debug("Submit ignored: no current challenge")
            return None
        if not self.state.draft:
            logger.debug("Submit ignored: no draft answer")
            return None
        self.state = replace(self.state, error="", submitting=True)
        return SubmitAnswer(challenge=self.state.challenge, answer_text=self.state.draft)

    def _on_verdict_received(self, message: VerdictReceived) -> Command | None:
        if not self.state.has_challenge:
            logger.debug("Verdict dropped: no current challenge to attach it to")
            return None
        self.state = replace(
            self.state,
            phase=SessionPhase.SHOWING_OUTCOME,
            verdict=message.text,
            error="",
            submitting=False,
        )
        return None

    def _on_advance_requested(self, message: AdvanceRequested) -> Command | None:
        if self.state.phase == SessionPhase.PRESENTING:
            logger.debug("Advance ignored: current challenge not answered yet")
            return None

        if self._awaiting_resubmit():
            logger.debug("Advance after failed submit: presenting the same challenge again")
            self.state = replace(self.state, phase=SessionPhase.PRESENTING, error="")
            return None

        challenge = self.queue.take_next()
        if challenge is not None:
            self._present(challenge)
            return None

        self._show_loading()
        return self._fetch_command()

    def _on_hint_requested(self, message: HintRequested) -> Command | None:
        if not self.state.has_challenge:
            return None
        hint = self.hints.reveal_next()
        if hint is None:
            logger.debug("No more hints for current challenge")
        return None

    def _on_operation_failed(self, message: OperationFailed) -> Command | None:
        logger.warning(f"Study operation failed: {message.message}")
        self.state = replace(
            self.state,
            phase=SessionPhase.FAILED,
            error=message.message,
            submitting=False,
        )
        return None

    # =========================================================================
    # Helpers
    # =========================================================================

    def _present(self, challenge: Challenge) -> None:
        self.state = SessionState(
            phase=SessionPhase.PRESENTING,
            challenge=challenge,
            challenge_version=self.state.challenge_version + 1,
        )
        self.hints.reset(challenge)

    def _show_loading(self) -> None:
        version = self.state.challenge_version
        if self.state.has_challenge:
            version += 1
        self.state = SessionState(phase=SessionPhase.LOADING, challenge_version=version)
        self.hints.reset(self.state.challenge)

    def _awaiting_resubmit(self) -> bool:
        """A submit failed and the current challenge still has no verdict."""
        state = self.state
        return state.phase == SessionPhase.FAILED and state.has_challenge and not state.verdict

    def _fetch_command(self) -> FetchBatch:
        return FetchBatch(subject_id=self.subject_id, limit=self.limit)
