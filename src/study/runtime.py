"""
Study Runtime: drives a StudySessionController on an asyncio loop.

Messages are applied strictly in arrival order, one at a time. Commands
returned by the controller run as independent tasks against the study
service; each task posts exactly one follow-up message when it finishes
(BatchFetched / VerdictReceived on success, OperationFailed otherwise).
Tasks are never cancelled or fenced, so a slow stale result can land
after a fresh one and overwrite it.

Usage:
    runtime = StudyRuntime(controller, service)
    runtime.begin()
    await runtime.settle()          # first batch loaded (or failed)
    runtime.post(DraftAnswerChanged("gato"))
    runtime.post(SubmitRequested())
    await runtime.settle()
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable

from loguru import logger

from src.study.controller import SessionView, StudySessionController
from src.study.messages import (
    BatchFetched,
    Command,
    FetchBatch,
    Message,
    OperationFailed,
    SubmitAnswer,
    VerdictReceived,
)
from src.study.service import StudyService, StudyServiceError


class StudyRuntime:
    """Message loop plus command executor for one study session."""

    def __init__(
        self,
        controller: StudySessionController,
        service: StudyService,
        on_change: Callable[[SessionView], None] | None = None,
    ):
        self.controller = controller
        self.service = service
        self.on_change = on_change
        self._inbox: asyncio.Queue[Message] = asyncio.Queue()
        self._tasks: set[asyncio.Task[None]] = set()

    # =========================================================================
    # Message delivery
    # =========================================================================

    def begin(self) -> None:
        """Schedule the initial batch fetch."""
        self._schedule(self.controller.start())

    def post(self, message: Message) -> None:
        """Enqueue a message; it is applied on the next ``process_pending``."""
        self._inbox.put_nowait(message)

    def process_pending(self) -> int:
        """
        Apply every queued message in arrival order.

        Returns:
            Number of messages applied
        """
        applied = 0
        while not self._inbox.empty():
            message = self._inbox.get_nowait()
            command = self.controller.update(message)
            applied += 1
            if command is not None:
                self._schedule(command)
            if self.on_change is not None:
                self.on_change(self.controller.view())
        return applied

    async def settle(self) -> None:
        """Run until no messages are queued and no tasks are in flight."""
        while True:
            self.process_pending()
            if not self._tasks:
                break
            await asyncio.wait(set(self._tasks), return_when=asyncio.FIRST_COMPLETED)
        self.process_pending()

    async def dispatch(self, message: Message) -> SessionView:
        """Post a message, wait for all resulting work, and return the view."""
        self.post(message)
        await self.settle()
        return self.controller.view()

    @property
    def in_flight(self) -> int:
        return len(self._tasks)

    # =========================================================================
    # Command execution
    # =========================================================================

    def _schedule(self, command: Command) -> asyncio.Task[None]:
        task = asyncio.create_task(self._execute(command))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _execute(self, command: Command) -> None:
        try:
            result = await self._run_command(command)
        except StudyServiceError as e:
            logger.warning(f"{type(command).__name__} failed: {e}")
            result = OperationFailed(str(e) or type(e).__name__)
        except Exception as e:
            logger.exception(f"Unexpected error while running {type(command).__name__}")
            result = OperationFailed(f"Unexpected error: {e}")
        self.post(result)

    async def _run_command(self, command: Command) -> Message:
        if isinstance(command, FetchBatch):
            batch = await self.service.fetch_batch(command.subject_id, command.limit)
            logger.debug(f"Fetched {len(batch)} challenges for subject {command.subject_id}")
            return BatchFetched(tuple(batch))
        if isinstance(command, SubmitAnswer):
            verdict = await self.service.submit_answer(command.challenge, command.answer_text)
            logger.debug(f"Verdict for vocab {command.challenge.vocab_id}: {verdict}")
            return VerdictReceived(verdict)
        raise TypeError(f"Unsupported command: {command!r}")
