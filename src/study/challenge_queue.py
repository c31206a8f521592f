"""
Single-consumption queue over a fetched batch of challenges.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable

from src.study.challenge import Challenge


class ChallengeQueue:
    """
    Ordered queue of challenges owned by the session controller.

    Order is the order of the fetched batch. There is no reordering and no
    de-duplication. An empty queue is a normal condition, not an error.
    """

    def __init__(self, batch: Iterable[Challenge] = ()):
        self._items: deque[Challenge] = deque(batch)

    def refill(self, batch: Iterable[Challenge]) -> None:
        """Replace the queue with ``batch``; any stale remainder is dropped."""
        self._items = deque(batch)

    def take_next(self) -> Challenge | None:
        """Remove and return the head, or None if nothing is left."""
        if not self._items:
            return None
        return self._items.popleft()

    @property
    def remaining(self) -> int:
        return len(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __repr__(self) -> str:
        return f"ChallengeQueue(remaining={self.remaining})"
