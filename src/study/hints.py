"""
Hint cascade for the challenge on screen.

Hints are derived from the challenge metadata once, when the challenge
becomes current, and revealed one at a time on request.

Reveal order: the available hints are consumed from the end of the list,
so they come out in reverse of the precedence order they are computed in
(user notes first, part of speech last).
"""

from __future__ import annotations

from src.study.challenge import Challenge

# (label, attribute) in precedence order
HINT_FIELDS: tuple[tuple[str, str], ...] = (
    ("Part of Speech", "part_of_speech"),
    ("Infinitive", "infinitive"),
    ("Other Hints", "hint"),
    ("Your Notes", "user_notes"),
)


def compute_available(challenge: Challenge) -> list[str]:
    """Build the labelled hint list for ``challenge``, skipping empty fields."""
    hints = []
    for label, attr in HINT_FIELDS:
        value = getattr(challenge, attr)
        if value:
            hints.append(f"{label}: {value}")
    return hints


class HintCascade:
    """Per-challenge hint state: what is left and what has been shown."""

    def __init__(self, challenge: Challenge | None = None):
        self.available: list[str] = []
        self.revealed: list[str] = []
        if challenge is not None:
            self.reset(challenge)

    def reset(self, challenge: Challenge) -> None:
        """Recompute hints for a new current challenge."""
        self.available = [] if challenge.is_zero else compute_available(challenge)
        self.revealed = []

    def reveal_next(self) -> str | None:
        """Move one hint from available to revealed; None when exhausted."""
        if not self.available:
            return None
        hint = self.available.pop()
        self.revealed.append(hint)
        return hint

    @property
    def has_more(self) -> bool:
        return bool(self.available)

    @property
    def total(self) -> int:
        return len(self.available) + len(self.revealed)
