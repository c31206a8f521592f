"""
Challenge: a single vocabulary prompt issued to the learner.

Challenges are only ever built from a study service response and are never
mutated afterwards. A zero value exists as an initialization sentinel for
the session before the first batch arrives; it is never shown to the user.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


# Wire field name -> Challenge attribute
WIRE_FIELDS: dict[str, str] = {
    "vocabId": "vocab_id",
    "vocabStudyId": "vocab_study_id",
    "prompt": "prompt",
    "firstLang": "first_language_text",
    "pos": "part_of_speech",
    "infinitive": "infinitive",
    "hint": "hint",
    "userNotes": "user_notes",
    "numLearningWords": "word_count",
}

_INT_FIELDS = {"vocab_id", "vocab_study_id", "word_count"}


@dataclass(frozen=True)
class Challenge:
    """One vocabulary item from a fetched batch."""

    vocab_id: int
    vocab_study_id: int
    prompt: str
    first_language_text: str = ""
    part_of_speech: str = ""
    infinitive: str = ""
    hint: str = ""
    user_notes: str = ""
    word_count: int = 0

    @classmethod
    def zero(cls) -> Challenge:
        """All-empty placeholder used before the first batch arrives."""
        return cls(vocab_id=0, vocab_study_id=0, prompt="")

    @property
    def is_zero(self) -> bool:
        return self == Challenge.zero()

    @property
    def key(self) -> tuple[int, int]:
        """Identity within a batch."""
        return (self.vocab_id, self.vocab_study_id)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Challenge:
        """
        Parse a challenge from a service payload.

        Accepts the camelCase wire names (``vocabId``, ``firstLang``, ...).
        Missing optional text fields default to empty strings and a missing
        ``numLearningWords`` defaults to 0. ``null`` is treated as missing.

        Raises:
            KeyError: If ``vocabId``, ``vocabStudyId`` or ``prompt`` is absent.
            ValueError: If ``prompt`` is blank or an integer field cannot be
                converted.
            TypeError: If ``data`` is not a mapping.
        """
        if not isinstance(data, dict):
            raise TypeError(f"challenge payload must be an object, got {type(data).__name__}")

        for required in ("vocabId", "vocabStudyId", "prompt"):
            if data.get(required) is None:
                raise KeyError(required)
        if not str(data["prompt"]).strip():
            raise ValueError("prompt must not be empty")

        kwargs: dict[str, Any] = {}
        for wire_name, attr in WIRE_FIELDS.items():
            value = data.get(wire_name)
            if value is None:
                continue
            if attr in _INT_FIELDS:
                if isinstance(value, bool):
                    raise ValueError(f"{wire_name} must be an integer, got {value!r}")
                kwargs[attr] = int(value)
            else:
                kwargs[attr] = str(value)
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Convert back to the wire format."""
        return {wire_name: getattr(self, attr) for wire_name, attr in WIRE_FIELDS.items()}
