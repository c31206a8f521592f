"""
Offline study service backed by a local JSON deck.

Implements the same contract as the GraphQL client so a session can run
without the remote service. Grading is an exact, case-insensitive string
match.

Deck format:
    {
      "subjects": {
        "1": [
          {"vocabId": 1, "vocabStudyId": 10, "prompt": "cat",
           "firstLang": "cat", "answer": "gato", ...},
          ...
        ]
      }
    }
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from loguru import logger

from src.study.challenge import Challenge
from src.study.service import MalformedResponseError, RemoteServiceError

CORRECT_VERDICT = "Correct!"


class LocalDeckService:
    """In-memory study service; answers are kept beside the challenges."""

    def __init__(self, subjects: dict[int, list[tuple[Challenge, str]]]):
        self._subjects = subjects
        self._answers: dict[tuple[int, int], str] = {
            challenge.key: answer
            for entries in subjects.values()
            for challenge, answer in entries
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LocalDeckService:
        """
        Build a deck from its JSON structure.

        Raises:
            MalformedResponseError: If the deck does not match the format above
        """
        raw_subjects = data.get("subjects") if isinstance(data, dict) else None
        if not isinstance(raw_subjects, dict):
            raise MalformedResponseError("Deck must contain a 'subjects' object")

        subjects: dict[int, list[tuple[Challenge, str]]] = {}
        for subject_key, items in raw_subjects.items():
            if not isinstance(items, list):
                raise MalformedResponseError(f"Subject {subject_key} must be a list")
            entries = []
            for index, item in enumerate(items):
                try:
                    challenge = Challenge.from_dict(item)
                    answer = str(item["answer"])
                    entries.append((challenge, answer))
                except (KeyError, TypeError, ValueError) as e:
                    raise MalformedResponseError(
                        f"Invalid deck entry {subject_key}[{index}]: {e}"
                    ) from e
            try:
                subjects[int(subject_key)] = entries
            except ValueError as e:
                raise MalformedResponseError(f"Subject id {subject_key!r} is not an integer") from e
        return cls(subjects)

    @classmethod
    def from_file(cls, path: Path | str) -> LocalDeckService:
        """Load a deck from a JSON file."""
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise RemoteServiceError(f"Deck file not found: {path}") from e
        except OSError as e:
            raise RemoteServiceError(f"Could not read deck file {path}: {e}") from e
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise MalformedResponseError(f"Deck file {path} is not valid JSON: {e}") from e

        deck = cls.from_dict(data)
        logger.info(f"Loaded offline deck {path} ({len(deck._answers)} challenges)")
        return deck

    async def fetch_batch(self, subject_id: int, limit: int) -> list[Challenge]:
        entries = self._subjects.get(subject_id)
        if entries is None:
            raise RemoteServiceError(f"Unknown subject: {subject_id}")
        return [challenge for challenge, _ in entries[:limit]]

    async def submit_answer(self, challenge: Challenge, answer_text: str) -> str:
        expected = self._answers.get(challenge.key)
        if expected is None:
            raise RemoteServiceError(
                f"Unknown challenge: vocab {challenge.vocab_id} / study {challenge.vocab_study_id}"
            )
        if _grade(answer_text, expected):
            return CORRECT_VERDICT
        return f"Expected: {expected}"

    async def close(self) -> None:
        return None


def _grade(user_answer: str, correct: str) -> bool:
    """Exact string match grading, case-insensitive."""
    return user_answer.lower().strip() == correct.lower().strip()
