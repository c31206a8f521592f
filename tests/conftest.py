"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import asyncio
import sys
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.study.challenge import Challenge  # noqa: E402
from src.integrations.local_deck import LocalDeckService  # noqa: E402


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "smoke" in str(item.fspath):
            item.add_marker(pytest.mark.smoke)


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def cat_challenge():
    return Challenge(
        vocab_id=1,
        vocab_study_id=101,
        prompt="cat",
        first_language_text="cat",
        part_of_speech="noun",
        hint="feline pet",
        word_count=1,
    )


@pytest.fixture
def dog_challenge():
    return Challenge(vocab_id=2, vocab_study_id=102, prompt="dog", word_count=1)


@pytest.fixture
def sample_payload():
    """A getStudyList item as the GraphQL service returns it."""
    return {
        "vocabId": 7,
        "vocabStudyId": 70,
        "prompt": "to speak",
        "firstLang": "to speak",
        "pos": "verb",
        "infinitive": "hablar",
        "hint": "",
        "userNotes": "regular -ar verb",
        "numLearningWords": 1,
    }


@pytest.fixture
def deck_service():
    """Offline deck with two subjects."""
    return LocalDeckService.from_dict(
        {
            "subjects": {
                "1": [
                    {"vocabId": 1, "vocabStudyId": 101, "prompt": "cat", "answer": "gato"},
                    {"vocabId": 2, "vocabStudyId": 102, "prompt": "dog", "answer": "perro"},
                ],
                "2": [
                    {"vocabId": 20, "vocabStudyId": 201, "prompt": "water", "answer": "agua"},
                ],
            }
        }
    )


class ScriptedStudyService:
    """
    Study service double whose calls block until the test releases them.

    Each call appends a pending entry; ``resolve``/``reject`` complete the
    n-th call, which lets tests control completion order.
    """

    def __init__(self):
        self.fetch_calls: list[tuple[int, int]] = []
        self.submit_calls: list[tuple[Challenge, str]] = []
        self._pending: list[asyncio.Future] = []

    async def fetch_batch(self, subject_id: int, limit: int) -> list[Challenge]:
        self.fetch_calls.append((subject_id, limit))
        return await self._wait()

    async def submit_answer(self, challenge: Challenge, answer_text: str) -> str:
        self.submit_calls.append((challenge, answer_text))
        return await self._wait()

    async def close(self) -> None:
        return None

    async def _wait(self):
        future = asyncio.get_running_loop().create_future()
        self._pending.append(future)
        return await future

    def resolve(self, index: int, value) -> None:
        self._pending[index].set_result(value)

    def reject(self, index: int, error: Exception) -> None:
        self._pending[index].set_exception(error)

    @property
    def pending_count(self) -> int:
        return len(self._pending)


@pytest.fixture
def scripted_service():
    return ScriptedStudyService()
