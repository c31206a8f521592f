"""
Unit tests for settings, mode detection and logging setup.
"""

import json
from pathlib import Path

import pytest
from loguru import logger
from pydantic import ValidationError

from config import Settings
from src.core.logging_config import configure_logging
from src.core.modes import OperatingMode, detect_mode, get_study_service
from src.integrations.gql_client import StudyGraphQLClient
from src.integrations.local_deck import LocalDeckService


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "VOCAB_MODE",
        "VOCAB_OFFLINE",
        "VOCAB_GQL_URL",
        "VOCAB_SUBJECT_ID",
        "VOCAB_BATCH_LIMIT",
        "VOCAB_REQUEST_TIMEOUT_SECONDS",
        "VOCAB_DECK_PATH",
    ):
        monkeypatch.delenv(name, raising=False)


def _settings(**overrides) -> Settings:
    return Settings(_env_file=None, **overrides)


class TestSettings:
    def test_defaults(self):
        settings = _settings()

        assert settings.mode == "api"
        assert settings.gql_url == "http://127.0.0.1:3001/gql"
        assert settings.subject_id == 1
        assert settings.batch_limit == 5
        assert settings.request_timeout_seconds == 30.0
        assert settings.deck_path == Path("data/sample_deck.json")
        assert settings.is_offline is False

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("VOCAB_GQL_URL", "http://study.local/gql")
        monkeypatch.setenv("VOCAB_SUBJECT_ID", "7")
        monkeypatch.setenv("VOCAB_BATCH_LIMIT", "12")
        monkeypatch.setenv("VOCAB_MODE", "offline")

        settings = _settings()

        assert settings.gql_url == "http://study.local/gql"
        assert settings.subject_id == 7
        assert settings.batch_limit == 12
        assert settings.is_offline is True

    def test_rejects_non_positive_batch_limit(self):
        with pytest.raises(ValidationError):
            _settings(batch_limit=0)

    def test_rejects_non_positive_timeout(self):
        with pytest.raises(ValidationError):
            _settings(request_timeout_seconds=0)

    def test_client_config(self):
        settings = _settings(gql_url="http://x/gql", request_timeout_seconds=3)

        assert settings.get_client_config() == {"api_url": "http://x/gql", "timeout_seconds": 3.0}


class TestModes:
    def test_uses_configured_mode(self):
        assert detect_mode(_settings()) == OperatingMode.API
        assert detect_mode(_settings(mode="offline")) == OperatingMode.OFFLINE

    @pytest.mark.parametrize("value", ["1", "true", "YES", "on"])
    def test_offline_env_flag_wins(self, monkeypatch, value):
        monkeypatch.setenv("VOCAB_OFFLINE", value)

        assert detect_mode(_settings(mode="api")) == OperatingMode.OFFLINE

    def test_offline_service_reads_deck(self, tmp_path):
        deck_file = tmp_path / "deck.json"
        deck_file.write_text(
            json.dumps({"subjects": {"1": [{"vocabId": 1, "vocabStudyId": 1, "prompt": "a", "answer": "b"}]}}),
            encoding="utf-8",
        )

        service = get_study_service(_settings(deck_path=deck_file), OperatingMode.OFFLINE)

        assert isinstance(service, LocalDeckService)

    @pytest.mark.asyncio
    async def test_api_service_uses_settings(self):
        settings = _settings(gql_url="http://study.local/gql", request_timeout_seconds=4)

        service = get_study_service(settings)

        assert isinstance(service, StudyGraphQLClient)
        assert service.api_url == "http://study.local/gql"
        assert service.timeout_seconds == 4.0
        await service.close()


class TestLogging:
    def test_file_sink_receives_debug_messages(self, tmp_path):
        log_file = tmp_path / "vocab.log"

        configure_logging("WARNING", str(log_file))
        logger.debug("fetched 5 challenges")
        logger.remove()

        assert "fetched 5 challenges" in log_file.read_text(encoding="utf-8")
