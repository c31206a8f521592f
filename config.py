"""
Configuration settings for the vocab study client.

Uses Pydantic Settings for environment variable management with .env file support.
All variables are prefixed with VOCAB_ (e.g. VOCAB_GQL_URL, VOCAB_BATCH_LIMIT).
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="VOCAB_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Study Service
    # ========================================
    mode: Literal["api", "offline"] = Field(
        default="api",
        description="'api' talks to the GraphQL study service, 'offline' grades from a local deck",
    )
    gql_url: str = Field(
        default="http://127.0.0.1:3001/gql",
        description="GraphQL endpoint of the study service",
    )
    request_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="HTTP timeout for a single fetch/submit request",
    )
    deck_path: Path = Field(
        default=Path("data/sample_deck.json"),
        description="JSON deck used in offline mode",
    )

    # ========================================
    # Session
    # ========================================
    subject_id: int = Field(
        default=1,
        description="Learner/subject whose study list is fetched",
    )
    batch_limit: int = Field(
        default=5,
        ge=1,
        description="Challenges requested per batch",
    )

    # ========================================
    # Logging
    # ========================================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging verbosity level",
    )
    log_file: str | None = Field(
        default=None,
        description="Log file path (None for stderr only)",
    )

    # ========================================
    # Helper Methods
    # ========================================
    @property
    def is_offline(self) -> bool:
        return self.mode == "offline"

    def get_client_config(self) -> dict[str, Any]:
        """Get GraphQL client configuration as a dictionary."""
        return {
            "api_url": self.gql_url,
            "timeout_seconds": self.request_timeout_seconds,
        }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
