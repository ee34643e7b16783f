"""
Configuration settings for the quizbank service.

Uses Pydantic Settings for environment variable management with .env file support.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
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
    # API Server
    # ========================================
    api_host: str = Field(
        default="127.0.0.1",
        description="API server host",
    )
    api_port: int = Field(
        default=8200,
        description="API server port",
    )

    # ========================================
    # Question Pools
    # ========================================
    pool_seed: str | None = Field(
        default=None,
        description="Seed for pool shuffles (None for system randomness)",
    )
    pool_rebuild_policy: Literal["size", "content"] = Field(
        default="size",
        description="Rebuild a pool when the matching corpus changes size, or when its contents change",
    )

    # ========================================
    # Quiz Assembly
    # ========================================
    quiz_default_questions: int = Field(
        default=10,
        description="Questions per generated quiz when no count is given",
    )
    quiz_max_questions: int = Field(
        default=100,
        description="Upper bound on questions per generated quiz",
    )
    assembly_mcq_only: bool = Field(
        default=True,
        description="Only allow MCQ questions in a hand-picked assembly",
    )
    preview_chars: int = Field(
        default=30,
        description="Characters of question text shown in user-facing messages",
    )
    quiz_registry_size: int = Field(
        default=200,
        description="Generated or assembled quizzes kept for grading, oldest dropped first",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
