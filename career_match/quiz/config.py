"""Configuration settings for quiz answer scoring."""

from __future__ import annotations

from typing import Annotated

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class QuizConfig(BaseSettings):
    """Answer scoring configuration settings.

    Overridable via environment variables with `QUIZ_` prefix or a .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="QUIZ_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    min_keyword_hits: Annotated[int, Field(ge=1)] = Field(
        default=1,
        description="Keywords an open_ended answer must mention to count as correct",
    )


# Singleton instance for easy import
_quiz_config: QuizConfig | None = None


def get_quiz_config() -> QuizConfig:
    """Get the quiz configuration singleton."""
    global _quiz_config
    if _quiz_config is None:
        _quiz_config = QuizConfig()
    return _quiz_config


def reset_quiz_config() -> None:
    """Reset the quiz configuration singleton (useful for testing)."""
    global _quiz_config
    _quiz_config = None
