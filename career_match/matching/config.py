"""Configuration settings for career matching."""

from __future__ import annotations

from typing import Annotated

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class MatchingConfig(BaseSettings):
    """Career matching configuration settings.

    All settings have sensible defaults and can be overridden via
    environment variables with `MATCHING_` prefix or a .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="MATCHING_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Threshold settings (percentages)
    match_threshold: Annotated[float, Field(ge=0.0, le=100.0)] = Field(
        default=60.0,
        description="Minimum skill percentage for a skill to count as possessed",
    )
    strength_threshold: Annotated[float, Field(ge=0.0, le=100.0)] = Field(
        default=80.0,
        description="Minimum skill percentage for a matched skill to be a strength",
    )
    min_match_floor: Annotated[float, Field(ge=0.0, le=100.0)] = Field(
        default=10.0,
        description="Careers matching below this percentage are discarded",
    )

    # Output settings
    top_n: Annotated[int, Field(gt=0)] = Field(
        default=5,
        description="Maximum number of career matches returned",
    )

    # Execution settings
    max_workers: Annotated[int, Field(ge=1)] = Field(
        default=1,
        description="Worker threads used to evaluate careers (1 = serial)",
    )


# Singleton instance for easy import
_matching_config: MatchingConfig | None = None


def get_matching_config() -> MatchingConfig:
    """Get the matching configuration singleton."""
    global _matching_config
    if _matching_config is None:
        _matching_config = MatchingConfig()
    return _matching_config


def reset_matching_config() -> None:
    """Reset the matching configuration singleton (useful for testing)."""
    global _matching_config
    _matching_config = None
