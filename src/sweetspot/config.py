"""Environment-driven configuration helpers for Sweet Spot."""

from __future__ import annotations

import os
from functools import lru_cache

from pydantic import AnyUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or .env files."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    database_url: AnyUrl | str = Field(default="sqlite:///./sweetspot.db")

    default_parlay_type: str = Field(default="OPTIMAL_6")
    default_strategy_versions: list[str] = Field(
        default_factory=lambda: ["v5.0_baseline", "v6.0_synergy"]
    )
    backtest_max_workers: int = Field(default=1, ge=1, le=32)
    log_level: str = Field(default="INFO")

    sweetspot_api_key: str = Field(default="", validation_alias="SWEETSPOT_API_KEY")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached application settings."""

    return Settings()  # type: ignore[call-arg]


def get_api_access_key() -> str:
    key = os.getenv("SWEETSPOT_API_KEY") or get_settings().sweetspot_api_key
    if not key:
        raise RuntimeError(
            "SWEETSPOT_API_KEY is not configured. Set it in your environment or .env file."
        )
    return key
