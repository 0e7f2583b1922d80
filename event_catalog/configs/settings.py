"""Centralized settings management for the event catalog."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings powered by pydantic-settings.

    Loads configuration from environment variables and a .env file located
    in the project root.
    """

    # -------------------------------------------------------------------------
    # ENVIRONMENT
    # -------------------------------------------------------------------------
    ENV: str = "development"
    DEBUG: bool = False

    # -------------------------------------------------------------------------
    # DATA SOURCE
    # -------------------------------------------------------------------------
    DATA_SOURCE: Literal["webhook", "local"] = "webhook"
    WEBHOOK_URL: str = ""
    LOCAL_DATA_PATH: Path = Path("catalog.json")
    REQUEST_TIMEOUT: float = Field(default=30.0, gt=0)
    API_KEY: SecretStr | None = None

    # -------------------------------------------------------------------------
    # LOGGING
    # -------------------------------------------------------------------------
    LOG_LEVEL: str = "INFO"
    JSON_LOGS: bool = False

    # -------------------------------------------------------------------------
    # PATHS
    # -------------------------------------------------------------------------
    # BASE_DIR points to the event_catalog package
    BASE_DIR: Path = Path(__file__).resolve().parents[1]

    CATALOG_CONFIG_PATH: Path = BASE_DIR / "configs" / "catalog.yaml"

    # -------------------------------------------------------------------------
    # CONFIGURATION
    # -------------------------------------------------------------------------
    model_config = SettingsConfigDict(
        env_file=str(Path(__file__).resolve().parents[2] / ".env"),
        env_file_encoding="utf-8",
        # Allow extra fields in .env but ignore them in the model
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns
    -------
    Settings
        The singleton settings instance.
    """
    return Settings()
