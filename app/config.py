"""Settings for the blueprint intake service."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Loaded from environment variables and an optional .env file.

    Email delivery is disabled (reported as failed) until both
    RESEND_API_KEY and INTAKE_RECEIVER_EMAIL are set.
    """

    # email transmission
    RESEND_API_KEY: Optional[SecretStr] = None
    RESEND_API_URL: str = "https://api.resend.com/emails"
    INTAKE_RECEIVER_EMAIL: Optional[str] = None
    INTAKE_SENDER: str = "Micro-SI Intake <onboarding@resend.dev>"
    EMAIL_TIMEOUT_S: float = 10.0

    # persistence
    BLUEPRINT_STORE_DIR: Path = Path(".blueprints")

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
