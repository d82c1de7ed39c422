"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Client settings loaded from environment variables."""

    arbiter_ws_url: str
    arbiter_api_url: str | None = None
    signature_extractor: str | None = None
    join_capture_attempts: int = 10
    join_capture_delay_seconds: float = 0.3
    shoot_capture_attempts: int = 1
    shoot_capture_delay_seconds: float = 0.3
    roster_poll_interval_seconds: float = 4.0
    http_timeout_seconds: float = 5.0
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def normalize_base_url(raw: str | None) -> str | None:
    """Strip whitespace and trailing slashes from an endpoint URL."""
    if raw is None:
        return None
    cleaned = raw.strip().rstrip("/")
    return cleaned or None
