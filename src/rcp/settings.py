"""Checksum settings via environment variables."""

from __future__ import annotations

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ["Settings"]


class Settings(BaseSettings):
    """Per-partner checksum configuration, read from ``RCP_*`` variables."""

    model_config = SettingsConfigDict(env_prefix="RCP_")

    # Provisioned out-of-band; only known to both partners
    shared_secret: SecretStr = SecretStr("")

    # Replay protection
    use_time_component: bool = True
    time_delta: int = Field(default=5, ge=0)

    # Logging
    log_level: str = "INFO"
    log_json: bool = True
