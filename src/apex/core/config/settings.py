"""Application settings loaded from environment variables."""

from __future__ import annotations

from typing import Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Apex wellness companion configuration."""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # Server
    # Loopback by default: the assistant tools carry personal wellness logs
    # and there is no auth layer in front of them.
    apex_host: str = "127.0.0.1"
    apex_port: int = 8011
    apex_log_level: str = "info"
    apex_allow_insecure_bind: bool = False

    # Chat completion endpoint
    llm_provider: Literal["groq", "mock"] = "groq"
    groq_api_key: str = ""
    groq_base_url: str = "https://api.groq.com/openai/v1"
    groq_model: str = "llama3-8b-8192"
    llm_temperature: float = 0.7
    llm_max_tokens: int = 200
    llm_timeout_seconds: float = 30.0

    # Local settings store + audit trail
    db_path: str = "~/.apex/apex.db"

    # Streak day boundaries. Blank means the device-local calendar day.
    streak_timezone: str = ""

    @field_validator("streak_timezone")
    @classmethod
    def _check_timezone(cls, v: str) -> str:
        v = v.strip()
        if v:
            try:
                ZoneInfo(v)
            except (ZoneInfoNotFoundError, ValueError) as exc:
                raise ValueError(f"unknown timezone: {v!r}") from exc
        return v


def get_settings() -> Settings:
    """Create and return a Settings instance."""
    return Settings()
