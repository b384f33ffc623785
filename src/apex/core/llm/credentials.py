"""Credential providers — where the bearer token for the LLM endpoint comes from."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from apex.core.config.settings import Settings


@runtime_checkable
class CredentialProvider(Protocol):
    """Supplies an API key, or ``None`` when none is configured."""

    def get_credential(self) -> str | None: ...


class SettingsCredentialProvider:
    """Reads ``GROQ_API_KEY`` from application settings."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings

    def get_credential(self) -> str | None:
        return self._settings.groq_api_key.strip() or None


class StaticCredentialProvider:
    """Fixed credential, used by tests and the mock provider."""

    def __init__(self, value: str | None) -> None:
        self._value = (value or "").strip() or None

    def get_credential(self) -> str | None:
        return self._value
