"""Chat completion contract — request/result types and the client protocol."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Literal, Protocol, Union, runtime_checkable

if TYPE_CHECKING:
    from apex.core.config.settings import Settings

DEFAULT_MODEL = "llama3-8b-8192"
DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 200

FailureKind = Literal["credential_missing", "transport", "http_status", "malformed"]


@dataclass(frozen=True)
class ChatRequest:
    """One system/user message pair bound for the chat completion endpoint."""

    system_prompt: str
    user_prompt: str
    model: str = DEFAULT_MODEL
    temperature: float = DEFAULT_TEMPERATURE
    max_tokens: int = DEFAULT_MAX_TOKENS

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the JSON body the endpoint expects."""
        return {
            "messages": [
                {"role": "system", "content": self.system_prompt},
                {"role": "user", "content": self.user_prompt},
            ],
            "model": self.model,
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }


@dataclass(frozen=True)
class ChatSuccess:
    """Usable completion text, already trimmed."""

    text: str


@dataclass(frozen=True)
class ChatEmpty:
    """Well-formed response carrying no usable content."""


@dataclass(frozen=True)
class ChatFailure:
    """The call could not produce a response."""

    message: str
    kind: FailureKind


ChatResult = Union[ChatSuccess, ChatEmpty, ChatFailure]


@runtime_checkable
class ChatClient(Protocol):
    """Abstract interface for a single chat completion call."""

    async def send(self, request: ChatRequest, credential: str | None) -> ChatResult: ...


def create_chat_client(settings: Settings) -> ChatClient:
    """Factory function to create a chat client from settings.

    Args:
        settings: Application settings; ``llm_provider`` selects
            "groq" or "mock".

    Returns:
        A ChatClient instance.
    """
    if settings.llm_provider == "groq":
        from apex.core.llm.client import GroqChatClient

        return GroqChatClient(
            base_url=settings.groq_base_url,
            timeout=settings.llm_timeout_seconds,
        )
    elif settings.llm_provider == "mock":
        from apex.core.llm.providers.mock import MockChatClient

        return MockChatClient()
    else:
        raise ValueError(f"Unknown LLM provider: {settings.llm_provider}")
