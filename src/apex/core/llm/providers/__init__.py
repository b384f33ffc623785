"""Chat client implementations."""

from apex.core.llm.client import GroqChatClient
from apex.core.llm.providers.mock import MockChatClient

__all__ = ["GroqChatClient", "MockChatClient"]
