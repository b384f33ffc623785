"""Mock chat client for offline runs and testing."""

from __future__ import annotations

from apex.core.llm.provider import (
    ChatEmpty,
    ChatFailure,
    ChatRequest,
    ChatResult,
    ChatSuccess,
)


class MockChatClient:
    """Mock client — returns a canned completion without any network I/O."""

    def __init__(self, response_content: str = "Mock assistant response.") -> None:
        self.response_content = response_content
        self.last_request: ChatRequest | None = None
        self.call_count: int = 0

    async def send(self, request: ChatRequest, credential: str | None) -> ChatResult:
        if not credential:
            return ChatFailure("credential missing", kind="credential_missing")
        self.last_request = request
        self.call_count += 1
        text = self.response_content.strip()
        if not text:
            return ChatEmpty()
        return ChatSuccess(text=text)
