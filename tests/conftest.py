"""Shared test fixtures for Apex tests."""

from __future__ import annotations

import asyncio
import json
import sys
from datetime import date
from pathlib import Path
from typing import Any

import pytest

# ---------------------------------------------------------------------------
# Test hermeticity
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _force_hermetic_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LLM_PROVIDER", "mock")
    monkeypatch.setenv("GROQ_API_KEY", "")
    monkeypatch.setenv("STREAK_TIMEZONE", "")
    monkeypatch.setenv("DB_PATH", ":memory:")

# Allow running tests without `pip install -e .` by making `src/` importable.
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_SRC_DIR = _PROJECT_ROOT / "src"
if str(_SRC_DIR) not in sys.path:
    sys.path.insert(0, str(_SRC_DIR))

import httpx  # noqa: E402

from apex.core.llm.client import GroqChatClient  # noqa: E402


# ---------------------------------------------------------------------------
# Clock
# ---------------------------------------------------------------------------

class FakeClock:
    """Settable calendar day for streak tests."""

    def __init__(self, today: date) -> None:
        self.today = today

    def __call__(self) -> date:
        return self.today


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(date(2026, 3, 10))


# ---------------------------------------------------------------------------
# Fake chat endpoint
# ---------------------------------------------------------------------------

class FakeChatEndpoint:
    """httpx.MockTransport handler that records requests and replays a canned reply.

    ``reply`` is either a JSON-serializable body, raw ``bytes``, or an
    exception instance to raise (simulating a transport failure).
    """

    def __init__(self, reply: Any = None, status_code: int = 200) -> None:
        self.reply = reply if reply is not None else _completion("Mock reply")
        self.status_code = status_code
        self.requests: list[httpx.Request] = []

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def last_json(self) -> dict[str, Any]:
        return json.loads(self.requests[-1].content)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self.reply, Exception):
            raise self.reply
        if isinstance(self.reply, bytes):
            return httpx.Response(self.status_code, content=self.reply)
        return httpx.Response(self.status_code, json=self.reply)


def _completion(content: Any) -> dict[str, Any]:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


@pytest.fixture
def completion():
    """Build a chat completion body with the given content."""
    return _completion


@pytest.fixture
def chat_endpoint() -> FakeChatEndpoint:
    return FakeChatEndpoint()


@pytest.fixture
def groq_client(chat_endpoint: FakeChatEndpoint):
    """GroqChatClient wired to the fake endpoint through httpx.MockTransport."""
    http = httpx.AsyncClient(transport=httpx.MockTransport(chat_endpoint))
    client = GroqChatClient(base_url="https://api.groq.test/openai/v1", http_client=http)
    yield client
    loop = asyncio.new_event_loop()
    try:
        loop.run_until_complete(client.aclose())
    finally:
        loop.close()


# ---------------------------------------------------------------------------
# In-memory storage fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def app_db():
    """Create an in-memory AppDatabase for testing."""
    from apex.core.storage.database import AppDatabase

    db = AppDatabase(":memory:")
    db.initialize()
    yield db
    db.close()


@pytest.fixture
def settings_store(app_db):
    from apex.core.storage.settings_store import SQLiteSettingsStore

    return SQLiteSettingsStore(app_db)


@pytest.fixture
def audit_logger(app_db):
    """Create an AuditLogger backed by in-memory SQLite."""
    from apex.core.audit.logger import AuditLogger

    return AuditLogger(app_db)
