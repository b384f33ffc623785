"""Apex wellness MCP server — application factory.

This module provides:
- create_app() for testability (integration tests create fresh server instances)
- Module-level `mcp` variable for FastMCP discovery
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable

from fastmcp import FastMCP

from apex.core.audit.logger import AuditLogger
from apex.core.config.settings import get_settings
from apex.core.llm.credentials import (
    CredentialProvider,
    SettingsCredentialProvider,
    StaticCredentialProvider,
)
from apex.core.llm.provider import ChatClient, create_chat_client
from apex.core.storage.database import AppDatabase
from apex.core.storage.settings_store import SQLiteSettingsStore
from apex.domains.wellness.domain_logic.streak import StreakTracker, calendar_today
from apex.domains.wellness.orchestrator import (
    briefing_orchestrator,
    energizer_orchestrator,
    journaling_orchestrator,
    motivation_orchestrator,
)
from apex.domains.wellness.tools.assistant_tools import (
    AssistantSkills,
    register_assistant_tools,
)

logger = logging.getLogger(__name__)


def create_app(
    *,
    chat_client_override: ChatClient | None = None,
    credential_provider_override: CredentialProvider | None = None,
    database_override: AppDatabase | None = None,
    today_override: Callable[[], date] | None = None,
) -> FastMCP:
    """Create and configure the Apex wellness MCP server.

    This is the main application factory. It:
    1. Creates the FastMCP server instance
    2. Creates the chat client and credential provider
    3. Opens the local store and loads the streak
    4. Builds the four skill orchestrators
    5. Registers all tools
    """
    settings = get_settings()

    server = FastMCP(
        "Apex Wellness",
        instructions=(
            "Personal wellness companion. Log sleep, meals and workouts for a "
            "morning briefing and health score, or ask for journaling questions, "
            "a motivation pitch, or quick desk exercises."
        ),
    )

    # --- Chat client + credential ---
    client = chat_client_override or create_chat_client(settings)
    if credential_provider_override is not None:
        credentials = credential_provider_override
    elif settings.llm_provider == "mock":
        credentials = StaticCredentialProvider("mock")
    else:
        credentials = SettingsCredentialProvider(settings)
        if credentials.get_credential() is None:
            logger.warning(
                "No GROQ_API_KEY configured; assistant requests will report a missing credential"
            )

    # --- Local store ---
    if database_override is not None:
        database = database_override
        database.initialize()
    else:
        database = AppDatabase(settings.db_path)
        database.initialize()
        logger.info(
            "Local store initialized: %s (schema v%d)",
            settings.db_path,
            database.get_schema_version(),
        )
    store = SQLiteSettingsStore(database)
    audit = AuditLogger(database)

    if today_override is not None:
        today = today_override
    else:
        tz_name = settings.streak_timezone

        def today() -> date:
            return calendar_today(tz_name)

    streak = StreakTracker(store, today=today)

    # --- Orchestrators ---
    request_params = {
        "model": settings.groq_model,
        "temperature": settings.llm_temperature,
        "max_tokens": settings.llm_max_tokens,
    }
    common = {"request_params": request_params, "audit": audit}
    skills = AssistantSkills(
        briefing=briefing_orchestrator(client, credentials, streak, **common),
        journaling=journaling_orchestrator(client, credentials, **common),
        motivation=motivation_orchestrator(client, credentials, **common),
        energizer=energizer_orchestrator(client, credentials, **common),
    )
    logger.info("Streak loaded: %d", streak.count)

    # --- Register tools ---
    @server.tool
    def health_check() -> dict:
        """Check server health and return basic status information."""
        return {
            "status": "ok",
            "server": "Apex Wellness",
            "version": "0.1.0",
            "llm_provider": settings.llm_provider,
            "model": settings.groq_model,
            "credential_configured": credentials.get_credential() is not None,
        }

    register_assistant_tools(server, skills, streak, audit)

    return server


# Module-level instance for FastMCP discovery. Lazy: only created when the
# attribute is accessed (not when tests import create_app).
def __getattr__(name: str):
    if name == "mcp":
        global mcp  # noqa: PLW0603
        mcp = create_app()
        return mcp
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
