"""MCP tools exposing the assistant skills.

Each tool drives one long-lived orchestrator, so loading/busy state and the
streak survive across calls for the lifetime of the server process.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from fastmcp import FastMCP

from apex.domains.wellness.domain_logic.health_score import (
    UserLog,
    score_band,
    validate_sleep_hours,
)

if TYPE_CHECKING:
    from apex.core.audit.logger import AuditLogger
    from apex.domains.wellness.domain_logic.streak import StreakTracker
    from apex.domains.wellness.orchestrator import SkillOrchestrator, SkillOutcome

logger = logging.getLogger(__name__)


@dataclass
class AssistantSkills:
    """The four orchestrators served by one application."""

    briefing: SkillOrchestrator
    journaling: SkillOrchestrator
    motivation: SkillOrchestrator
    energizer: SkillOrchestrator


def _outcome_json(outcome: SkillOutcome, **extra) -> str:
    body = {"status": outcome.status, "text": outcome.text, **extra}
    return json.dumps(body)


def register_assistant_tools(
    mcp: FastMCP,
    skills: AssistantSkills,
    streak: StreakTracker,
    audit: AuditLogger | None = None,
) -> None:
    """Register the assistant skill tools on the MCP server."""

    @mcp.tool
    async def generate_briefing(
        sleep_hours: float = 7.5,
        meal_summary: str = "",
        workout_summary: str = "",
    ) -> str:
        """Generate today's morning briefing and health score from your log.

        Args:
            sleep_hours: Hours slept last night, 0-12 in half-hour steps.
            meal_summary: What you ate (e.g., 'Oatmeal, chicken salad').
            workout_summary: What exercise you did (e.g., '3-mile run').
        """
        try:
            hours = validate_sleep_hours(sleep_hours)
        except ValueError as exc:
            return json.dumps({"status": "error", "message": str(exc)})

        log = UserLog(sleep_hours=hours, meal_summary=meal_summary, workout_summary=workout_summary)
        outcome = await skills.briefing.generate(log)
        if outcome.score is None:
            return _outcome_json(outcome, streak_count=outcome.streak)
        return _outcome_json(
            outcome,
            health_score=outcome.score,
            score_band=score_band(outcome.score),
            streak_count=outcome.streak,
        )

    @mcp.tool
    async def journaling_questions(problem: str) -> str:
        """Get three open-ended journaling questions about a problem on your mind.

        Args:
            problem: The problem or challenge you're stuck on.
        """
        return _outcome_json(await skills.journaling.generate(problem))

    @mcp.tool
    async def motivation_pitch(task: str) -> str:
        """Get an encouraging 5-minute way to start a task you keep putting off.

        Args:
            task: The task you are procrastinating on.
        """
        return _outcome_json(await skills.motivation.generate(task))

    @mcp.tool
    async def desk_energizer() -> str:
        """Get three quick exercises you can do at your desk."""
        return _outcome_json(await skills.energizer.generate())

    @mcp.tool
    def streak_status() -> str:
        """Show the current briefing streak."""
        state = streak.snapshot()
        return json.dumps({
            "streak_count": state.count,
            "last_briefing_date": (
                state.last_success_date.isoformat() if state.last_success_date else None
            ),
        })

    if audit is not None:

        @mcp.tool
        def usage_history(limit: int = 20) -> str:
            """List recent assistant requests and how many sent data to the AI provider.

            Args:
                limit: Maximum number of events to return.
            """
            events = audit.get_events(limit=max(1, min(limit, 200)))
            return json.dumps({
                "events": events,
                "total_requests": audit.count_events(),
                "llm_disclosures": audit.count_disclosures(),
            })
