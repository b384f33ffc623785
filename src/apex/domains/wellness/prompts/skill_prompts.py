"""Prompt builders for the four assistant skills.

Each builder returns a ``ChatRequest`` pairing a fixed persona (system
message) with the user content for that skill.
"""

from __future__ import annotations

from apex.core.llm.provider import ChatRequest
from apex.domains.wellness.domain_logic.health_score import UserLog

BRIEFING_PERSONA = (
    "You are Apex, a helpful health assistant. Analyze user logs for a "
    "'Morning Briefing'. Be concise, positive, and connect the inputs."
)

JOURNALING_PERSONA = (
    "You are a journaling guide. The user is stuck on a problem. Your task is to "
    "provide a sequence of exactly three powerful, open-ended questions to help them "
    "clarify their thoughts and identify a potential next step. Do not answer the "
    "question for them. Just provide the three questions."
)

MOTIVATION_PERSONA = (
    "You are an upbeat motivation coach. The user is putting off a task. Pitch a "
    "tiny, low-effort way to start it in the next 5 minutes, so starting feels easy. "
    "Keep it short, warm and encouraging, and never lecture."
)

ENERGIZER_PERSONA = (
    "You are a workplace wellness coach. Suggest gentle movements that can be done "
    "at a desk in office clothes, with no equipment, in under a minute each."
)

ENERGIZER_PROMPT = (
    "I have been sitting at my desk for a while and my energy is dropping. "
    "Give me exactly three short desk exercises as a numbered list, one line each."
)

NO_FOOD_LOGGED = "No food logged."
NO_WORKOUT_LOGGED = "No workout logged."


def briefing_user_prompt(log: UserLog) -> str:
    """Three-line summary of today's log; blank fields get their placeholder."""
    nutrition = log.meal_summary.strip() or NO_FOOD_LOGGED
    fitness = log.workout_summary.strip() or NO_WORKOUT_LOGGED
    return f"Sleep: {log.sleep_hours:.1f} hours\nNutrition: {nutrition}\nFitness: {fitness}"


def build_briefing_request(log: UserLog, **params) -> ChatRequest:
    return ChatRequest(BRIEFING_PERSONA, briefing_user_prompt(log), **params)


def build_journaling_request(problem: str, **params) -> ChatRequest:
    return ChatRequest(JOURNALING_PERSONA, problem, **params)


def build_motivation_request(task: str, **params) -> ChatRequest:
    return ChatRequest(MOTIVATION_PERSONA, task, **params)


def build_energizer_request(**params) -> ChatRequest:
    return ChatRequest(ENERGIZER_PERSONA, ENERGIZER_PROMPT, **params)
