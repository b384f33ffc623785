"""Tests for the skill prompt builders."""

from __future__ import annotations

from apex.domains.wellness.domain_logic.health_score import UserLog
from apex.domains.wellness.prompts.skill_prompts import (
    BRIEFING_PERSONA,
    ENERGIZER_PROMPT,
    JOURNALING_PERSONA,
    MOTIVATION_PERSONA,
    briefing_user_prompt,
    build_briefing_request,
    build_energizer_request,
    build_journaling_request,
    build_motivation_request,
)


class TestBriefingPrompt:
    def test_three_lines(self):
        log = UserLog(sleep_hours=7.5, meal_summary="Oatmeal", workout_summary="3-mile run")
        assert briefing_user_prompt(log) == (
            "Sleep: 7.5 hours\nNutrition: Oatmeal\nFitness: 3-mile run"
        )

    def test_placeholders_for_blank_fields(self):
        log = UserLog(sleep_hours=8.0, meal_summary="", workout_summary="  ")
        assert briefing_user_prompt(log) == (
            "Sleep: 8.0 hours\nNutrition: No food logged.\nFitness: No workout logged."
        )

    def test_one_decimal_sleep(self):
        assert briefing_user_prompt(UserLog(sleep_hours=6)).startswith("Sleep: 6.0 hours")

    def test_request_pairs_persona(self):
        req = build_briefing_request(UserLog(), model="m", temperature=0.2, max_tokens=50)
        assert req.system_prompt == BRIEFING_PERSONA
        assert (req.model, req.temperature, req.max_tokens) == ("m", 0.2, 50)


class TestTextSkills:
    def test_journaling_passes_raw_text(self):
        req = build_journaling_request("I keep doubting my thesis topic.")
        assert req.system_prompt == JOURNALING_PERSONA
        assert req.user_prompt == "I keep doubting my thesis topic."
        assert "three" in JOURNALING_PERSONA

    def test_motivation_persona(self):
        req = build_motivation_request("Clean the garage")
        assert req.system_prompt == MOTIVATION_PERSONA
        assert "5 minutes" in MOTIVATION_PERSONA
        assert req.user_prompt == "Clean the garage"

    def test_energizer_needs_no_input(self):
        req = build_energizer_request()
        assert req.user_prompt == ENERGIZER_PROMPT
        assert "exactly three" in ENERGIZER_PROMPT
        assert "numbered" in ENERGIZER_PROMPT
