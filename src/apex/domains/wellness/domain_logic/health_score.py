"""Daily health score — a 0-100 number from sleep, meals and workouts.

Pure functions, no I/O. Sleep contributes up to 40 points (8 hours earns
the full 40), a logged meal 30 and a logged workout 30.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Literal

SLEEP_TARGET_HOURS = 8.0
SLEEP_MAX_POINTS = 40
MEAL_POINTS = 30
WORKOUT_POINTS = 30
MAX_SCORE = 100

MIN_SLEEP_HOURS = 0.0
MAX_SLEEP_HOURS = 12.0
SLEEP_STEP_HOURS = 0.5

ScoreBand = Literal["good", "fair", "low"]


@dataclass
class UserLog:
    """What the user logged for today. Held in memory only."""

    sleep_hours: float = 7.5
    meal_summary: str = ""
    workout_summary: str = ""


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compute_health_score(sleep_hours: float, meal_summary: str, workout_summary: str) -> int:
    """Compute the daily score.

    score = min(100, min(40, round(sleep/8 * 40))
                     + (30 if meal logged) + (30 if workout logged))
    """
    raw_sleep = sleep_hours / SLEEP_TARGET_HOURS * SLEEP_MAX_POINTS
    score = min(SLEEP_MAX_POINTS, _round_half_up(raw_sleep))
    if meal_summary.strip():
        score += MEAL_POINTS
    if workout_summary.strip():
        score += WORKOUT_POINTS
    return min(MAX_SCORE, score)


def score_log(log: UserLog) -> int:
    return compute_health_score(log.sleep_hours, log.meal_summary, log.workout_summary)


def score_band(score: int) -> ScoreBand:
    """Bucket a score the way the dashboard colours its score ring."""
    if score >= 80:
        return "good"
    if score >= 50:
        return "fair"
    return "low"


def validate_sleep_hours(value: float) -> float:
    """Input-layer check for the sleep slider: [0, 12] in half-hour steps.

    Raises:
        ValueError: If the value is out of range or off-step.
    """
    if not MIN_SLEEP_HOURS <= value <= MAX_SLEEP_HOURS:
        raise ValueError(
            f"sleep_hours must be between {MIN_SLEEP_HOURS:g} and {MAX_SLEEP_HOURS:g}, got {value:g}"
        )
    steps = value / SLEEP_STEP_HOURS
    if not math.isclose(steps, round(steps), abs_tol=1e-9):
        raise ValueError(f"sleep_hours must be a multiple of {SLEEP_STEP_HOURS:g}, got {value:g}")
    return float(value)
