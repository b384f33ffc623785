"""Skill orchestrators — one parameterised type for all four assistant skills.

An orchestrator sequences a single user action: validate input, (score the
log), build the prompt, call the chat client, map the result to display
text, and (briefing only) advance the streak. Its observable state is what
a display layer renders: a loading flag, the result text, and for the
briefing the health score and streak count.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, replace
from typing import Any, Callable, Literal

from apex.core.audit.logger import AuditLogger
from apex.core.llm.credentials import CredentialProvider
from apex.core.llm.provider import (
    ChatClient,
    ChatEmpty,
    ChatFailure,
    ChatRequest,
    ChatSuccess,
)
from apex.domains.wellness.domain_logic.health_score import UserLog, score_log
from apex.domains.wellness.domain_logic.streak import StreakTracker
from apex.domains.wellness.prompts.skill_prompts import (
    build_briefing_request,
    build_energizer_request,
    build_journaling_request,
    build_motivation_request,
)

logger = logging.getLogger(__name__)

OutcomeStatus = Literal["success", "empty", "failure", "credential_missing", "validation", "busy"]

MISSING_CREDENTIAL_TEXT = "Error: GROQ_API_KEY is not configured."
BUSY_TEXT = "A request is already in progress. Please wait for it to finish."
_SCORED_STATUSES = frozenset({"success", "empty", "failure"})


@dataclass(frozen=True)
class Skill:
    """Static configuration distinguishing one assistant skill from another."""

    name: str
    build_request: Callable[..., ChatRequest]
    initial_text: str
    empty_text: str
    failure_prefix: str
    validation_text: str = ""
    requires_input: bool = False
    scores_log: bool = False
    tracks_streak: bool = False


@dataclass(frozen=True)
class OrchestratorState:
    """What the display layer renders for one skill."""

    is_loading: bool
    result_text: str
    health_score: int | None = None
    streak_count: int | None = None


@dataclass(frozen=True)
class SkillOutcome:
    """Result of one ``generate`` call."""

    status: OutcomeStatus
    text: str
    score: int | None = None
    streak: int | None = None


def _briefing(log: UserLog, **params: Any) -> ChatRequest:
    return build_briefing_request(log, **params)


def _energizer(_: Any = None, **params: Any) -> ChatRequest:
    return build_energizer_request(**params)


BRIEFING = Skill(
    name="briefing",
    build_request=_briefing,
    initial_text=(
        "Log your sleep, meals and workout, then generate a briefing to get "
        "your personalized health insights."
    ),
    empty_text="Empty AI response.",
    failure_prefix="Error: ",
    scores_log=True,
    tracks_streak=True,
)

JOURNALING = Skill(
    name="journaling",
    build_request=build_journaling_request,
    initial_text=(
        "Describe a problem or challenge you're facing to receive guided journaling "
        "questions.\n\nThis can help clear your mind before sleep."
    ),
    empty_text="The AI returned an empty response. Please try again.",
    failure_prefix="Error fetching questions: ",
    validation_text="Please enter a problem or topic to get started.",
    requires_input=True,
)

MOTIVATION = Skill(
    name="motivation",
    build_request=build_motivation_request,
    initial_text=(
        "Name the task you keep putting off and get a 5-minute plan to simply start it."
    ),
    empty_text="The AI returned an empty response. Please try again.",
    failure_prefix="Error fetching your pitch: ",
    validation_text="Please enter a task to get started.",
    requires_input=True,
)

ENERGIZER = Skill(
    name="energizer",
    build_request=_energizer,
    initial_text="Feeling sluggish at your desk? Ask for three quick exercises.",
    empty_text="The AI returned an empty response. Please try again.",
    failure_prefix="Error fetching exercises: ",
)


class SkillOrchestrator:
    """Runs one skill end to end and publishes its state.

    Each instance allows a single in-flight invocation; a second ``generate``
    while one is outstanding returns ``status="busy"`` without touching state
    or the network.
    """

    def __init__(
        self,
        skill: Skill,
        client: ChatClient,
        credentials: CredentialProvider,
        *,
        request_params: dict[str, Any] | None = None,
        streak: StreakTracker | None = None,
        audit: AuditLogger | None = None,
    ) -> None:
        if skill.tracks_streak and streak is None:
            raise ValueError(f"Skill {skill.name!r} needs a StreakTracker")
        self.skill = skill
        self._client = client
        self._credentials = credentials
        self._request_params = request_params or {}
        self._streak = streak
        self._audit = audit
        self._busy = False
        self._listeners: list[Callable[[OrchestratorState], None]] = []

        if streak is not None:
            streak.load()
        self._state = OrchestratorState(
            is_loading=False,
            result_text=skill.initial_text,
            health_score=0 if skill.scores_log else None,
            streak_count=streak.count if streak is not None else None,
        )

    # ------------------------------------------------------------------
    # Observable state
    # ------------------------------------------------------------------

    @property
    def state(self) -> OrchestratorState:
        return self._state

    @property
    def is_loading(self) -> bool:
        return self._state.is_loading

    @property
    def result_text(self) -> str:
        return self._state.result_text

    @property
    def busy(self) -> bool:
        return self._busy

    def subscribe(self, listener: Callable[[OrchestratorState], None]) -> Callable[[], None]:
        """Register a state listener; returns a function that unregisters it."""
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def _update(self, **changes: Any) -> None:
        self._state = replace(self._state, **changes)
        for listener in list(self._listeners):
            try:
                listener(self._state)
            except Exception:
                logger.exception("State listener failed for skill %s", self.skill.name)

    # ------------------------------------------------------------------
    # Invocation
    # ------------------------------------------------------------------

    async def generate(self, user_input: Any = None) -> SkillOutcome:
        """Run the skill once.

        Args:
            user_input: ``UserLog`` for the briefing, free text for journaling
                and motivation, nothing for the energizer.
        """
        if self._busy:
            logger.info("Skill %s invoked while busy; rejected", self.skill.name)
            return self._outcome("busy", BUSY_TEXT)

        if self.skill.requires_input and not (user_input or "").strip():
            self._update(result_text=self.skill.validation_text)
            self._record(user_input, "validation", disclosed=False, start=None)
            return self._outcome("validation", self.skill.validation_text)

        self._busy = True
        self._update(is_loading=True)
        start = time.monotonic()
        try:
            return await self._run(user_input, start)
        finally:
            self._busy = False
            self._update(is_loading=False)

    async def _run(self, user_input: Any, start: float) -> SkillOutcome:
        credential = self._credentials.get_credential()
        if not credential:
            self._update(result_text=MISSING_CREDENTIAL_TEXT)
            self._record(user_input, "credential_missing", disclosed=False, start=start)
            return self._outcome("credential_missing", MISSING_CREDENTIAL_TEXT)

        if self.skill.scores_log:
            self._update(health_score=score_log(user_input))

        request = self.skill.build_request(user_input, **self._request_params)
        result = await self._client.send(request, credential)

        if isinstance(result, ChatSuccess):
            changes: dict[str, Any] = {"result_text": result.text}
            if self._streak is not None:
                try:
                    self._streak.record_success()
                except Exception:
                    logger.exception("Streak update failed; briefing kept, streak unchanged")
                changes["streak_count"] = self._streak.count
            self._update(**changes)
            self._record(user_input, "success", disclosed=True, start=start)
            return self._outcome("success", result.text)

        if isinstance(result, ChatEmpty):
            self._update(result_text=self.skill.empty_text)
            self._record(user_input, "empty", disclosed=True, start=start)
            return self._outcome("empty", self.skill.empty_text)

        assert isinstance(result, ChatFailure)
        status: OutcomeStatus = (
            "credential_missing" if result.kind == "credential_missing" else "failure"
        )
        text = (
            MISSING_CREDENTIAL_TEXT
            if status == "credential_missing"
            else f"{self.skill.failure_prefix}{result.message}"
        )
        logger.warning("Skill %s failed: %s (%s)", self.skill.name, result.message, result.kind)
        self._update(result_text=text)
        self._record(
            user_input,
            status,
            disclosed=result.kind != "credential_missing",
            start=start,
            error_kind=result.kind,
        )
        return self._outcome(status, text)

    def _outcome(self, status: OutcomeStatus, text: str) -> SkillOutcome:
        # Only outcomes that reached the scoring step carry a score for this input.
        scored = status in _SCORED_STATUSES
        return SkillOutcome(
            status=status,
            text=text,
            score=self._state.health_score if scored else None,
            streak=self._state.streak_count,
        )

    def _record(
        self,
        user_input: Any,
        status: str,
        *,
        disclosed: bool,
        start: float | None,
        error_kind: str | None = None,
    ) -> None:
        if self._audit is None:
            return
        if isinstance(user_input, UserLog):
            user_input = {
                "sleep_hours": user_input.sleep_hours,
                "meal_summary": user_input.meal_summary,
                "workout_summary": user_input.workout_summary,
            }
        self._audit.log_invocation(
            self.skill.name,
            user_input,
            status=status,
            llm_disclosed=disclosed,
            duration_ms=(time.monotonic() - start) * 1000 if start is not None else None,
            error_kind=error_kind,
        )


# ----------------------------------------------------------------------
# Factories
# ----------------------------------------------------------------------

def briefing_orchestrator(
    client: ChatClient,
    credentials: CredentialProvider,
    streak: StreakTracker,
    **kwargs: Any,
) -> SkillOrchestrator:
    return SkillOrchestrator(BRIEFING, client, credentials, streak=streak, **kwargs)


def journaling_orchestrator(
    client: ChatClient, credentials: CredentialProvider, **kwargs: Any
) -> SkillOrchestrator:
    return SkillOrchestrator(JOURNALING, client, credentials, **kwargs)


def motivation_orchestrator(
    client: ChatClient, credentials: CredentialProvider, **kwargs: Any
) -> SkillOrchestrator:
    return SkillOrchestrator(MOTIVATION, client, credentials, **kwargs)


def energizer_orchestrator(
    client: ChatClient, credentials: CredentialProvider, **kwargs: Any
) -> SkillOrchestrator:
    return SkillOrchestrator(ENERGIZER, client, credentials, **kwargs)
