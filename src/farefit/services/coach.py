"""AI coach tips grounded in the user's scores and workouts."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from farefit.domain.scores import DailyScoreBreakdown, FareScoreState
from farefit.services.daily_score import DailyScoreService, get_daily_score_tier
from farefit.services.fare_score import FareScoreService, get_tier
from farefit.services.workouts import WorkoutAnalysisService, build_workout_context

logger = logging.getLogger(__name__)

FALLBACK_TIP = (
    "I'm having trouble connecting right now. "
    "Keep logging your meals and workouts and check back soon!"
)

COACH_INSTRUCTIONS = (
    "You are Barry, a friendly fitness and nutrition coach. "
    "Using the user's context, reply with one short, actionable tip "
    "(two sentences at most)."
)


class CoachClient(Protocol):
    """Interface for an LLM text completion."""

    async def complete(
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        instructions: str,
        prompt: str,
    ) -> str:
        """Return the completion text."""


def build_score_context(
    state: FareScoreState, breakdown: DailyScoreBreakdown
) -> str:
    """Describe both scores in plain text."""
    tier = get_tier(state.current_score)
    total = breakdown.total_score
    return "\n".join(
        [
            f"FareScore: {state.current_score} ({tier.label})",
            f"Current streak: {state.streak_days} days",
            f"Daily score: {total}/100 ({get_daily_score_tier(total)})",
            (
                f"- Meals logged: {breakdown.meals_logged.earned}/"
                f"{breakdown.meals_logged.max}"
            ),
            (
                f"- Workout: {breakdown.workout_completed.earned}/"
                f"{breakdown.workout_completed.max}"
            ),
            (
                f"- Protein target: {breakdown.macros_hit.earned}/"
                f"{breakdown.macros_hit.max}"
            ),
            (
                f"- Consistency bonus: {breakdown.consistency_bonus.earned}/"
                f"{breakdown.consistency_bonus.max}"
            ),
        ]
    )


@dataclass
class CoachService:
    """Builds coaching context and asks the LLM for a tip."""

    client: CoachClient
    model: str
    reasoning_effort: str | None
    store: bool
    fare_score_service: FareScoreService
    daily_score_service: DailyScoreService
    workout_service: WorkoutAnalysisService
    timezone_name: str = "UTC"

    async def get_tip(self, user_id: UUID) -> str:
        """Return a coaching tip, or the fallback text if anything fails."""
        try:
            state = self.fare_score_service.get_state(user_id)
            breakdown = self.daily_score_service.get_daily_score(
                user_id, timezone_name=self.timezone_name
            )
            analysis, workouts = self.workout_service.analyze(user_id)
            prompt = "\n\n".join(
                [
                    build_score_context(state, breakdown),
                    build_workout_context(workouts, analysis),
                ]
            )
            tip = await self.client.complete(
                model=self.model,
                reasoning_effort=self.reasoning_effort,
                store=self.store,
                instructions=COACH_INSTRUCTIONS,
                prompt=prompt,
            )
        except Exception:
            logger.exception(
                "Coach tip generation failed", extra={"user_id": str(user_id)}
            )
            return FALLBACK_TIP
        return tip.strip() or FALLBACK_TIP
