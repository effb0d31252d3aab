"""Daily score (0-100): today's progress toward the maximum points."""

import logging
from dataclasses import dataclass
from datetime import UTC, date, datetime, time, timedelta
from typing import Protocol
from uuid import UUID
from zoneinfo import ZoneInfo

from farefit.domain.nutrition import FitnessGoal, MealEntry, NutritionTotals
from farefit.domain.scores import (
    CONSISTENCY_BONUS_MAX,
    MACROS_HIT_MAX,
    MEALS_LOGGED_MAX,
    WORKOUT_COMPLETED_MAX,
    DailyFacts,
    DailyScoreBreakdown,
    ScoreBucket,
)
from farefit.domain.workouts import WorkoutSession

logger = logging.getLogger(__name__)

POINTS_PER_MEAL = 10
BONUS_PER_GOAL = 5
PERFECT_SCORE = 100


class MealRepository(Protocol):
    """Persistence interface for logged meals."""

    def list_meals(self, user_id: UUID, day: date) -> list[MealEntry]:
        """Return meals logged by the user on the given day."""


class WorkoutRepository(Protocol):
    """Persistence interface for workout logs."""

    def list_workouts(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[WorkoutSession]:
        """Return workouts within a time range."""

    def list_recent_workouts(self, user_id: UUID, limit: int) -> list[WorkoutSession]:
        """Return the most recent workouts, newest first."""


class GoalRepository(Protocol):
    """Persistence interface for fitness goals."""

    def get_goal(self, user_id: UUID) -> FitnessGoal | None:
        """Return the user's active fitness goal, if set."""


def calculate_daily_score(facts: DailyFacts) -> DailyScoreBreakdown:
    """Compute the four daily buckets from a day's facts."""
    meals_earned = min(max(facts.meal_count, 0) * POINTS_PER_MEAL, MEALS_LOGGED_MAX)
    workout_earned = WORKOUT_COMPLETED_MAX if facts.has_workout else 0
    target = facts.protein_target
    macros_earned = (
        MACROS_HIT_MAX if target is not None and facts.protein_sum >= target else 0
    )

    bonus = 0
    if meals_earned == MEALS_LOGGED_MAX:
        bonus += BONUS_PER_GOAL
    if workout_earned > 0:
        bonus += BONUS_PER_GOAL
    if macros_earned > 0:
        bonus += BONUS_PER_GOAL

    return DailyScoreBreakdown(
        meals_logged=ScoreBucket(earned=meals_earned, max=MEALS_LOGGED_MAX),
        workout_completed=ScoreBucket(earned=workout_earned, max=WORKOUT_COMPLETED_MAX),
        macros_hit=ScoreBucket(earned=macros_earned, max=MACROS_HIT_MAX),
        consistency_bonus=ScoreBucket(
            earned=min(bonus, CONSISTENCY_BONUS_MAX), max=CONSISTENCY_BONUS_MAX
        ),
    )


def sum_meals(meals: list[MealEntry]) -> NutritionTotals:
    """Sum macros across meals."""
    return NutritionTotals(
        calories=sum(meal.calories for meal in meals),
        protein=sum(meal.protein for meal in meals),
        carbs=sum(meal.carbs for meal in meals),
        fats=sum(meal.fats for meal in meals),
        fiber=sum(meal.fiber for meal in meals),
    )


def get_daily_score_tier(score: int) -> str:
    """Return the label for a daily score."""
    if score == PERFECT_SCORE:
        return "Perfect Day!"
    if score >= 85:  # noqa: PLR2004
        return "Excellent"
    if score >= 70:  # noqa: PLR2004
        return "Great"
    if score >= 50:  # noqa: PLR2004
        return "Good"
    if score >= 25:  # noqa: PLR2004
        return "Fair"
    return "Getting Started"


def get_daily_score_color(score: int) -> str:
    """Return the display color for a daily score."""
    if score == PERFECT_SCORE:
        return "#FFD700"
    if score >= 75:  # noqa: PLR2004
        return "#1C7C54"
    if score >= 50:  # noqa: PLR2004
        return "#4DD4AC"
    if score >= 25:  # noqa: PLR2004
        return "#F5A623"
    return "#E53E3E"


def get_daily_score_message(score: int) -> str:
    """Return a motivational message for a daily score."""
    if score == PERFECT_SCORE:
        return "Perfect! You crushed every goal today!"
    if score >= 85:  # noqa: PLR2004
        return "Excellent work! Keep this momentum going!"
    if score >= 70:  # noqa: PLR2004
        return "Great progress! You're on track!"
    if score >= 50:  # noqa: PLR2004
        return "Good effort! A few more tasks to go!"
    if score >= 25:  # noqa: PLR2004
        return "You're getting there! Keep logging!"
    return "Let's start building your daily habits!"


@dataclass
class DailyScoreService:
    """Gathers a day's facts and scores them.

    Each upstream read degrades its own bucket to zero credit on failure,
    and any failure of the orchestration itself yields the empty breakdown.
    """

    meal_repository: MealRepository
    workout_repository: WorkoutRepository
    goal_repository: GoalRepository

    def get_daily_score(
        self, user_id: UUID, day: date | None = None, timezone_name: str = "UTC"
    ) -> DailyScoreBreakdown:
        """Return the daily score breakdown for a user."""
        try:
            facts = self.collect_facts(user_id, day, timezone_name)
            return calculate_daily_score(facts)
        except Exception:
            logger.exception(
                "Daily score calculation failed", extra={"user_id": str(user_id)}
            )
            return DailyScoreBreakdown.empty()

    def collect_facts(
        self, user_id: UUID, day: date | None, timezone_name: str = "UTC"
    ) -> DailyFacts:
        """Read the day's meals, workouts and goal into scoring facts."""
        tz = ZoneInfo(timezone_name)
        resolved_day = day or datetime.now(tz=tz).date()
        meals = self._fetch_meals(user_id, resolved_day)
        has_workout = self._fetch_has_workout(user_id, resolved_day, tz)
        goal = self._fetch_goal(user_id)
        return DailyFacts(
            meal_count=len(meals),
            has_workout=has_workout,
            protein_sum=sum_meals(meals).protein,
            protein_target=goal.protein_target if goal else None,
        )

    def _fetch_meals(self, user_id: UUID, day: date) -> list[MealEntry]:
        try:
            return self.meal_repository.list_meals(user_id, day)
        except Exception:
            logger.warning(
                "Failed to load meals for daily score",
                exc_info=True,
                extra={"user_id": str(user_id)},
            )
            return []

    def _fetch_has_workout(self, user_id: UUID, day: date, tz: ZoneInfo) -> bool:
        start = datetime.combine(day, time.min, tzinfo=tz)
        end = start + timedelta(days=1)
        try:
            workouts = self.workout_repository.list_workouts(
                user_id, start.astimezone(UTC), end.astimezone(UTC)
            )
        except Exception:
            logger.warning(
                "Failed to load workouts for daily score",
                exc_info=True,
                extra={"user_id": str(user_id)},
            )
            return False
        return len(workouts) > 0

    def _fetch_goal(self, user_id: UUID) -> FitnessGoal | None:
        try:
            return self.goal_repository.get_goal(user_id)
        except Exception:
            logger.warning(
                "Failed to load fitness goal for daily score",
                exc_info=True,
                extra={"user_id": str(user_id)},
            )
            return None
