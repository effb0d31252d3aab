"""Domain models for FareScore and the daily score."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class ActionType(str, Enum):
    """Closed set of actions that move the FareScore."""

    MEAL_LOGGED = "meal_logged"
    WORKOUT_COMPLETED = "workout_completed"
    MACRO_TARGET_HIT = "macro_target_hit"
    STREAK_MILESTONE = "streak_milestone"
    WEIGHT_STABLE = "weight_stable"
    SLEEP_LOGGED = "sleep_logged"
    HYDRATION_LOGGED = "hydration_logged"
    MISSED_DAY = "missed_day"
    STREAK_BROKEN = "streak_broken"
    INACTIVE_WEEK = "inactive_week"
    DATA_MANIPULATION = "data_manipulation"
    MACRO_DEVIATION = "macro_deviation"

    @property
    def is_penalty(self) -> bool:
        """Return True for actions counted in the monthly penalty counter."""
        return self in _PENALTY_ACTIONS


_PENALTY_ACTIONS = frozenset(
    {ActionType.MISSED_DAY, ActionType.STREAK_BROKEN, ActionType.INACTIVE_WEEK}
)


@dataclass(frozen=True)
class FareScoreAction:
    """A single scored event; ``value`` replaces the default delta."""

    type: ActionType
    value: int | None = None


@dataclass(frozen=True)
class FareScoreState:
    """Long-horizon consistency rating for a user."""

    current_score: int
    streak_days: int
    meals_logged_this_month: int
    workouts_this_month: int
    penalties_this_month: int
    last_update_date: datetime
    consistency_rate: float


@dataclass(frozen=True)
class Tier:
    """Named FareScore band."""

    key: str
    label: str
    description: str
    min_score: int
    color: str


@dataclass(frozen=True)
class ScoreBucket:
    """Points earned out of a bucket maximum."""

    earned: int
    max: int


MEALS_LOGGED_MAX = 30
WORKOUT_COMPLETED_MAX = 30
MACROS_HIT_MAX = 25
CONSISTENCY_BONUS_MAX = 15


@dataclass(frozen=True)
class DailyScoreBreakdown:
    """Daily 0-100 score split into four buckets."""

    meals_logged: ScoreBucket
    workout_completed: ScoreBucket
    macros_hit: ScoreBucket
    consistency_bonus: ScoreBucket

    @property
    def total_score(self) -> int:
        return (
            self.meals_logged.earned
            + self.workout_completed.earned
            + self.macros_hit.earned
            + self.consistency_bonus.earned
        )

    @classmethod
    def empty(cls) -> "DailyScoreBreakdown":
        """Return the canonical zero-credit breakdown."""
        return cls(
            meals_logged=ScoreBucket(earned=0, max=MEALS_LOGGED_MAX),
            workout_completed=ScoreBucket(earned=0, max=WORKOUT_COMPLETED_MAX),
            macros_hit=ScoreBucket(earned=0, max=MACROS_HIT_MAX),
            consistency_bonus=ScoreBucket(earned=0, max=CONSISTENCY_BONUS_MAX),
        )


@dataclass(frozen=True)
class DailyFacts:
    """Observed facts for one day used by the daily score."""

    meal_count: int
    has_workout: bool
    protein_sum: float
    protein_target: float | None


@dataclass(frozen=True)
class TimeToTarget:
    """Estimate of how long reaching a target FareScore takes."""

    days: int
    weeks: int
    realistic: bool


@dataclass(frozen=True)
class ScoreHistoryPoint:
    """One weekly point of a generated score history."""

    date: str
    score: int
