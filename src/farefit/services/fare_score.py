"""FareScore: a credit-score style consistency rating (300-850)."""

import logging
import math
import random
from dataclasses import dataclass, replace
from datetime import UTC, date, datetime, timedelta
from enum import Enum
from typing import Protocol
from uuid import UUID

from farefit.domain.scores import (
    ActionType,
    FareScoreAction,
    FareScoreState,
    ScoreHistoryPoint,
    Tier,
    TimeToTarget,
)

logger = logging.getLogger(__name__)

MIN_SCORE = 300
MAX_SCORE = 850
INITIAL_SCORE = 350
STREAK_MILESTONE_DAYS = 7
STREAK_MILESTONE_BONUS = 5
SMOOTHING_OLD_WEIGHT = 0.9
SMOOTHING_NEW_WEIGHT = 0.1
CONSISTENCY_WINDOW_DAYS = 30
MIN_MEALS_FOR_CREDIT = 2
REALISTIC_TARGET_DAYS = 730

SCORE_CHANGES: dict[ActionType, int] = {
    ActionType.MEAL_LOGGED: 1,
    ActionType.WORKOUT_COMPLETED: 2,
    ActionType.MACRO_TARGET_HIT: 3,
    ActionType.STREAK_MILESTONE: 5,
    ActionType.WEIGHT_STABLE: 2,
    ActionType.SLEEP_LOGGED: 1,
    ActionType.HYDRATION_LOGGED: 1,
    ActionType.MISSED_DAY: -2,
    ActionType.STREAK_BROKEN: -5,
    ActionType.INACTIVE_WEEK: -10,
    ActionType.DATA_MANIPULATION: -15,
    ActionType.MACRO_DEVIATION: -3,
}


class FareScoreTier(Enum):
    """Tier bands ordered highest-first (single source of truth)."""

    FAREFIT_ELITE = Tier(
        key="farefit_elite",
        label="FareFit Elite",
        description="Elite consistency - You're an inspiration!",
        min_score=800,
        color="#4DD4AC",
    )
    GOAL_CRUSHER = Tier(
        key="goal_crusher",
        label="Goal Crusher",
        description="Crushing your goals with dedication!",
        min_score=700,
        color="#1C7C54",
    )
    CONSISTENT_TRACKER = Tier(
        key="consistent_tracker",
        label="Consistent Tracker",
        description="Staying on track most days - Great progress!",
        min_score=550,
        color="#A8E6CF",
    )
    BUILDING_HABITS = Tier(
        key="building_habits",
        label="Building Habits",
        description="Developing consistency - Keep going!",
        min_score=400,
        color="#F5A623",
    )
    STARTING_JOURNEY = Tier(
        key="starting_journey",
        label="Starting Journey",
        description="Beginning your fitness journey - Every log counts!",
        min_score=MIN_SCORE,
        color="#E53E3E",
    )


def get_tier(score: int) -> Tier:
    """Return the tier for any score, including out-of-range values."""
    for entry in FareScoreTier:
        if score >= entry.value.min_score:
            return entry.value
    return FareScoreTier.STARTING_JOURNEY.value


def get_score_color(score: int) -> str:
    """Return the display color of the score's tier."""
    return get_tier(score).color


def clamp_score(score: float) -> int:
    """Saturate a score into the FareScore range."""
    return int(max(MIN_SCORE, min(MAX_SCORE, score)))


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def calculate_score_change(action: FareScoreAction, state: FareScoreState) -> int:
    """Return the signed score delta for a single action."""
    if action.value is not None:
        return action.value
    if (
        action.type is ActionType.STREAK_MILESTONE
        and state.streak_days > 0
        and state.streak_days % STREAK_MILESTONE_DAYS == 0
    ):
        return STREAK_MILESTONE_BONUS
    return SCORE_CHANGES.get(action.type, 0)


def update_daily_score(
    state: FareScoreState,
    actions: list[FareScoreAction],
    now: datetime | None = None,
) -> FareScoreState:
    """Fold a batch of actions into a new, clamped state."""
    raw_score = state.current_score + sum(
        calculate_score_change(action, state) for action in actions
    )
    meals = state.meals_logged_this_month
    workouts = state.workouts_this_month
    penalties = state.penalties_this_month
    for action in actions:
        if action.type is ActionType.MEAL_LOGGED:
            meals += 1
        elif action.type is ActionType.WORKOUT_COMPLETED:
            workouts += 1
        elif action.type.is_penalty:
            penalties += 1

    return replace(
        state,
        current_score=clamp_score(raw_score),
        meals_logged_this_month=meals,
        workouts_this_month=workouts,
        penalties_this_month=penalties,
        last_update_date=now or datetime.now(tz=UTC),
    )


def apply_weekly_smoothing(old_score: int, new_score: int) -> int:
    """Blend the new score into the old one (90% old, 10% new)."""
    smoothed = round_half_up(
        SMOOTHING_OLD_WEIGHT * old_score + SMOOTHING_NEW_WEIGHT * new_score
    )
    return clamp_score(smoothed)


def calculate_consistency_rate(
    days_active: int, total_days: int = CONSISTENCY_WINDOW_DAYS
) -> float:
    """Return the share of active days in the window, capped at 1.0."""
    if total_days <= 0:
        return 0.0
    return max(0.0, min(1.0, days_active / total_days))


def initialize_fare_score(join_date: datetime | None = None) -> FareScoreState:
    """Return the starting state for a newly onboarded user."""
    return FareScoreState(
        current_score=INITIAL_SCORE,
        streak_days=0,
        meals_logged_this_month=0,
        workouts_this_month=0,
        penalties_this_month=0,
        last_update_date=join_date or datetime.now(tz=UTC),
        consistency_rate=0.0,
    )


def build_daily_actions(
    state: FareScoreState,
    meals_logged: int,
    workout_completed: bool,
    hit_macro_target: bool,
    missed_day: bool,
) -> list[FareScoreAction]:
    """Translate a day's observed facts into scored actions."""
    actions: list[FareScoreAction] = []
    if meals_logged >= MIN_MEALS_FOR_CREDIT:
        actions.append(FareScoreAction(ActionType.MEAL_LOGGED))
    if workout_completed:
        actions.append(FareScoreAction(ActionType.WORKOUT_COMPLETED))
    if hit_macro_target:
        actions.append(FareScoreAction(ActionType.MACRO_TARGET_HIT))
    if state.streak_days > 0 and state.streak_days % STREAK_MILESTONE_DAYS == 0:
        actions.append(FareScoreAction(ActionType.STREAK_MILESTONE))
    if missed_day:
        actions.append(FareScoreAction(ActionType.MISSED_DAY))
    return actions


def process_daily_update(  # noqa: PLR0913
    state: FareScoreState,
    meals_logged: int,
    workout_completed: bool,
    hit_macro_target: bool,
    missed_day: bool,
    now: datetime | None = None,
) -> FareScoreState:
    """Apply one day's facts to the state."""
    actions = build_daily_actions(
        state, meals_logged, workout_completed, hit_macro_target, missed_day
    )
    return update_daily_score(state, actions, now=now)


def estimate_time_to_target(
    current_score: int, target_score: int, avg_daily_change: float = 0.5
) -> TimeToTarget:
    """Estimate days and weeks needed to reach a target score."""
    difference = target_score - current_score
    if difference <= 0:
        return TimeToTarget(days=0, weeks=0, realistic=True)
    if avg_daily_change <= 0:
        return TimeToTarget(days=0, weeks=0, realistic=False)
    days = math.ceil(difference / avg_daily_change)
    weeks = math.ceil(days / 7)
    return TimeToTarget(days=days, weeks=weeks, realistic=days <= REALISTIC_TARGET_DAYS)


def generate_score_history(
    start_score: int,
    weeks: int,
    avg_weekly_change: float = 10,
    today: date | None = None,
    rng: random.Random | None = None,
) -> list[ScoreHistoryPoint]:
    """Generate a plausible weekly score history for demos."""
    resolved_today = today or datetime.now(tz=UTC).date()
    resolved_rng = rng or random.Random()
    history = []
    score: float = start_score
    for offset in range(weeks, -1, -1):
        day = resolved_today - timedelta(days=offset * 7)
        change = avg_weekly_change + (resolved_rng.random() - 0.5) * 5
        score = max(MIN_SCORE, min(MAX_SCORE, score + change))
        history.append(
            ScoreHistoryPoint(date=f"{day:%b} {day.day}", score=round_half_up(score))
        )
    return history


class FareScoreRepository(Protocol):
    """Persistence interface for FareScore state."""

    def get_state(self, user_id: UUID) -> FareScoreState | None:
        """Return the stored state for a user, if any."""

    def save_state(self, user_id: UUID, state: FareScoreState) -> None:
        """Insert or replace the state for a user."""

    def list_states(self, limit: int) -> list[tuple[UUID, FareScoreState]]:
        """Return stored states, highest score first."""


@dataclass
class FareScoreService:
    """Application service that loads, updates and persists FareScores."""

    repository: FareScoreRepository

    def get_state(self, user_id: UUID) -> FareScoreState:
        """Return the user's state, creating the initial one if missing."""
        existing = self.repository.get_state(user_id)
        if existing:
            return existing
        created = initialize_fare_score()
        self.repository.save_state(user_id, created)
        logger.info("Initialized FareScore", extra={"user_id": str(user_id)})
        return created

    def apply_actions(
        self, user_id: UUID, actions: list[FareScoreAction]
    ) -> FareScoreState:
        """Apply a batch of actions and persist the result."""
        state = self.get_state(user_id)
        updated = update_daily_score(state, actions)
        self.repository.save_state(user_id, updated)
        return updated

    def process_day(  # noqa: PLR0913
        self,
        user_id: UUID,
        meals_logged: int,
        workout_completed: bool,
        hit_macro_target: bool,
        missed_day: bool,
    ) -> FareScoreState:
        """Apply one day's observed facts and persist the result."""
        state = self.get_state(user_id)
        updated = process_daily_update(
            state, meals_logged, workout_completed, hit_macro_target, missed_day
        )
        self.repository.save_state(user_id, updated)
        return updated

    def smooth(self, user_id: UUID, new_score: int) -> FareScoreState:
        """Blend a new raw score into the stored one and persist it."""
        state = self.get_state(user_id)
        updated = replace(
            state,
            current_score=apply_weekly_smoothing(state.current_score, new_score),
            last_update_date=datetime.now(tz=UTC),
        )
        self.repository.save_state(user_id, updated)
        return updated

    def estimate(
        self, user_id: UUID, target_score: int, avg_daily_change: float = 0.5
    ) -> TimeToTarget:
        """Estimate the time for the user to reach a target score."""
        state = self.get_state(user_id)
        return estimate_time_to_target(
            state.current_score, target_score, avg_daily_change
        )

    def leaderboard(self, limit: int = 20) -> list[tuple[UUID, FareScoreState]]:
        """Return stored states ordered by score."""
        return self.repository.list_states(limit)
