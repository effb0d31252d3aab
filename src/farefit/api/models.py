"""Pydantic models for the HTTP API."""

from datetime import datetime

from pydantic import BaseModel, Field

from farefit.domain.scores import (
    ActionType,
    DailyScoreBreakdown,
    FareScoreAction,
    FareScoreState,
    ScoreBucket,
    Tier,
)
from farefit.domain.workouts import WorkoutAnalysis
from farefit.services.daily_score import (
    get_daily_score_color,
    get_daily_score_message,
    get_daily_score_tier,
)
from farefit.services.fare_score import get_tier


class ActionPayload(BaseModel):
    """A scored action sent by the client."""

    type: ActionType
    value: int | None = None

    def to_domain(self) -> FareScoreAction:
        return FareScoreAction(type=self.type, value=self.value)


class ActionsRequest(BaseModel):
    """Batch of actions to apply to a FareScore."""

    actions: list[ActionPayload]


class DailyUpdateRequest(BaseModel):
    """A day's observed facts for the FareScore update."""

    meals_logged: int = Field(ge=0)
    workout_completed: bool = False
    hit_macro_target: bool = False
    missed_day: bool = False


class SmoothingRequest(BaseModel):
    """New raw score to blend into the stored FareScore."""

    new_score: int


class TierResponse(BaseModel):
    key: str
    label: str
    description: str
    color: str

    @classmethod
    def from_domain(cls, tier: Tier) -> "TierResponse":
        return cls(
            key=tier.key,
            label=tier.label,
            description=tier.description,
            color=tier.color,
        )


class FareScoreResponse(BaseModel):
    """FareScore state with its tier."""

    current_score: int
    streak_days: int
    meals_logged_this_month: int
    workouts_this_month: int
    penalties_this_month: int
    last_update_date: datetime
    consistency_rate: float
    tier: TierResponse

    @classmethod
    def from_domain(cls, state: FareScoreState) -> "FareScoreResponse":
        return cls(
            current_score=state.current_score,
            streak_days=state.streak_days,
            meals_logged_this_month=state.meals_logged_this_month,
            workouts_this_month=state.workouts_this_month,
            penalties_this_month=state.penalties_this_month,
            last_update_date=state.last_update_date,
            consistency_rate=state.consistency_rate,
            tier=TierResponse.from_domain(get_tier(state.current_score)),
        )


class BucketResponse(BaseModel):
    earned: int
    max: int

    @classmethod
    def from_domain(cls, bucket: ScoreBucket) -> "BucketResponse":
        return cls(earned=bucket.earned, max=bucket.max)


class DailyScoreResponse(BaseModel):
    """Daily score breakdown with presentation hints."""

    total_score: int
    meals_logged: BucketResponse
    workout_completed: BucketResponse
    macros_hit: BucketResponse
    consistency_bonus: BucketResponse
    tier: str
    color: str
    message: str

    @classmethod
    def from_domain(cls, breakdown: DailyScoreBreakdown) -> "DailyScoreResponse":
        total = breakdown.total_score
        return cls(
            total_score=total,
            meals_logged=BucketResponse.from_domain(breakdown.meals_logged),
            workout_completed=BucketResponse.from_domain(breakdown.workout_completed),
            macros_hit=BucketResponse.from_domain(breakdown.macros_hit),
            consistency_bonus=BucketResponse.from_domain(breakdown.consistency_bonus),
            tier=get_daily_score_tier(total),
            color=get_daily_score_color(total),
            message=get_daily_score_message(total),
        )


class TimeToTargetResponse(BaseModel):
    current_score: int
    target_score: int
    days: int
    weeks: int
    realistic: bool


class PlateauResponse(BaseModel):
    exercise: str
    workouts_stuck: int
    current_weight: float
    suggestion: str


class WorkoutAnalysisResponse(BaseModel):
    """Summary of a user's workout history."""

    total_workouts: int
    total_exercises: int
    total_volume: float
    average_duration: int
    exercise_frequency: dict[str, int]
    estimated_one_rep_max: dict[str, float]
    plateaus: list[PlateauResponse]
    recommendations: list[str]
    last_workout_date: datetime | None
    days_since_last_workout: int

    @classmethod
    def from_domain(cls, analysis: WorkoutAnalysis) -> "WorkoutAnalysisResponse":
        return cls(
            total_workouts=analysis.total_workouts,
            total_exercises=analysis.total_exercises,
            total_volume=analysis.total_volume,
            average_duration=analysis.average_duration,
            exercise_frequency=analysis.exercise_frequency,
            estimated_one_rep_max={
                name: progress.estimated_one_rep_max
                for name, progress in analysis.strength_progress.items()
            },
            plateaus=[
                PlateauResponse(
                    exercise=plateau.exercise,
                    workouts_stuck=plateau.workouts_stuck,
                    current_weight=plateau.current_weight,
                    suggestion=plateau.suggestion,
                )
                for plateau in analysis.plateaus
            ],
            recommendations=analysis.recommendations,
            last_workout_date=analysis.last_workout_date,
            days_since_last_workout=analysis.days_since_last_workout,
        )


class CoachTipResponse(BaseModel):
    tip: str
