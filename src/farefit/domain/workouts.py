"""Domain models for workout logs and their analysis."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class ExerciseSet:
    """A single set of an exercise."""

    reps: int
    weight: float


@dataclass(frozen=True)
class ExerciseLog:
    """An exercise performed during a workout."""

    name: str
    sets: list[ExerciseSet]
    notes: str | None = None


@dataclass(frozen=True)
class WorkoutSession:
    """A logged workout."""

    date: datetime
    day_type: str
    duration: int
    calories_burned: float
    exercises: list[ExerciseLog]


@dataclass(frozen=True)
class ExerciseSnapshot:
    """Max weight and volume of one exercise in one workout."""

    date: datetime
    max_weight: float
    total_volume: float


@dataclass(frozen=True)
class StrengthProgress:
    """Change between the first and last session of an exercise."""

    exercise: str
    first_workout: ExerciseSnapshot
    last_workout: ExerciseSnapshot
    weight_progress: int
    volume_progress: int
    estimated_one_rep_max: float


@dataclass(frozen=True)
class PlateauDetection:
    """An exercise whose max weight has not moved recently."""

    exercise: str
    workouts_stuck: int
    current_weight: float
    suggestion: str


@dataclass(frozen=True)
class WorkoutAnalysis:
    """Summary of a user's workout history."""

    total_workouts: int
    total_exercises: int
    total_volume: float
    average_duration: int
    exercise_frequency: dict[str, int] = field(default_factory=dict)
    strength_progress: dict[str, StrengthProgress] = field(default_factory=dict)
    plateaus: list[PlateauDetection] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)
    last_workout_date: datetime | None = None
    days_since_last_workout: int = 0
