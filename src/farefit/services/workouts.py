"""Workout history analysis: progress, plateaus and recommendations."""

import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from farefit.domain.workouts import (
    ExerciseLog,
    ExerciseSnapshot,
    PlateauDetection,
    StrengthProgress,
    WorkoutAnalysis,
    WorkoutSession,
)
from farefit.services.daily_score import WorkoutRepository
from farefit.services.fare_score import round_half_up

logger = logging.getLogger(__name__)

PLATEAU_WINDOW = 3
PLATEAU_INCREASE = 1.05
DELOAD_VOLUME = 50000
RECENT_WORKOUTS = 7
MIN_UNIQUE_EXERCISES = 5
MIN_WORKOUTS_FOR_VARIETY = 5
PUSH_PULL_RATIO = 1.5
MAX_REST_DAYS = 3
HISTORY_LIMIT = 100
PUSH_EXERCISES = ("bench press", "overhead press", "shoulder press", "push up")
PULL_EXERCISES = ("pull up", "chin up", "row", "lat pulldown", "deadlift")


def calculate_one_rep_max(weight: float, reps: int) -> float:
    """Estimate a one-rep max with the Epley formula."""
    if reps == 1:
        return weight
    return round_half_up(weight * (1 + reps / 30))


def _max_weight(exercise: ExerciseLog) -> float:
    return max((s.weight for s in exercise.sets), default=0.0)


def _volume(exercise: ExerciseLog) -> float:
    return sum(s.reps * s.weight for s in exercise.sets)


def _percent_change(first: float, last: float) -> int:
    if first <= 0:
        return 0
    return round_half_up((last - first) / first * 100)


def _strength_progress(
    name: str, history: list[tuple[datetime, ExerciseLog]]
) -> StrengthProgress:
    first_date, first = history[0]
    last_date, last = history[-1]
    best_weight = 0.0
    best_reps = 0
    for entry in last.sets:
        if entry.weight * entry.reps > best_weight * best_reps:
            best_weight = entry.weight
            best_reps = entry.reps
    first_snapshot = ExerciseSnapshot(
        date=first_date, max_weight=_max_weight(first), total_volume=_volume(first)
    )
    last_snapshot = ExerciseSnapshot(
        date=last_date, max_weight=_max_weight(last), total_volume=_volume(last)
    )
    return StrengthProgress(
        exercise=name,
        first_workout=first_snapshot,
        last_workout=last_snapshot,
        weight_progress=_percent_change(
            first_snapshot.max_weight, last_snapshot.max_weight
        ),
        volume_progress=_percent_change(
            first_snapshot.total_volume, last_snapshot.total_volume
        ),
        estimated_one_rep_max=calculate_one_rep_max(best_weight, best_reps),
    )


def _detect_plateau(
    name: str, history: list[tuple[datetime, ExerciseLog]]
) -> PlateauDetection | None:
    if len(history) < PLATEAU_WINDOW:
        return None
    weights = [_max_weight(exercise) for _, exercise in history[-PLATEAU_WINDOW:]]
    if any(weight != weights[0] for weight in weights):
        return None
    current = weights[0]
    suggested = round_half_up(current * PLATEAU_INCREASE)
    return PlateauDetection(
        exercise=name,
        workouts_stuck=PLATEAU_WINDOW,
        current_weight=current,
        suggestion=(
            f"Try {suggested}lbs or change rep range "
            f"(currently stuck at {current:g}lbs)"
        ),
    )


def analyze_workout_history(
    workouts: list[WorkoutSession], now: datetime | None = None
) -> WorkoutAnalysis:
    """Summarize a workout history into progress and recommendations."""
    if not workouts:
        return WorkoutAnalysis(
            total_workouts=0,
            total_exercises=0,
            total_volume=0,
            average_duration=0,
            recommendations=["Start logging workouts to get personalized insights!"],
        )

    ordered = sorted(workouts, key=lambda workout: workout.date)
    total_workouts = len(ordered)
    total_exercises = sum(len(workout.exercises) for workout in ordered)
    average_duration = round_half_up(
        sum(workout.duration for workout in ordered) / total_workouts
    )

    frequency: dict[str, int] = defaultdict(int)
    history: dict[str, list[tuple[datetime, ExerciseLog]]] = defaultdict(list)
    total_volume = 0.0
    for workout in ordered:
        for exercise in workout.exercises:
            total_volume += _volume(exercise)
            if not exercise.name:
                logger.warning("Skipping exercise without a name")
                continue
            name = exercise.name.lower()
            frequency[name] += 1
            history[name].append((workout.date, exercise))

    progress = {
        name: _strength_progress(name, entries)
        for name, entries in history.items()
        if len(entries) >= 2  # noqa: PLR2004
    }
    plateaus = [
        plateau
        for name, entries in history.items()
        if (plateau := _detect_plateau(name, entries)) is not None
    ]

    recommendations = []
    recent_volume = sum(
        _volume(exercise)
        for workout in ordered[-RECENT_WORKOUTS:]
        for exercise in workout.exercises
    )
    if recent_volume > DELOAD_VOLUME and total_workouts > RECENT_WORKOUTS:
        recommendations.append(
            "Consider a deload week - your training volume is very high"
        )
    if (
        len(frequency) < MIN_UNIQUE_EXERCISES
        and total_workouts > MIN_WORKOUTS_FOR_VARIETY
    ):
        recommendations.append(
            "Add more exercise variety to target different muscle groups"
        )

    push_count = sum(
        count
        for name, count in frequency.items()
        if any(push in name for push in PUSH_EXERCISES)
    )
    pull_count = sum(
        count
        for name, count in frequency.items()
        if any(pull in name for pull in PULL_EXERCISES)
    )
    if push_count > pull_count * PUSH_PULL_RATIO:
        recommendations.append(
            "You have push/pull imbalance - add more pulling exercises "
            "(rows, pull-ups)"
        )

    last_date = ordered[-1].date
    if last_date.tzinfo is None:
        last_date = last_date.replace(tzinfo=UTC)
    resolved_now = now or datetime.now(tz=UTC)
    days_since = max((resolved_now - last_date).days, 0)
    if days_since > MAX_REST_DAYS:
        recommendations.append(
            f"It's been {days_since} days since your last workout - "
            "time to get back to it!"
        )

    return WorkoutAnalysis(
        total_workouts=total_workouts,
        total_exercises=total_exercises,
        total_volume=total_volume,
        average_duration=average_duration,
        exercise_frequency=dict(frequency),
        strength_progress=progress,
        plateaus=plateaus,
        recommendations=recommendations,
        last_workout_date=last_date,
        days_since_last_workout=days_since,
    )


def build_workout_context(
    workouts: list[WorkoutSession], analysis: WorkoutAnalysis
) -> str:
    """Render a workout analysis as plain text for the coach prompt."""
    lines = [
        "User's workout history:",
        f"- Total workouts logged: {analysis.total_workouts}",
        f"- Total exercises performed: {analysis.total_exercises}",
        f"- Total training volume: {analysis.total_volume:,.0f}lbs",
        f"- Average workout duration: {analysis.average_duration} minutes",
        f"- Days since last workout: {analysis.days_since_last_workout}",
    ]

    top = sorted(
        analysis.exercise_frequency.items(), key=lambda item: item[1], reverse=True
    )[:5]
    if top:
        lines.append("Most performed exercises:")
        lines.extend(f"- {name}: {count} times" for name, count in top)

    if analysis.strength_progress:
        lines.append("Strength progress:")
        for progress in list(analysis.strength_progress.values())[:5]:
            direction = "up" if progress.weight_progress >= 0 else "down"
            lines.append(
                f"- {progress.exercise}: "
                f"{progress.first_workout.max_weight:g}lbs -> "
                f"{progress.last_workout.max_weight:g}lbs "
                f"({direction} {abs(progress.weight_progress)}%) | "
                f"Est 1RM: {progress.estimated_one_rep_max:g}lbs"
            )

    if analysis.plateaus:
        lines.append("Plateaus detected:")
        for plateau in analysis.plateaus:
            lines.append(
                f"- {plateau.exercise}: stuck at {plateau.current_weight:g}lbs "
                f"for {plateau.workouts_stuck} workouts. {plateau.suggestion}"
            )

    recent = sorted(workouts, key=lambda workout: workout.date)[-3:]
    if recent:
        lines.append("Recent workouts:")
        for index, workout in enumerate(reversed(recent), start=1):
            lines.append(
                f"{index}. {workout.date:%Y-%m-%d} - "
                f"{workout.day_type or 'Workout'} ({workout.duration}min)"
            )
            for exercise in workout.exercises:
                if not exercise.name:
                    continue
                sets = ", ".join(f"{s.reps}@{s.weight:g}lbs" for s in exercise.sets)
                lines.append(f"   - {exercise.name}: {sets}")

    return "\n".join(lines)


@dataclass
class WorkoutAnalysisService:
    """Service that loads workout history and analyzes it."""

    repository: WorkoutRepository

    def analyze(
        self, user_id: UUID, limit: int = HISTORY_LIMIT
    ) -> tuple[WorkoutAnalysis, list[WorkoutSession]]:
        """Return the analysis and the workouts it was computed from."""
        workouts = self.repository.list_recent_workouts(user_id, limit)
        return analyze_workout_history(workouts), workouts
