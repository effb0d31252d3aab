"""Supabase repository for workout logs."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from farefit.domain.workouts import ExerciseLog, ExerciseSet, WorkoutSession
from farefit.services.daily_score import WorkoutRepository

_COLUMNS = "workout_date, day_type, duration, calories_burned, exercises"


@dataclass
class SupabaseWorkoutRepository(WorkoutRepository):
    """Supabase implementation for workout reads."""

    client: Client

    def list_workouts(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[WorkoutSession]:
        """Return workouts in the time range."""
        response = (
            self.client.table("workouts")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .gte("workout_date", start.isoformat())
            .lt("workout_date", end.isoformat())
            .order("workout_date", desc=False)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def list_recent_workouts(self, user_id: UUID, limit: int) -> list[WorkoutSession]:
        """Return the most recent workouts for a user."""
        response = (
            self.client.table("workouts")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .order("workout_date", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]


def _parse_row(row: dict[str, object]) -> WorkoutSession:
    exercises_raw = row.get("exercises")
    exercises = [
        _parse_exercise(entry)
        for entry in (exercises_raw if isinstance(exercises_raw, list) else [])
        if isinstance(entry, dict)
    ]
    return WorkoutSession(
        date=datetime.fromisoformat(str(row["workout_date"])),
        day_type=str(row.get("day_type") or ""),
        duration=int(row.get("duration") or 0),
        calories_burned=float(row.get("calories_burned") or 0.0),
        exercises=exercises,
    )


def _parse_exercise(entry: dict[str, object]) -> ExerciseLog:
    sets_raw = entry.get("sets")
    sets = [
        ExerciseSet(
            reps=int(item.get("reps") or 0), weight=float(item.get("weight") or 0.0)
        )
        for item in (sets_raw if isinstance(sets_raw, list) else [])
        if isinstance(item, dict)
    ]
    name = entry.get("name")
    return ExerciseLog(
        name=name if isinstance(name, str) else "",
        sets=sets,
        notes=entry.get("notes"),
    )
