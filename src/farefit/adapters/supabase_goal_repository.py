"""Supabase repository for fitness goals."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from farefit.domain.nutrition import FitnessGoal
from farefit.services.daily_score import GoalRepository


@dataclass
class SupabaseGoalRepository(GoalRepository):
    """Supabase implementation for fitness goal reads."""

    client: Client

    def get_goal(self, user_id: UUID) -> FitnessGoal | None:
        """Return the active goal for a user."""
        response = (
            self.client.table("fitness_goals")
            .select(
                "goal_type, activity_level, weight, height, target_calories, "
                "protein_target, carbs_target, fats_target"
            )
            .eq("user_id", str(user_id))
            .eq("is_active", True)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return FitnessGoal(
            goal_type=str(row.get("goal_type") or "maintain"),
            activity_level=row.get("activity_level"),
            weight=_optional_float(row.get("weight")),
            height=_optional_float(row.get("height")),
            target_calories=_optional_float(row.get("target_calories")),
            protein_target=_optional_float(row.get("protein_target")),
            carbs_target=_optional_float(row.get("carbs_target")),
            fats_target=_optional_float(row.get("fats_target")),
        )


def _optional_float(value: object) -> float | None:
    if value is None:
        return None
    return float(value)
