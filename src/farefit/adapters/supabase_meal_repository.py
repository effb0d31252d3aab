"""Supabase repository for logged meals."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from farefit.domain.nutrition import MealEntry
from farefit.services.daily_score import MealRepository


@dataclass
class SupabaseMealRepository(MealRepository):
    """Supabase implementation for meal reads."""

    client: Client

    def list_meals(self, user_id: UUID, day: date) -> list[MealEntry]:
        """Return meals logged on a day."""
        response = (
            self.client.table("meals")
            .select(
                "meal_date, meal_type, food_name, brand, serving_size, "
                "calories, protein, carbs, fats, fiber"
            )
            .eq("user_id", str(user_id))
            .eq("meal_date", day.isoformat())
            .execute()
        )
        return [_parse_row(row, day) for row in response.data or []]


def _parse_row(row: dict[str, object], default_day: date) -> MealEntry:
    meal_date_raw = row.get("meal_date")
    meal_date = (
        date.fromisoformat(meal_date_raw[:10])
        if isinstance(meal_date_raw, str) and meal_date_raw
        else default_day
    )
    return MealEntry(
        meal_date=meal_date,
        meal_type=str(row.get("meal_type") or "snack"),
        food_name=str(row.get("food_name") or ""),
        brand=row.get("brand"),
        serving_size=float(row.get("serving_size") or 0.0),
        calories=float(row.get("calories") or 0.0),
        protein=float(row.get("protein") or 0.0),
        carbs=float(row.get("carbs") or 0.0),
        fats=float(row.get("fats") or 0.0),
        fiber=float(row.get("fiber") or 0.0),
    )
