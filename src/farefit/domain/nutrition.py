"""Nutrition domain models."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class MealEntry:
    """A meal logged by the user for a given day."""

    meal_date: date
    meal_type: str
    food_name: str
    brand: str | None
    serving_size: float
    calories: float
    protein: float
    carbs: float
    fats: float
    fiber: float


@dataclass(frozen=True)
class NutritionTotals:
    """Summed macros across meals."""

    calories: float
    protein: float
    carbs: float
    fats: float
    fiber: float


@dataclass(frozen=True)
class FitnessGoal:
    """User fitness goal targets."""

    goal_type: str
    activity_level: str | None
    weight: float | None
    height: float | None
    target_calories: float | None
    protein_target: float | None
    carbs_target: float | None
    fats_target: float | None
