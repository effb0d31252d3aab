"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from farefit.adapters.openai_coach_client import OpenAICoachClient
from farefit.adapters.supabase_fare_score_repository import (
    SupabaseFareScoreRepository,
)
from farefit.adapters.supabase_goal_repository import SupabaseGoalRepository
from farefit.adapters.supabase_meal_repository import SupabaseMealRepository
from farefit.adapters.supabase_workout_repository import SupabaseWorkoutRepository
from farefit.config import Settings
from farefit.services.coach import CoachService
from farefit.services.daily_score import DailyScoreService
from farefit.services.fare_score import FareScoreService
from farefit.services.workouts import WorkoutAnalysisService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    fare_score_service: FareScoreService
    daily_score_service: DailyScoreService
    workout_service: WorkoutAnalysisService
    coach_service: CoachService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    workout_repository = SupabaseWorkoutRepository(supabase_client)
    fare_score_service = FareScoreService(SupabaseFareScoreRepository(supabase_client))
    daily_score_service = DailyScoreService(
        meal_repository=SupabaseMealRepository(supabase_client),
        workout_repository=workout_repository,
        goal_repository=SupabaseGoalRepository(supabase_client),
    )
    workout_service = WorkoutAnalysisService(workout_repository)
    coach_client = OpenAICoachClient.create(resolved_settings.openai_api_key)
    coach_service = CoachService(
        client=coach_client,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
        fare_score_service=fare_score_service,
        daily_score_service=daily_score_service,
        workout_service=workout_service,
        timezone_name=resolved_settings.default_timezone,
    )

    async def close_resources() -> None:
        await coach_client.close()

    return AppContainer(
        settings=resolved_settings,
        fare_score_service=fare_score_service,
        daily_score_service=daily_score_service,
        workout_service=workout_service,
        coach_service=coach_service,
        close_resources=close_resources,
    )
