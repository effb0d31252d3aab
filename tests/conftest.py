"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import date, datetime
from uuid import UUID

import pytest

from farefit.config import Settings
from farefit.containers import AppContainer
from farefit.domain.nutrition import FitnessGoal, MealEntry
from farefit.domain.scores import FareScoreState
from farefit.domain.workouts import ExerciseLog, ExerciseSet, WorkoutSession
from farefit.services.coach import CoachClient, CoachService
from farefit.services.daily_score import (
    DailyScoreService,
    GoalRepository,
    MealRepository,
    WorkoutRepository,
)
from farefit.services.fare_score import FareScoreRepository, FareScoreService
from farefit.services.workouts import WorkoutAnalysisService

FAKE_SERVICE_KEY = (
    "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9."
    "eyJyb2xlIjoic2VydmljZV9yb2xlIn0."
    "c2lnbmF0dXJlLXNpZ25hdHVyZQ"
)


@dataclass
class InMemoryFareScoreRepository(FareScoreRepository):
    """In-memory FareScore repository for tests."""

    states: dict[UUID, FareScoreState] = field(default_factory=dict)
    saves: int = 0
    reads: int = 0

    def get_state(self, user_id: UUID) -> FareScoreState | None:
        self.reads += 1
        return self.states.get(user_id)

    def save_state(self, user_id: UUID, state: FareScoreState) -> None:
        self.states[user_id] = state
        self.saves += 1

    def list_states(self, limit: int) -> list[tuple[UUID, FareScoreState]]:
        ordered = sorted(
            self.states.items(), key=lambda item: item[1].current_score, reverse=True
        )
        return ordered[:limit]


@dataclass
class InMemoryMealRepository(MealRepository):
    """In-memory meal repository for tests."""

    meals: list[tuple[UUID, MealEntry]] = field(default_factory=list)
    error: Exception | None = None

    def add(self, user_id: UUID, meal: MealEntry) -> None:
        self.meals.append((user_id, meal))

    def list_meals(self, user_id: UUID, day: date) -> list[MealEntry]:
        if self.error:
            raise self.error
        return [
            meal
            for owner, meal in self.meals
            if owner == user_id and meal.meal_date == day
        ]


@dataclass
class InMemoryWorkoutRepository(WorkoutRepository):
    """In-memory workout repository for tests."""

    workouts: list[tuple[UUID, WorkoutSession]] = field(default_factory=list)
    error: Exception | None = None

    def add(self, user_id: UUID, workout: WorkoutSession) -> None:
        self.workouts.append((user_id, workout))

    def list_workouts(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[WorkoutSession]:
        if self.error:
            raise self.error
        return [
            workout
            for owner, workout in self.workouts
            if owner == user_id and start <= workout.date < end
        ]

    def list_recent_workouts(self, user_id: UUID, limit: int) -> list[WorkoutSession]:
        if self.error:
            raise self.error
        owned = [workout for owner, workout in self.workouts if owner == user_id]
        return sorted(owned, key=lambda workout: workout.date, reverse=True)[:limit]


@dataclass
class InMemoryGoalRepository(GoalRepository):
    """In-memory goal repository for tests."""

    goals: dict[UUID, FitnessGoal] = field(default_factory=dict)
    error: Exception | None = None

    def get_goal(self, user_id: UUID) -> FitnessGoal | None:
        if self.error:
            raise self.error
        return self.goals.get(user_id)


@dataclass
class FakeCoachClient(CoachClient):
    """Fake coach client that records prompts."""

    reply: str = "Add a protein-rich snack this afternoon."
    error: Exception | None = None
    prompts: list[str] = field(default_factory=list)

    async def complete(
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        instructions: str,
        prompt: str,
    ) -> str:
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return self.reply


def make_meal(day: date, protein: float = 40.0, meal_type: str = "lunch") -> MealEntry:
    return MealEntry(
        meal_date=day,
        meal_type=meal_type,
        food_name="Chicken bowl",
        brand=None,
        serving_size=1,
        calories=550,
        protein=protein,
        carbs=60,
        fats=15,
        fiber=6,
    )


def make_goal(protein_target: float | None = 150) -> FitnessGoal:
    return FitnessGoal(
        goal_type="maintain",
        activity_level="moderate",
        weight=80,
        height=180,
        target_calories=2400,
        protein_target=protein_target,
        carbs_target=250,
        fats_target=80,
    )


def make_workout(
    when: datetime, exercises: list[ExerciseLog] | None = None, duration: int = 45
) -> WorkoutSession:
    return WorkoutSession(
        date=when,
        day_type="Push",
        duration=duration,
        calories_burned=300,
        exercises=exercises
        if exercises is not None
        else [ExerciseLog(name="Bench Press", sets=[ExerciseSet(reps=5, weight=185)])],
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key=FAKE_SERVICE_KEY,
        admin_token="admin-token",
        openai_api_key="openai-key",
    )


@pytest.fixture
def fare_score_repository() -> InMemoryFareScoreRepository:
    return InMemoryFareScoreRepository()


@pytest.fixture
def meal_repository() -> InMemoryMealRepository:
    return InMemoryMealRepository()


@pytest.fixture
def workout_repository() -> InMemoryWorkoutRepository:
    return InMemoryWorkoutRepository()


@pytest.fixture
def goal_repository() -> InMemoryGoalRepository:
    return InMemoryGoalRepository()


@pytest.fixture
def coach_client() -> FakeCoachClient:
    return FakeCoachClient()


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    fare_score_repository: InMemoryFareScoreRepository,
    meal_repository: InMemoryMealRepository,
    workout_repository: InMemoryWorkoutRepository,
    goal_repository: InMemoryGoalRepository,
    coach_client: FakeCoachClient,
) -> AppContainer:
    fare_score_service = FareScoreService(fare_score_repository)
    daily_score_service = DailyScoreService(
        meal_repository=meal_repository,
        workout_repository=workout_repository,
        goal_repository=goal_repository,
    )
    workout_service = WorkoutAnalysisService(workout_repository)
    coach_service = CoachService(
        client=coach_client,
        model=settings.openai_model,
        reasoning_effort=settings.openai_reasoning_effort,
        store=settings.openai_store,
        fare_score_service=fare_score_service,
        daily_score_service=daily_score_service,
        workout_service=workout_service,
        timezone_name=settings.default_timezone,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        fare_score_service=fare_score_service,
        daily_score_service=daily_score_service,
        workout_service=workout_service,
        coach_service=coach_service,
        close_resources=close_resources,
    )
