"""Per-user score endpoints."""

from __future__ import annotations

from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Request

from farefit.api.models import (
    ActionsRequest,
    CoachTipResponse,
    DailyScoreResponse,
    DailyUpdateRequest,
    FareScoreResponse,
    SmoothingRequest,
    TimeToTargetResponse,
    WorkoutAnalysisResponse,
)
from farefit.services.fare_score import estimate_time_to_target

if TYPE_CHECKING:
    from farefit.containers import AppContainer

router = APIRouter(prefix="/users/{user_id}", tags=["scores"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


@router.get("/daily-score")
async def daily_score(
    user_id: UUID, request: Request, day: date | None = None
) -> DailyScoreResponse:
    """Return today's (or the given day's) score breakdown."""
    container = _container(request)
    breakdown = container.daily_score_service.get_daily_score(
        user_id, day, container.settings.default_timezone
    )
    return DailyScoreResponse.from_domain(breakdown)


@router.get("/fare-score")
async def fare_score(user_id: UUID, request: Request) -> FareScoreResponse:
    """Return the user's FareScore, initializing it when missing."""
    state = _container(request).fare_score_service.get_state(user_id)
    return FareScoreResponse.from_domain(state)


@router.post("/fare-score/actions")
async def apply_actions(
    user_id: UUID, payload: ActionsRequest, request: Request
) -> FareScoreResponse:
    """Apply a batch of scored actions."""
    state = _container(request).fare_score_service.apply_actions(
        user_id, [action.to_domain() for action in payload.actions]
    )
    return FareScoreResponse.from_domain(state)


@router.post("/fare-score/daily")
async def apply_daily_update(
    user_id: UUID, payload: DailyUpdateRequest, request: Request
) -> FareScoreResponse:
    """Apply one day's observed facts."""
    state = _container(request).fare_score_service.process_day(
        user_id,
        meals_logged=payload.meals_logged,
        workout_completed=payload.workout_completed,
        hit_macro_target=payload.hit_macro_target,
        missed_day=payload.missed_day,
    )
    return FareScoreResponse.from_domain(state)


@router.post("/fare-score/smooth")
async def smooth(
    user_id: UUID, payload: SmoothingRequest, request: Request
) -> FareScoreResponse:
    """Blend a new raw score into the stored FareScore."""
    state = _container(request).fare_score_service.smooth(user_id, payload.new_score)
    return FareScoreResponse.from_domain(state)


@router.get("/fare-score/estimate")
async def estimate(
    user_id: UUID, target: int, request: Request, avg_daily_change: float = 0.5
) -> TimeToTargetResponse:
    """Estimate the time to reach a target FareScore."""
    service = _container(request).fare_score_service
    state = service.get_state(user_id)
    result = estimate_time_to_target(state.current_score, target, avg_daily_change)
    return TimeToTargetResponse(
        current_score=state.current_score,
        target_score=target,
        days=result.days,
        weeks=result.weeks,
        realistic=result.realistic,
    )


@router.get("/workouts/analysis")
async def workout_analysis(user_id: UUID, request: Request) -> WorkoutAnalysisResponse:
    """Return the user's workout analysis."""
    analysis, _ = _container(request).workout_service.analyze(user_id)
    return WorkoutAnalysisResponse.from_domain(analysis)


@router.get("/coach/tip")
async def coach_tip(user_id: UUID, request: Request) -> CoachTipResponse:
    """Return a coaching tip for the user."""
    tip = await _container(request).coach_service.get_tip(user_id)
    return CoachTipResponse(tip=tip)
