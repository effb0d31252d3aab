"""Tests for the FareScore service."""

from dataclasses import replace
from uuid import uuid4

from farefit.domain.scores import ActionType, FareScoreAction
from farefit.services.fare_score import INITIAL_SCORE, FareScoreService
from tests.conftest import InMemoryFareScoreRepository


def test_get_state_initializes_missing_user() -> None:
    repository = InMemoryFareScoreRepository()
    service = FareScoreService(repository)
    user_id = uuid4()

    state = service.get_state(user_id)

    assert state.current_score == INITIAL_SCORE
    assert repository.states[user_id] == state


def test_get_state_returns_existing() -> None:
    repository = InMemoryFareScoreRepository()
    service = FareScoreService(repository)
    user_id = uuid4()
    service.get_state(user_id)

    service.get_state(user_id)

    assert repository.saves == 1


def test_apply_actions_persists_new_score() -> None:
    repository = InMemoryFareScoreRepository()
    service = FareScoreService(repository)
    user_id = uuid4()

    updated = service.apply_actions(
        user_id,
        [
            FareScoreAction(ActionType.WORKOUT_COMPLETED),
            FareScoreAction(ActionType.MISSED_DAY),
        ],
    )

    assert updated.current_score == INITIAL_SCORE
    assert updated.workouts_this_month == 1
    assert updated.penalties_this_month == 1
    assert repository.states[user_id] == updated


def test_process_day_applies_facts() -> None:
    repository = InMemoryFareScoreRepository()
    service = FareScoreService(repository)
    user_id = uuid4()

    updated = service.process_day(
        user_id,
        meals_logged=3,
        workout_completed=True,
        hit_macro_target=True,
        missed_day=False,
    )

    assert updated.current_score == INITIAL_SCORE + 6


def test_smooth_blends_and_persists() -> None:
    repository = InMemoryFareScoreRepository()
    service = FareScoreService(repository)
    user_id = uuid4()
    repository.states[user_id] = replace(
        service.get_state(user_id), current_score=500
    )

    updated = service.smooth(user_id, 900)

    assert updated.current_score == 540
    assert repository.states[user_id].current_score == 540


def test_estimate_uses_stored_score() -> None:
    repository = InMemoryFareScoreRepository()
    service = FareScoreService(repository)

    estimate = service.estimate(uuid4(), target_score=400)

    assert estimate.days == 100


def test_leaderboard_orders_by_score() -> None:
    repository = InMemoryFareScoreRepository()
    service = FareScoreService(repository)
    low, high = uuid4(), uuid4()
    repository.states[low] = service.get_state(low)
    repository.states[high] = replace(service.get_state(high), current_score=720)

    entries = service.leaderboard(limit=1)

    assert [user_id for user_id, _ in entries] == [high]
