"""Tests for the HTTP API."""

from dataclasses import replace
from datetime import UTC, date, datetime
from uuid import uuid4

from fastapi.testclient import TestClient

from farefit.api.app import create_app
from farefit.containers import AppContainer
from tests.conftest import make_goal, make_meal, make_workout


def test_health(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_admin_health_requires_token(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    assert client.get("/admin/health").status_code == 401
    response = client.get("/admin/health", headers={"X-Admin-Token": "admin-token"})
    assert response.status_code == 200


def test_admin_lists_fare_scores(container: AppContainer) -> None:
    client = TestClient(create_app(container))
    user_id = uuid4()
    container.fare_score_service.get_state(user_id)

    response = client.get(
        "/admin/fare-scores", headers={"X-Admin-Token": "admin-token"}
    )

    assert response.status_code == 200
    entries = response.json()["fare_scores"]
    assert entries[0]["user_id"] == str(user_id)
    assert entries[0]["current_score"] == 350


def test_get_fare_score_initializes(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.get(f"/users/{uuid4()}/fare-score")

    assert response.status_code == 200
    data = response.json()
    assert data["current_score"] == 350
    assert data["tier"]["label"] == "Starting Journey"
    assert data["tier"]["color"] == "#E53E3E"


def test_apply_actions(container: AppContainer, fare_score_repository) -> None:
    client = TestClient(create_app(container))
    user_id = uuid4()
    fare_score_repository.states[user_id] = replace(
        container.fare_score_service.get_state(user_id), current_score=615
    )

    response = client.post(
        f"/users/{user_id}/fare-score/actions",
        json={
            "actions": [
                {"type": "meal_logged"},
                {"type": "workout_completed"},
                {"type": "macro_target_hit"},
            ]
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["current_score"] == 621
    assert data["tier"]["label"] == "Consistent Tracker"
    assert fare_score_repository.states[user_id].current_score == 621


def test_apply_actions_rejects_unknown_type(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        f"/users/{uuid4()}/fare-score/actions",
        json={"actions": [{"type": "teleported"}]},
    )

    assert response.status_code == 422


def test_apply_daily_update(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        f"/users/{uuid4()}/fare-score/daily",
        json={"meals_logged": 2, "workout_completed": True, "missed_day": True},
    )

    assert response.status_code == 200
    assert response.json()["current_score"] == 350 + 1 + 2 - 2


def test_smooth(container: AppContainer, fare_score_repository) -> None:
    client = TestClient(create_app(container))
    user_id = uuid4()
    fare_score_repository.states[user_id] = replace(
        container.fare_score_service.get_state(user_id), current_score=500
    )

    response = client.post(
        f"/users/{user_id}/fare-score/smooth", json={"new_score": 900}
    )

    assert response.status_code == 200
    assert response.json()["current_score"] == 540


def test_estimate(container: AppContainer, fare_score_repository) -> None:
    client = TestClient(create_app(container))

    response = client.get(f"/users/{uuid4()}/fare-score/estimate?target=400")

    assert response.status_code == 200
    assert response.json() == {
        "current_score": 350,
        "target_score": 400,
        "days": 100,
        "weeks": 15,
        "realistic": True,
    }
    assert fare_score_repository.reads == 1
    assert fare_score_repository.saves == 1


def test_daily_score(
    container: AppContainer, meal_repository, workout_repository, goal_repository
) -> None:
    client = TestClient(create_app(container))
    user_id = uuid4()
    day = date(2026, 10, 17)
    for _ in range(3):
        meal_repository.add(user_id, make_meal(day, protein=60))
    workout_repository.add(
        user_id, make_workout(datetime(2026, 10, 17, 18, 0, tzinfo=UTC))
    )
    goal_repository.goals[user_id] = make_goal(protein_target=150)

    response = client.get(f"/users/{user_id}/daily-score?day=2026-10-17")

    assert response.status_code == 200
    data = response.json()
    assert data["total_score"] == 100
    assert data["macros_hit"] == {"earned": 25, "max": 25}
    assert data["tier"] == "Perfect Day!"


def test_daily_score_degrades_on_backend_error(
    container: AppContainer, meal_repository
) -> None:
    client = TestClient(create_app(container))
    meal_repository.error = RuntimeError("db down")

    response = client.get(f"/users/{uuid4()}/daily-score?day=2026-10-17")

    assert response.status_code == 200
    assert response.json()["total_score"] == 0


def test_workout_analysis(container: AppContainer, workout_repository) -> None:
    client = TestClient(create_app(container))
    user_id = uuid4()
    workout_repository.add(
        user_id, make_workout(datetime(2026, 10, 15, 18, 0, tzinfo=UTC))
    )

    response = client.get(f"/users/{user_id}/workouts/analysis")

    assert response.status_code == 200
    data = response.json()
    assert data["total_workouts"] == 1
    assert data["exercise_frequency"] == {"bench press": 1}


def test_coach_tip(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.get(f"/users/{uuid4()}/coach/tip")

    assert response.status_code == 200
    assert response.json()["tip"] == "Add a protein-rich snack this afternoon."
