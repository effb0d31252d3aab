"""Supabase repository for FareScore state."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from farefit.domain.scores import FareScoreState
from farefit.services.fare_score import (
    INITIAL_SCORE,
    FareScoreRepository,
    clamp_score,
)

_COLUMNS = (
    "user_id, current_score, streak_days, meals_logged_this_month, "
    "workouts_this_month, penalties_this_month, last_update_date, consistency_rate"
)


@dataclass
class SupabaseFareScoreRepository(FareScoreRepository):
    """Supabase implementation for FareScore persistence."""

    client: Client

    def get_state(self, user_id: UUID) -> FareScoreState | None:
        """Return the stored state for a user."""
        response = (
            self.client.table("fare_scores")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def save_state(self, user_id: UUID, state: FareScoreState) -> None:
        """Upsert the state row for a user."""
        response = (
            self.client.table("fare_scores")
            .upsert(
                {
                    "user_id": str(user_id),
                    "current_score": state.current_score,
                    "streak_days": state.streak_days,
                    "meals_logged_this_month": state.meals_logged_this_month,
                    "workouts_this_month": state.workouts_this_month,
                    "penalties_this_month": state.penalties_this_month,
                    "last_update_date": state.last_update_date.isoformat(),
                    "consistency_rate": state.consistency_rate,
                },
                on_conflict="user_id",
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save FareScore in Supabase")

    def list_states(self, limit: int) -> list[tuple[UUID, FareScoreState]]:
        """Return states ordered by score, highest first."""
        response = (
            self.client.table("fare_scores")
            .select(_COLUMNS)
            .order("current_score", desc=True)
            .limit(limit)
            .execute()
        )
        return [(UUID(row["user_id"]), _parse_row(row)) for row in response.data or []]


def _parse_row(row: dict[str, object]) -> FareScoreState:
    updated_raw = row.get("last_update_date")
    last_update = (
        datetime.fromisoformat(updated_raw)
        if isinstance(updated_raw, str) and updated_raw
        else datetime.now(tz=UTC)
    )
    score_raw = row.get("current_score")
    return FareScoreState(
        current_score=(
            INITIAL_SCORE if score_raw is None else clamp_score(int(score_raw))
        ),
        streak_days=int(row.get("streak_days") or 0),
        meals_logged_this_month=int(row.get("meals_logged_this_month") or 0),
        workouts_this_month=int(row.get("workouts_this_month") or 0),
        penalties_this_month=int(row.get("penalties_this_month") or 0),
        last_update_date=last_update,
        consistency_rate=float(row.get("consistency_rate") or 0.0),
    )
