"""Supabase repository for workouts."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any
from uuid import UUID

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from workout_tracker.domain.errors import StorageError
from workout_tracker.domain.workouts import Workout
from workout_tracker.services.workouts import WorkoutRepository

_COLUMNS = "id, user_id, name, started_at, completed_at, created_at, updated_at"


@dataclass
class SupabaseWorkoutRepository(WorkoutRepository):
    """Supabase implementation for workouts.

    Every query filters on ``user_id``; ``updated_at`` is refreshed by a
    database trigger.
    """

    client: Client
    table_name: str = "workouts"

    def list_workouts(
        self,
        user_id: str,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[Workout]:
        """Return a user's workouts ordered by start time."""
        query = (
            self.client.table(self.table_name)
            .select(_COLUMNS)
            .eq("user_id", user_id)
        )
        if start is not None:
            query = query.gte("started_at", start.isoformat())
        if end is not None:
            query = query.lt("started_at", end.isoformat())
        response = _execute(query.order("started_at", desc=False))
        return [_parse_workout(row) for row in response.data or []]

    def get_workout(self, user_id: str, workout_id: UUID) -> Workout | None:
        """Return a workout by id if the user owns it."""
        response = _execute(
            self.client.table(self.table_name)
            .select(_COLUMNS)
            .eq("id", str(workout_id))
            .eq("user_id", user_id)
            .limit(1)
        )
        if not response.data:
            return None
        return _parse_workout(response.data[0])

    def create_workout(
        self, user_id: str, name: str, started_at: datetime
    ) -> Workout:
        """Insert a workout row and return it."""
        response = _execute(
            self.client.table(self.table_name).insert(
                {
                    "user_id": user_id,
                    "name": name,
                    "started_at": started_at.isoformat(),
                }
            )
        )
        if not response.data:
            raise StorageError("Failed to create workout")
        return _parse_workout(response.data[0])

    def update_workout(
        self, user_id: str, workout_id: UUID, changes: dict[str, object]
    ) -> Workout | None:
        """Update an owned workout row."""
        payload = {
            key: value.isoformat() if isinstance(value, datetime) else value
            for key, value in changes.items()
        }
        response = _execute(
            self.client.table(self.table_name)
            .update(payload)
            .eq("id", str(workout_id))
            .eq("user_id", user_id)
        )
        if not response.data:
            return None
        return _parse_workout(response.data[0])

    def delete_workout(self, user_id: str, workout_id: UUID) -> bool:
        """Delete an owned workout row."""
        response = _execute(
            self.client.table(self.table_name)
            .delete()
            .eq("id", str(workout_id))
            .eq("user_id", user_id)
        )
        return bool(response.data)


def _execute(query: Any) -> Any:
    try:
        return query.execute()
    except (APIError, httpx.HTTPError) as exc:
        raise StorageError(str(exc)) from exc


def _parse_timestamp(raw: object) -> datetime | None:
    if isinstance(raw, str) and raw:
        return datetime.fromisoformat(raw)
    return None


def _parse_workout(row: dict[str, object]) -> Workout:
    """Parse a workout row into a domain model."""
    started_at = _parse_timestamp(row.get("started_at"))
    created_at = _parse_timestamp(row.get("created_at"))
    updated_at = _parse_timestamp(row.get("updated_at"))
    if started_at is None or created_at is None or updated_at is None:
        raise StorageError(f"Workout row {row.get('id')} is missing timestamps")
    return Workout(
        id=UUID(str(row["id"])),
        user_id=str(row["user_id"]),
        name=str(row.get("name", "")),
        started_at=started_at,
        completed_at=_parse_timestamp(row.get("completed_at")),
        created_at=created_at,
        updated_at=updated_at,
    )
