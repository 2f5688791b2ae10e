"""Owner-scoped workout data access."""

import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Protocol
from uuid import UUID

from workout_tracker.domain.errors import StorageError
from workout_tracker.domain.results import Failure, FailureKind, Outcome, Success
from workout_tracker.domain.workouts import (
    CompleteWorkoutInput,
    CreateWorkoutInput,
    UpdateWorkoutInput,
    Workout,
)
from workout_tracker.services.identity import CurrentUser

logger = logging.getLogger(__name__)

UNAUTHENTICATED_MESSAGE = "Unauthorized"
NOT_FOUND_MESSAGE = "Workout not found"
LOAD_FAILED_MESSAGE = "Failed to load workouts"
SAVE_FAILED_MESSAGE = "Failed to save workout"
DELETE_FAILED_MESSAGE = "Failed to delete workout"


class WorkoutRepository(Protocol):
    """Persistence interface for workouts.

    Every method is scoped by ``user_id``; rows owned by other users are
    invisible. Implementations raise ``StorageError`` on backend failures.
    """

    def list_workouts(
        self,
        user_id: str,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[Workout]:
        """Return workouts ordered by start time, optionally within [start, end)."""

    def get_workout(self, user_id: str, workout_id: UUID) -> Workout | None:
        """Return a workout if it exists and belongs to the user."""

    def create_workout(
        self, user_id: str, name: str, started_at: datetime
    ) -> Workout:
        """Insert a workout and return it with generated fields."""

    def update_workout(
        self, user_id: str, workout_id: UUID, changes: dict[str, object]
    ) -> Workout | None:
        """Apply changes to an owned workout, returning None if nothing matched."""

    def delete_workout(self, user_id: str, workout_id: UUID) -> bool:
        """Delete an owned workout, returning whether a row was removed."""


def day_window(day: date, tz: tzinfo) -> tuple[datetime, datetime]:
    """Return the start of ``day`` and the start of the following day in ``tz``.

    The half-open window covers the whole calendar day, including
    23:59:59.999, and stays correct across DST transitions.
    """
    start = datetime.combine(day, time.min, tzinfo=tz)
    end = datetime.combine(day + timedelta(days=1), time.min, tzinfo=tz)
    return start, end


@dataclass
class WorkoutService:
    """Identity-gated operations over a user's workouts."""

    repository: WorkoutRepository
    timezone: tzinfo

    def list_by_date(
        self, user: CurrentUser | None, day: date
    ) -> Outcome[list[Workout]]:
        """Return the user's workouts started on a calendar day."""
        if user is None:
            return _unauthenticated()
        start, end = day_window(day, self.timezone)
        try:
            workouts = self.repository.list_workouts(user.id, start, end)
        except StorageError:
            return _storage_failure(LOAD_FAILED_MESSAGE)
        return Success(workouts)

    def list_all(self, user: CurrentUser | None) -> Outcome[list[Workout]]:
        """Return all of the user's workouts."""
        if user is None:
            return _unauthenticated()
        try:
            workouts = self.repository.list_workouts(user.id)
        except StorageError:
            return _storage_failure(LOAD_FAILED_MESSAGE)
        return Success(workouts)

    def get_by_id(
        self, user: CurrentUser | None, workout_id: UUID
    ) -> Outcome[Workout | None]:
        """Return an owned workout, or None when missing or owned by someone else."""
        if user is None:
            return _unauthenticated()
        try:
            workout = self.repository.get_workout(user.id, workout_id)
        except StorageError:
            return _storage_failure(LOAD_FAILED_MESSAGE)
        return Success(workout)

    def create(
        self, user: CurrentUser | None, data: CreateWorkoutInput
    ) -> Outcome[Workout]:
        """Create a workout owned by the current user."""
        if user is None:
            return _unauthenticated()
        try:
            workout = self.repository.create_workout(
                user.id, data.name, self._localize(data.started_at)
            )
        except StorageError:
            return _storage_failure(SAVE_FAILED_MESSAGE)
        logger.info("Created workout %s", workout.id)
        return Success(workout)

    def update(
        self, user: CurrentUser | None, data: UpdateWorkoutInput
    ) -> Outcome[Workout]:
        """Apply a partial update to an owned workout."""
        if user is None:
            return _unauthenticated()
        changes = data.changes()
        if "started_at" in changes:
            changes["started_at"] = self._localize(data.started_at)
        return self._mutate(user, data.id, changes)

    def complete(
        self, user: CurrentUser | None, data: CompleteWorkoutInput
    ) -> Outcome[Workout]:
        """Record the completion time of an owned workout."""
        if user is None:
            return _unauthenticated()
        completed_at = (
            self._localize(data.completed_at)
            if data.completed_at
            else datetime.now(tz=self.timezone)
        )
        return self._mutate(user, data.id, {"completed_at": completed_at})

    def delete(self, user: CurrentUser | None, workout_id: UUID) -> Outcome[None]:
        """Delete an owned workout."""
        if user is None:
            return _unauthenticated()
        try:
            existing = self.repository.get_workout(user.id, workout_id)
            if existing is None:
                return _not_found()
            removed = self.repository.delete_workout(user.id, workout_id)
        except StorageError:
            return _storage_failure(DELETE_FAILED_MESSAGE)
        if not removed:
            return _not_found()
        logger.info("Deleted workout %s", workout_id)
        return Success(None)

    def _mutate(
        self, user: CurrentUser, workout_id: UUID, changes: dict[str, object]
    ) -> Outcome[Workout]:
        try:
            existing = self.repository.get_workout(user.id, workout_id)
            if existing is None:
                return _not_found()
            if not changes:
                return Success(existing)
            updated = self.repository.update_workout(user.id, workout_id, changes)
        except StorageError:
            return _storage_failure(SAVE_FAILED_MESSAGE)
        # Row vanished between the ownership check and the write.
        if updated is None:
            return _not_found()
        return Success(updated)

    def _localize(self, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=self.timezone)
        return value


def _unauthenticated() -> Failure:
    return Failure(FailureKind.UNAUTHENTICATED, UNAUTHENTICATED_MESSAGE)


def _not_found() -> Failure:
    return Failure(FailureKind.NOT_FOUND_OR_UNAUTHORIZED, NOT_FOUND_MESSAGE)


def _storage_failure(message: str) -> Failure:
    logger.exception(message)
    return Failure(FailureKind.STORAGE, message)
