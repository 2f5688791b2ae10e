"""Domain models for workouts."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class Workout:
    """A workout session owned by a single user."""

    id: UUID
    user_id: str
    name: str
    started_at: datetime
    completed_at: datetime | None
    created_at: datetime
    updated_at: datetime

    def to_payload(self) -> dict[str, object]:
        """Serialize using the wire field names."""
        return {
            "id": str(self.id),
            "userId": self.user_id,
            "name": self.name,
            "startedAt": self.started_at.isoformat(),
            "completedAt": (
                self.completed_at.isoformat() if self.completed_at else None
            ),
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        }


@dataclass(frozen=True)
class CreateWorkoutInput:
    """Validated input for creating a workout."""

    name: str
    started_at: datetime


@dataclass(frozen=True)
class UpdateWorkoutInput:
    """Validated input for a partial workout update."""

    id: UUID
    name: str | None = None
    started_at: datetime | None = None

    def changes(self) -> dict[str, object]:
        """Return only the fields that were provided."""
        values: dict[str, object] = {}
        if self.name is not None:
            values["name"] = self.name
        if self.started_at is not None:
            values["started_at"] = self.started_at
        return values


@dataclass(frozen=True)
class CompleteWorkoutInput:
    """Validated input for marking a workout completed."""

    id: UUID
    completed_at: datetime | None = None


@dataclass(frozen=True)
class DeleteWorkoutInput:
    """Validated input for deleting a workout."""

    id: UUID
