"""Outcome types shared by the service and action layers."""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Generic, TypeVar

from workout_tracker.domain.workouts import Workout

T = TypeVar("T")


class FailureKind(StrEnum):
    """Declared failure categories."""

    UNAUTHENTICATED = "unauthenticated"
    NOT_FOUND_OR_UNAUTHORIZED = "not_found_or_unauthorized"
    VALIDATION_FAILED = "validation_failed"
    STORAGE = "storage"


class ResultKind(StrEnum):
    """Failure kinds exposed in the action result envelope."""

    VALIDATION_FAILED = "ValidationFailed"
    FORBIDDEN = "Forbidden"
    UNEXPECTED = "Unexpected"


@dataclass(frozen=True)
class ValidationIssue:
    """A single field-level validation problem."""

    path: str
    message: str


@dataclass(frozen=True)
class Success(Generic[T]):
    """Successful outcome carrying a value."""

    value: T


@dataclass(frozen=True)
class Failure:
    """Tagged failure outcome."""

    kind: FailureKind
    message: str
    issues: list[ValidationIssue] = field(default_factory=list)


Outcome = Success[T] | Failure


@dataclass(frozen=True)
class ActionResult:
    """Uniform envelope returned across the action boundary."""

    success: bool
    data: Workout | None = None
    kind: ResultKind | None = None
    error: str | None = None
    issues: list[ValidationIssue] | None = None

    @classmethod
    def ok(cls, data: Workout | None) -> "ActionResult":
        return cls(success=True, data=data)

    @classmethod
    def failed(
        cls,
        kind: ResultKind,
        error: str,
        issues: list[ValidationIssue] | None = None,
    ) -> "ActionResult":
        return cls(success=False, kind=kind, error=error, issues=issues)

    def to_payload(self) -> dict[str, object]:
        """Serialize to the JSON envelope shape."""
        if self.success:
            data = self.data.to_payload() if self.data else None
            return {"success": True, "data": data}
        payload: dict[str, object] = {
            "success": False,
            "kind": str(self.kind) if self.kind else None,
            "error": self.error,
        }
        if self.issues is not None:
            payload["issues"] = [
                {"path": issue.path, "message": issue.message}
                for issue in self.issues
            ]
        return payload
