"""Action dispatcher mapping mutation payloads to result envelopes."""

import logging
from dataclasses import dataclass

from workout_tracker.domain.results import (
    ActionResult,
    Failure,
    FailureKind,
    Outcome,
    ResultKind,
    Success,
)
from workout_tracker.domain.workouts import Workout
from workout_tracker.services.identity import CurrentUser
from workout_tracker.services.revalidation import DASHBOARD_PATH, PathRevalidator
from workout_tracker.services.validation import SchemaName, ValidatedInput, validate
from workout_tracker.services.workouts import WorkoutService

logger = logging.getLogger(__name__)

FORBIDDEN_MESSAGE = "You do not have permission to perform this action"
UNEXPECTED_MESSAGE = "An unexpected error occurred"


@dataclass
class ActionDispatcher:
    """Validates payloads, runs workout mutations, and never raises."""

    workout_service: WorkoutService
    revalidator: PathRevalidator

    def dispatch(
        self, operation: SchemaName, user: CurrentUser | None, payload: object
    ) -> ActionResult:
        """Run a mutation and return a structured result."""
        try:
            return self._dispatch(SchemaName(operation), user, payload)
        except Exception:
            logger.exception("Unhandled error in %s action", operation)
            return ActionResult.failed(ResultKind.UNEXPECTED, UNEXPECTED_MESSAGE)

    def _dispatch(
        self, operation: SchemaName, user: CurrentUser | None, payload: object
    ) -> ActionResult:
        validated = validate(operation, payload)
        if isinstance(validated, Failure):
            return ActionResult.failed(
                ResultKind.VALIDATION_FAILED, validated.message, validated.issues
            )

        outcome = self._invoke(operation, user, validated.value)
        match outcome:
            case Success(value=value):
                self.revalidator.revalidate_path(DASHBOARD_PATH)
                return ActionResult.ok(value)
            case Failure(
                kind=FailureKind.UNAUTHENTICATED
                | FailureKind.NOT_FOUND_OR_UNAUTHORIZED
            ):
                logger.info("Rejected %s action: %s", operation, outcome.kind)
                return ActionResult.failed(ResultKind.FORBIDDEN, FORBIDDEN_MESSAGE)
            case Failure(kind=FailureKind.VALIDATION_FAILED, message=message):
                return ActionResult.failed(
                    ResultKind.VALIDATION_FAILED, message, outcome.issues
                )
            case Failure(kind=FailureKind.STORAGE, message=message):
                return ActionResult.failed(ResultKind.UNEXPECTED, message)
        raise AssertionError(f"Unhandled outcome: {outcome!r}")

    def _invoke(
        self, operation: SchemaName, user: CurrentUser | None, data: ValidatedInput
    ) -> Outcome[Workout | None]:
        service = self.workout_service
        match operation:
            case SchemaName.CREATE:
                return service.create(user, data)
            case SchemaName.UPDATE:
                return service.update(user, data)
            case SchemaName.COMPLETE:
                return service.complete(user, data)
            case SchemaName.DELETE:
                return service.delete(user, data.id)
        raise AssertionError(f"Unknown operation: {operation}")
