"""Schema validation for workout mutation payloads."""

from datetime import datetime
from enum import StrEnum
from typing import Annotated
from uuid import UUID

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)
from pydantic_core import PydanticCustomError

from workout_tracker.domain.results import (
    Failure,
    FailureKind,
    Outcome,
    Success,
    ValidationIssue,
)
from workout_tracker.domain.workouts import (
    CompleteWorkoutInput,
    CreateWorkoutInput,
    DeleteWorkoutInput,
    UpdateWorkoutInput,
)

NAME_MAX_LENGTH = 255
VALIDATION_FAILED_MESSAGE = "Validation failed"

ValidatedInput = (
    CreateWorkoutInput | UpdateWorkoutInput | CompleteWorkoutInput | DeleteWorkoutInput
)


def _reject_epoch(value: object) -> object:
    # Lax datetime parsing would read numbers as Unix timestamps.
    if isinstance(value, bool | int | float) or (
        isinstance(value, str) and _is_numeric(value)
    ):
        raise PydanticCustomError(
            "datetime_parsing", "Input should be an ISO 8601 datetime"
        )
    return value


def _reject_null(value: object) -> object:
    # Optional fields may be omitted but not sent as null.
    if value is None:
        raise PydanticCustomError("null_value", "Field may be omitted but not null")
    return value


def _is_numeric(text: str) -> bool:
    try:
        float(text)
    except ValueError:
        return False
    return True


IsoDatetime = Annotated[datetime, BeforeValidator(_reject_epoch)]


class SchemaName(StrEnum):
    """Known mutation schemas."""

    CREATE = "create"
    UPDATE = "update"
    COMPLETE = "complete"
    DELETE = "delete"


class _Payload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)


class CreateWorkoutPayload(_Payload):
    """Payload accepted when creating a workout."""

    name: str = Field(min_length=1, max_length=NAME_MAX_LENGTH)
    started_at: IsoDatetime = Field(alias="startedAt")

    def to_input(self) -> CreateWorkoutInput:
        return CreateWorkoutInput(name=self.name, started_at=self.started_at)


class UpdateWorkoutPayload(_Payload):
    """Payload accepted when updating a workout; omitted fields stay unchanged."""

    id: UUID
    name: str | None = Field(default=None, min_length=1, max_length=NAME_MAX_LENGTH)
    started_at: IsoDatetime | None = Field(default=None, alias="startedAt")

    @field_validator("name", "started_at", mode="before")
    @classmethod
    def reject_explicit_null(cls, value: object) -> object:
        return _reject_null(value)

    def to_input(self) -> UpdateWorkoutInput:
        return UpdateWorkoutInput(
            id=self.id, name=self.name, started_at=self.started_at
        )


class CompleteWorkoutPayload(_Payload):
    """Payload accepted when completing a workout."""

    id: UUID
    completed_at: IsoDatetime | None = Field(default=None, alias="completedAt")

    @field_validator("completed_at", mode="before")
    @classmethod
    def reject_explicit_null(cls, value: object) -> object:
        return _reject_null(value)

    def to_input(self) -> CompleteWorkoutInput:
        return CompleteWorkoutInput(id=self.id, completed_at=self.completed_at)


class DeleteWorkoutPayload(_Payload):
    """Payload accepted when deleting a workout."""

    id: UUID

    def to_input(self) -> DeleteWorkoutInput:
        return DeleteWorkoutInput(id=self.id)


_SCHEMAS: dict[SchemaName, type[_Payload]] = {
    SchemaName.CREATE: CreateWorkoutPayload,
    SchemaName.UPDATE: UpdateWorkoutPayload,
    SchemaName.COMPLETE: CompleteWorkoutPayload,
    SchemaName.DELETE: DeleteWorkoutPayload,
}


def validate(schema_name: SchemaName, payload: object) -> Outcome[ValidatedInput]:
    """Validate a raw payload against a named schema.

    Returns the typed input on success, or a failure listing every issue in
    the order pydantic reports them. Never touches storage or identity.
    """
    model = _SCHEMAS[SchemaName(schema_name)]
    try:
        parsed = model.model_validate(payload)
    except ValidationError as exc:
        issues = [_to_issue(error) for error in exc.errors()]
        return Failure(FailureKind.VALIDATION_FAILED, VALIDATION_FAILED_MESSAGE, issues)
    return Success(parsed.to_input())


def _to_issue(error: dict[str, object]) -> ValidationIssue:
    loc = error.get("loc") or ()
    path = ".".join(str(part) for part in loc)
    return ValidationIssue(path=path, message=_message(path, error))


def _message(path: str, error: dict[str, object]) -> str:
    error_type = str(error.get("type", ""))
    if path == "name":
        if error_type in {"missing", "string_too_short"}:
            return "Workout name is required"
        if error_type == "string_too_long":
            return f"Workout name must be less than {NAME_MAX_LENGTH} characters"
    if path == "id" and error_type.startswith("uuid"):
        return "Invalid workout ID"
    if path in {"startedAt", "completedAt"} and error_type.startswith("datetime"):
        return "Invalid date"
    return str(error.get("msg", "Invalid value"))
