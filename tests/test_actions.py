"""Tests for the action dispatcher."""

from datetime import UTC, datetime
from uuid import uuid4

from workout_tracker.domain.errors import StorageError
from workout_tracker.domain.results import ResultKind
from workout_tracker.services.actions import (
    FORBIDDEN_MESSAGE,
    UNEXPECTED_MESSAGE,
    ActionDispatcher,
)
from workout_tracker.services.revalidation import DASHBOARD_PATH
from workout_tracker.services.validation import SchemaName


def _create_payload(name: str = "Cardio") -> dict[str, object]:
    return {"name": name, "startedAt": "2024-05-01T07:30:00Z"}


def test_create_returns_workout_and_revalidates(
    dispatcher, revalidator, alice
) -> None:
    result = dispatcher.dispatch(SchemaName.CREATE, alice, _create_payload())

    assert result.success
    assert result.data is not None
    assert result.data.user_id == alice.id
    assert revalidator.version(DASHBOARD_PATH) == 1
    payload = result.to_payload()
    assert payload["success"] is True
    assert payload["data"]["name"] == "Cardio"
    assert payload["data"]["userId"] == alice.id


def test_validation_failure_leaves_storage_untouched(
    dispatcher, workout_repository, revalidator, alice
) -> None:
    result = dispatcher.dispatch(
        SchemaName.CREATE, alice, {"name": "", "startedAt": "2024-05-01T07:30:00Z"}
    )

    assert not result.success
    assert result.kind == ResultKind.VALIDATION_FAILED
    assert result.error == "Validation failed"
    assert [issue.path for issue in result.issues] == ["name"]
    assert workout_repository.writes == []
    assert revalidator.version(DASHBOARD_PATH) == 0


def test_invalid_timestamp_is_reported(dispatcher, workout_repository, alice) -> None:
    result = dispatcher.dispatch(
        SchemaName.CREATE, alice, {"name": "Leg Day", "startedAt": "not-a-date"}
    )

    assert result.to_payload()["issues"] == [
        {"path": "startedAt", "message": "Invalid date"}
    ]
    assert workout_repository.writes == []


def test_unauthenticated_is_forbidden(dispatcher, workout_repository) -> None:
    result = dispatcher.dispatch(SchemaName.CREATE, None, _create_payload())

    assert result.kind == ResultKind.FORBIDDEN
    assert result.error == FORBIDDEN_MESSAGE
    assert workout_repository.writes == []


def test_foreign_and_missing_updates_look_the_same(dispatcher, alice, bob) -> None:
    created = dispatcher.dispatch(SchemaName.CREATE, alice, _create_payload())

    foreign = dispatcher.dispatch(
        SchemaName.UPDATE, bob, {"id": str(created.data.id), "name": "Mine now"}
    )
    missing = dispatcher.dispatch(
        SchemaName.UPDATE, bob, {"id": str(uuid4()), "name": "Mine now"}
    )

    assert foreign == missing
    assert foreign.kind == ResultKind.FORBIDDEN
    assert foreign.error == FORBIDDEN_MESSAGE


def test_update_applies_partial_change(dispatcher, alice) -> None:
    created = dispatcher.dispatch(SchemaName.CREATE, alice, _create_payload())

    result = dispatcher.dispatch(
        SchemaName.UPDATE, alice, {"id": str(created.data.id), "name": "Renamed"}
    )

    assert result.success
    assert result.data.name == "Renamed"
    assert result.data.started_at == datetime(2024, 5, 1, 7, 30, tzinfo=UTC)


def test_delete_returns_no_data(dispatcher, workout_repository, alice) -> None:
    created = dispatcher.dispatch(SchemaName.CREATE, alice, _create_payload())

    result = dispatcher.dispatch(SchemaName.DELETE, alice, {"id": str(created.data.id)})

    assert result.success
    assert result.to_payload() == {"success": True, "data": None}
    assert workout_repository.workouts == {}


def test_storage_failure_is_unexpected(
    dispatcher, workout_repository, revalidator, alice
) -> None:
    workout_repository.fail_with = StorageError('duplicate key "workouts_pkey"')

    result = dispatcher.dispatch(SchemaName.CREATE, alice, _create_payload())

    assert result.kind == ResultKind.UNEXPECTED
    assert result.error == "Failed to save workout"
    assert revalidator.version(DASHBOARD_PATH) == 0


def test_unhandled_errors_never_escape(dispatcher, workout_repository, alice) -> None:
    workout_repository.fail_with = RuntimeError("boom")

    result = dispatcher.dispatch(SchemaName.CREATE, alice, _create_payload())

    assert result.kind == ResultKind.UNEXPECTED
    assert result.error == UNEXPECTED_MESSAGE


def test_unknown_operation_is_unexpected(dispatcher: ActionDispatcher, alice) -> None:
    result = dispatcher.dispatch("archive", alice, {})

    assert result.kind == ResultKind.UNEXPECTED
