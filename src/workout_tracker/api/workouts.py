"""Workout API endpoints gated by the caller's session."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from fastapi import APIRouter, Cookie, Depends, Header, HTTPException, Request, status
from fastapi.responses import JSONResponse

from workout_tracker.domain.results import (
    ActionResult,
    Failure,
    FailureKind,
    ResultKind,
)
from workout_tracker.services.actions import FORBIDDEN_MESSAGE
from workout_tracker.services.identity import CurrentUser
from workout_tracker.services.revalidation import DASHBOARD_PATH
from workout_tracker.services.validation import SchemaName

if TYPE_CHECKING:
    from workout_tracker.containers import AppContainer

router = APIRouter(prefix="/workouts", tags=["workouts"])

_STATUS_BY_KIND = {
    ResultKind.VALIDATION_FAILED: 422,
    ResultKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ResultKind.UNEXPECTED: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def current_user(
    request: Request,
    authorization: str | None = Header(default=None),
    session_cookie: str | None = Cookie(default=None, alias="__session"),
) -> CurrentUser | None:
    """Resolve the caller from the Authorization header or session cookie."""
    container: AppContainer = request.app.state.container
    return container.identity_resolver.resolve(authorization, session_cookie)


def listing_etag(container: AppContainer) -> str:
    """Weak ETag that changes whenever the dashboard listing is revalidated."""
    return f'W/"{container.revalidator.version(DASHBOARD_PATH)}"'


@router.get("")
async def list_workouts(
    request: Request, user: CurrentUser | None = Depends(current_user)
) -> JSONResponse:
    """Return all of the caller's workouts."""
    container: AppContainer = request.app.state.container
    outcome = container.workout_service.list_all(user)
    if isinstance(outcome, Failure):
        raise _http_error(outcome)
    return JSONResponse(
        {"workouts": [workout.to_payload() for workout in outcome.value]},
        headers={"ETag": listing_etag(container)},
    )


@router.get("/{workout_id}")
async def get_workout(
    workout_id: str, request: Request, user: CurrentUser | None = Depends(current_user)
) -> dict[str, object]:
    """Return one of the caller's workouts."""
    container: AppContainer = request.app.state.container
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail=FORBIDDEN_MESSAGE
        )
    parsed_id = _parse_uuid(workout_id)
    if parsed_id is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    outcome = container.workout_service.get_by_id(user, parsed_id)
    if isinstance(outcome, Failure):
        raise _http_error(outcome)
    if outcome.value is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return {"workout": outcome.value.to_payload()}


@router.post("")
async def create_workout(
    request: Request, user: CurrentUser | None = Depends(current_user)
) -> JSONResponse:
    """Create a workout from a raw payload."""
    container: AppContainer = request.app.state.container
    payload = await _read_payload(request)
    result = container.action_dispatcher.dispatch(SchemaName.CREATE, user, payload)
    return _envelope(result, success_status=status.HTTP_201_CREATED)


@router.patch("/{workout_id}")
async def update_workout(
    workout_id: str, request: Request, user: CurrentUser | None = Depends(current_user)
) -> JSONResponse:
    """Apply a partial update to a workout."""
    container: AppContainer = request.app.state.container
    payload = _with_id(await _read_payload(request) or {}, workout_id)
    result = container.action_dispatcher.dispatch(SchemaName.UPDATE, user, payload)
    return _envelope(result)


@router.post("/{workout_id}/complete")
async def complete_workout(
    workout_id: str, request: Request, user: CurrentUser | None = Depends(current_user)
) -> JSONResponse:
    """Mark a workout completed."""
    container: AppContainer = request.app.state.container
    payload = _with_id(await _read_payload(request) or {}, workout_id)
    result = container.action_dispatcher.dispatch(SchemaName.COMPLETE, user, payload)
    return _envelope(result)


@router.delete("/{workout_id}")
async def delete_workout(
    workout_id: str, request: Request, user: CurrentUser | None = Depends(current_user)
) -> JSONResponse:
    """Delete a workout."""
    container: AppContainer = request.app.state.container
    result = container.action_dispatcher.dispatch(
        SchemaName.DELETE, user, {"id": workout_id}
    )
    return _envelope(result)


async def _read_payload(request: Request) -> object:
    try:
        return await request.json()
    except ValueError:
        return None


def _with_id(payload: object, workout_id: str) -> object:
    if isinstance(payload, dict):
        return {**payload, "id": workout_id}
    return payload


def _parse_uuid(value: str) -> UUID | None:
    try:
        return UUID(value)
    except ValueError:
        return None


def _envelope(
    result: ActionResult, success_status: int = status.HTTP_200_OK
) -> JSONResponse:
    status_code = success_status if result.success else _STATUS_BY_KIND[result.kind]
    return JSONResponse(result.to_payload(), status_code=status_code)


def _http_error(failure: Failure) -> HTTPException:
    if failure.kind in {
        FailureKind.UNAUTHENTICATED,
        FailureKind.NOT_FOUND_OR_UNAUTHORIZED,
    }:
        return HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail=FORBIDDEN_MESSAGE
        )
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=failure.message
    )
