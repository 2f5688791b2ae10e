"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import date, datetime, tzinfo

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from workout_tracker.api.workouts import current_user, listing_etag
from workout_tracker.api.workouts import router as workouts_router
from workout_tracker.app_logging import configure_logging
from workout_tracker.containers import AppContainer
from workout_tracker.domain.results import Failure, FailureKind
from workout_tracker.services.identity import CurrentUser

SIGN_IN_NOTICE = "Please sign in to view your workouts"
LOAD_FAILED_NOTICE = "Failed to load workouts"


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        try:
            await app.state.container.close_resources()
        except Exception:
            logger.exception("Failed to close storage resources")

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(workouts_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/dashboard")
    async def dashboard(
        request: Request,
        date: str | None = None,
        user: CurrentUser | None = Depends(current_user),
    ) -> JSONResponse:
        """Return the caller's workouts for a calendar day."""
        state_container: AppContainer = request.app.state.container
        selected = _parse_day(date, state_container.settings.tzinfo)
        outcome = state_container.workout_service.list_by_date(user, selected)
        workouts: list[dict[str, object]] = []
        error: str | None = None
        if isinstance(outcome, Failure):
            if outcome.kind == FailureKind.UNAUTHENTICATED:
                error = SIGN_IN_NOTICE
            else:
                error = LOAD_FAILED_NOTICE
        else:
            workouts = [workout.to_payload() for workout in outcome.value]
        return JSONResponse(
            {"date": selected.isoformat(), "workouts": workouts, "error": error},
            headers={"ETag": listing_etag(state_container)},
        )

    return app


def _parse_day(raw: str | None, tz: tzinfo) -> date:
    """Parse a YYYY-MM-DD query value, falling back to today in ``tz``."""
    if raw:
        try:
            return date.fromisoformat(raw)
        except ValueError:
            pass
    return datetime.now(tz=tz).date()
