"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from workout_tracker.adapters.jwt_identity_resolver import JwtIdentityResolver
from workout_tracker.adapters.supabase_workout_repository import (
    SupabaseWorkoutRepository,
)
from workout_tracker.config import Settings
from workout_tracker.services.actions import ActionDispatcher
from workout_tracker.services.identity import IdentityResolver
from workout_tracker.services.revalidation import (
    InMemoryPathRevalidator,
    PathRevalidator,
)
from workout_tracker.services.workouts import WorkoutService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    identity_resolver: IdentityResolver
    workout_service: WorkoutService
    action_dispatcher: ActionDispatcher
    revalidator: PathRevalidator
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    workout_repository = SupabaseWorkoutRepository(
        supabase_client, table_name=resolved_settings.workouts_table
    )
    workout_service = WorkoutService(
        repository=workout_repository,
        timezone=resolved_settings.tzinfo,
    )
    revalidator = InMemoryPathRevalidator()
    action_dispatcher = ActionDispatcher(
        workout_service=workout_service,
        revalidator=revalidator,
    )
    identity_resolver = JwtIdentityResolver.create(resolved_settings)

    async def close_resources() -> None:
        supabase_client.postgrest.session.close()

    return AppContainer(
        settings=resolved_settings,
        identity_resolver=identity_resolver,
        workout_service=workout_service,
        action_dispatcher=action_dispatcher,
        revalidator=revalidator,
        close_resources=close_resources,
    )
