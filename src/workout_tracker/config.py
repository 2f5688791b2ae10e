"""Application configuration."""

import os
from zoneinfo import ZoneInfo

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    workouts_table: str = "workouts"
    timezone: str = "UTC"
    log_level: str = "INFO"
    clerk_jwks_url: str | None = None
    clerk_issuer: str | None = None
    session_jwt_secret: str | None = None
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def tzinfo(self) -> ZoneInfo:
        """Time zone used for calendar-day boundaries."""
        return ZoneInfo(self.timezone)
