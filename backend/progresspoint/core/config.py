"""
Application configuration.
All deployment-specific values loaded from environment variables.
"""
from typing import List
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # Database
    DATABASE_URL: str = "postgresql+asyncpg://postgres:postgres@db:5432/progresspoint"
    DATABASE_ECHO: bool = False

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"  # json or console

    # Profile statistics
    # Single reference timezone used to truncate workout timestamps to days
    STATS_TIMEZONE: str = "UTC"

    # Workout listing
    WORKOUTS_DEFAULT_PAGE_SIZE: int = 10
    WORKOUTS_MAX_PAGE_SIZE: int = 100

    # Header carrying the user id resolved by the upstream auth gateway
    AUTH_USER_HEADER: str = "X-User-Id"

    def get_stats_timezone(self) -> ZoneInfo:
        """Get the reference timezone for day keys, UTC if the name is unknown."""
        try:
            return ZoneInfo(self.STATS_TIMEZONE)
        except (ZoneInfoNotFoundError, ValueError):
            return ZoneInfo("UTC")

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
