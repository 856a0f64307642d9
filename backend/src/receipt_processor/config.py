"""
Application configuration loaded from environment variables.

All configuration is validated at startup to fail fast on misconfiguration.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings with validation.

    All settings are loaded from environment variables with the same name.
    Use .env file for local development.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Store
    store_backend: Literal["memory", "database"] = Field(
        default="memory",
        description="Where scored receipts are kept: in-process or SQL database"
    )
    database_url: str = Field(
        default="sqlite+aiosqlite:///:memory:",
        description="SQLAlchemy async connection string, used when store_backend=database"
    )

    # Scoring
    per_item_receipt_bonuses: bool = Field(
        default=False,
        description="Apply odd-day and afternoon bonuses once per item (legacy totals)"
    )
    strict_calendar: bool = Field(
        default=False,
        description="Reject syntactically valid but impossible dates and times"
    )

    # Server
    debug: bool = Field(
        default=False,
        description="Enable debug mode with /db dump and detailed error messages"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Root logging level"
    )

    @property
    def uses_sqlite(self) -> bool:
        """True if the database URL points at SQLite."""
        return self.database_url.startswith("sqlite")


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Settings are loaded once at startup and cached for subsequent calls.
    This ensures consistent configuration across the application lifecycle.
    """
    return Settings()
