"""Configuration management for the Combat Tracker.

Centralized configuration using pydantic-settings, supporting environment
variables, .env files, and runtime overrides.

Example:
    >>> from combat_tracker.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.storage.backend
    'memory'

Environment Variables:
    COMBAT_TRACKER_BACKEND: Combatant store backend ('memory' or 'sqlite')
    COMBAT_TRACKER_DATABASE_PATH: Path to the SQLite database file
    COMBAT_TRACKER_TRACKER_GROUP_BY_TYPE: Start sessions with grouping enabled
    COMBAT_TRACKER_API_PORT: Port the HTTP API listens on
    COMBAT_TRACKER_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from combat_tracker.core.constants import DEFAULT_DATABASE_PATH
from combat_tracker.core.exceptions import ConfigurationError


class StorageSettings(BaseSettings):
    """Configuration for the persistence backend.

    Attributes:
        backend: Which store implementation to use.
        database_path: Path to the SQLite database file (sqlite backend only).
    """

    model_config = SettingsConfigDict(
        env_prefix="COMBAT_TRACKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    backend: Literal["memory", "sqlite"] = Field(
        default="memory",
        description="Combatant and tutorial store backend",
    )
    database_path: Path = Field(
        default=Path(DEFAULT_DATABASE_PATH),
        description="Path to SQLite database",
    )


class TrackerSettings(BaseSettings):
    """Configuration for turn tracking behavior.

    Attributes:
        group_by_type: Initial grouping mode for new sessions.
        seed_on_startup: Load the demo encounter when the API starts.
    """

    model_config = SettingsConfigDict(
        env_prefix="COMBAT_TRACKER_TRACKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    group_by_type: bool = Field(
        default=False,
        description="Sort heroes ahead of NPCs before initiative",
    )
    seed_on_startup: bool = Field(
        default=False,
        description="Seed the demo encounter on API startup",
    )


class ApiSettings(BaseSettings):
    """Configuration for the HTTP API.

    Attributes:
        host: Interface to bind.
        port: Port to listen on.
        cors_origins: Origins allowed by the CORS middleware.
    """

    model_config = SettingsConfigDict(
        env_prefix="COMBAT_TRACKER_API_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="127.0.0.1", description="Bind address")
    port: int = Field(default=8000, ge=1, le=65535, description="Listen port")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        description="Allowed CORS origins",
    )

    @field_validator("cors_origins", mode="after")
    @classmethod
    def ensure_origins(cls, value: list[str]) -> list[str]:
        """Reject an empty origin list.

        Raises:
            ConfigurationError: If no origins are configured.
        """
        if not value:
            raise ConfigurationError(
                "At least one CORS origin must be configured",
                config_key="cors_origins",
            )
        return value


class UISettings(BaseSettings):
    """Configuration for the Streamlit UI."""

    model_config = SettingsConfigDict(
        env_prefix="COMBAT_TRACKER_UI_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    page_title: str = Field(
        default="Combat Tracker",
        description="Browser page title",
    )


class Settings(BaseSettings):
    """Main application settings aggregating all configuration domains.

    Attributes:
        app_name: Application name.
        app_version: Application version string.
        debug: Enable debug mode.
        log_level: Application logging level.
        json_logs: Render logs as JSON instead of console output.
        storage: Persistence settings.
        tracker: Turn tracking settings.
        api: HTTP API settings.
        ui: UI settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="COMBAT_TRACKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(default="Combat Tracker", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    json_logs: bool = Field(default=False, description="Emit JSON logs")

    storage: StorageSettings = Field(default_factory=StorageSettings)
    tracker: TrackerSettings = Field(default_factory=TrackerSettings)
    api: ApiSettings = Field(default_factory=ApiSettings)
    ui: UISettings = Field(default_factory=UISettings)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If required configuration is missing or invalid.
    """
    try:
        return Settings()
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access."""
    get_settings.cache_clear()


__all__ = [
    "StorageSettings",
    "TrackerSettings",
    "ApiSettings",
    "UISettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
