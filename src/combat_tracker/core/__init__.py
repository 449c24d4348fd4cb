"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        CombatTrackerError: Base exception for all application errors.
        ConfigurationError: Configuration-related errors.
        ValidationError: Rejected create/update input.
        NotFoundError: Operation addressed a nonexistent record.
        StorageFault: Persistence layer failure.

    Configuration:
        Settings: Main application settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        clear_context: Clear logging context.
"""

from __future__ import annotations

from combat_tracker.core.config import (
    ApiSettings,
    Settings,
    StorageSettings,
    TrackerSettings,
    UISettings,
    clear_settings_cache,
    get_settings,
)
from combat_tracker.core.exceptions import (
    CombatTrackerError,
    ConfigurationError,
    NotFoundError,
    StorageFault,
    ValidationError,
)
from combat_tracker.core.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)


__all__ = [
    # Exceptions
    "CombatTrackerError",
    "ConfigurationError",
    "ValidationError",
    "NotFoundError",
    "StorageFault",
    # Configuration
    "Settings",
    "StorageSettings",
    "TrackerSettings",
    "ApiSettings",
    "UISettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
]
