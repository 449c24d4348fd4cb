"""Storage module for Combat Tracker persistence.

Two interchangeable backends, selected by ``StorageSettings.backend``:
- memory: process-lifetime dicts
- sqlite: a SQLite file at ``StorageSettings.database_path``
"""

from __future__ import annotations

from dataclasses import dataclass

from combat_tracker.core.config import StorageSettings, get_settings
from combat_tracker.core.exceptions import ConfigurationError
from combat_tracker.core.logging import get_logger
from combat_tracker.storage.base import CombatantStore, TutorialStore
from combat_tracker.storage.database import (
    Database,
    SqliteCombatantStore,
    SqliteTutorialStore,
)
from combat_tracker.storage.memory import InMemoryCombatantStore, InMemoryTutorialStore

logger = get_logger(__name__)


@dataclass(frozen=True)
class Stores:
    """The pair of stores an application instance works against."""

    combatants: CombatantStore
    tutorials: TutorialStore


def create_stores(settings: StorageSettings | None = None) -> Stores:
    """Build the stores for the configured backend.

    Args:
        settings: Storage settings. Defaults to the application settings.

    Returns:
        A Stores bundle sharing one backend.

    Raises:
        ConfigurationError: If the backend name is not recognised.
    """
    settings = settings or get_settings().storage

    if settings.backend == "memory":
        stores = Stores(InMemoryCombatantStore(), InMemoryTutorialStore())
    elif settings.backend == "sqlite":
        database = Database(settings.database_path)
        stores = Stores(SqliteCombatantStore(database), SqliteTutorialStore(database))
    else:
        raise ConfigurationError(
            f"Unknown storage backend: {settings.backend}",
            config_key="backend",
        )

    logger.info("Stores created", backend=settings.backend)
    return stores


__all__ = [
    "CombatantStore",
    "TutorialStore",
    "Database",
    "InMemoryCombatantStore",
    "InMemoryTutorialStore",
    "SqliteCombatantStore",
    "SqliteTutorialStore",
    "Stores",
    "create_stores",
]
