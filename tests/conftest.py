"""Pytest configuration and shared fixtures.

Store fixtures are parametrized over both backends so every store test
runs against the in-memory dicts and a throwaway SQLite file.
"""

from __future__ import annotations

from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest

from combat_tracker.models.combatant import Combatant
from combat_tracker.storage import (
    CombatantStore,
    Database,
    InMemoryCombatantStore,
    InMemoryTutorialStore,
    SqliteCombatantStore,
    SqliteTutorialStore,
    TutorialStore,
)


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from combat_tracker.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def mock_env_vars(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set up mock environment variables for testing.

    Returns:
        Dictionary of environment variables that were set.
    """
    env_vars = {
        "COMBAT_TRACKER_DEBUG": "true",
        "COMBAT_TRACKER_LOG_LEVEL": "DEBUG",
        "COMBAT_TRACKER_BACKEND": "sqlite",
        "COMBAT_TRACKER_TRACKER_GROUP_BY_TYPE": "true",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


# =============================================================================
# Store Fixtures
# =============================================================================


@pytest.fixture
def database(tmp_path: Path) -> Database:
    """A SQLite database in a temporary directory."""
    return Database(tmp_path / "tracker.db")


@pytest.fixture(params=["memory", "sqlite"])
def combatant_store(request: pytest.FixtureRequest, tmp_path: Path) -> CombatantStore:
    """An empty combatant store for each backend."""
    if request.param == "memory":
        return InMemoryCombatantStore()
    return SqliteCombatantStore(Database(tmp_path / "tracker.db"))


@pytest.fixture(params=["memory", "sqlite"])
def tutorial_store(request: pytest.FixtureRequest, tmp_path: Path) -> TutorialStore:
    """An empty tutorial store for each backend."""
    if request.param == "memory":
        return InMemoryTutorialStore()
    return SqliteTutorialStore(Database(tmp_path / "tracker.db"))


# =============================================================================
# Model Fixtures
# =============================================================================


@pytest.fixture
def sample_combatant_data() -> dict[str, Any]:
    """Wire-format fields for a valid combatant."""
    return {
        "name": "Gandrix the Wise",
        "initiative": 18,
        "currentHp": 45,
        "maxHp": 45,
        "isNpc": False,
    }


@pytest.fixture
def make_combatant() -> Callable[..., Combatant]:
    """Factory for stored-looking combatants with sequential ids."""
    counter = iter(range(1, 10_000))

    def _make(name: str, initiative: int, *, is_npc: bool = False, current_hp: int = 10) -> Combatant:
        return Combatant(
            id=next(counter),
            name=name,
            initiative=initiative,
            current_hp=current_hp,
            is_npc=is_npc,
        )

    return _make
