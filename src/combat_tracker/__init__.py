"""Combat Tracker - initiative and hit point tracking for tabletop combat.

A game master adds combatants, steps through turns in initiative order and
edits hit points as the fight goes on.

Example:
    >>> from combat_tracker import CombatSession, InMemoryCombatantStore
    >>> session = CombatSession(InMemoryCombatantStore())
    >>> a = session.add({"name": "A", "initiative": 18, "currentHp": 10})
    >>> b = session.add({"name": "B", "initiative": 22, "currentHp": 10})
    >>> [c.name for c in session.snapshot().order]
    ['B', 'A']
    >>> session.next_turn().current.name
    'A'

Modules:
    core: Configuration, logging, and base exceptions.
    models: Pydantic V2 schemas for combatants, turn state and tutorial content.
    storage: Combatant and tutorial stores (in-memory and SQLite).
    engine: Turn ordering, combat sessions and demo seeding.
    api: FastAPI HTTP interface.
    ui: Streamlit interface.
"""

from __future__ import annotations

# Core
from combat_tracker.core.config import Settings, get_settings
from combat_tracker.core.exceptions import (
    CombatTrackerError,
    NotFoundError,
    StorageFault,
    ValidationError,
)
from combat_tracker.core.logging import configure_logging, get_logger

# Models
from combat_tracker.models import (
    Combatant,
    CombatantCreate,
    CombatantUpdate,
    TurnSnapshot,
    TutorialStep,
)

# Storage
from combat_tracker.storage import (
    CombatantStore,
    InMemoryCombatantStore,
    SqliteCombatantStore,
    TutorialStore,
    create_stores,
)

# Engine
from combat_tracker.engine import (
    CombatSession,
    TurnSequencer,
    order_combatants,
    seed_demo_encounter,
)


__version__ = "0.1.0"
__all__ = [
    "__version__",
    # Core
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    "CombatTrackerError",
    "ValidationError",
    "NotFoundError",
    "StorageFault",
    # Models
    "Combatant",
    "CombatantCreate",
    "CombatantUpdate",
    "TurnSnapshot",
    "TutorialStep",
    # Storage
    "CombatantStore",
    "TutorialStore",
    "InMemoryCombatantStore",
    "SqliteCombatantStore",
    "create_stores",
    # Engine
    "CombatSession",
    "TurnSequencer",
    "order_combatants",
    "seed_demo_encounter",
]
