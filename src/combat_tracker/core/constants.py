"""Application-wide constants for the Combat Tracker."""

from __future__ import annotations

# =============================================================================
# Combatant Constraints
# =============================================================================

MIN_INITIATIVE = 1
"""Lowest accepted initiative (a natural 1 with no modifier)."""

MAX_INITIATIVE = 30
"""Highest accepted initiative (a d20 roll plus generous modifiers)."""

MIN_CURRENT_HP = 0
"""Current HP may drop to zero but never below."""

MIN_MAX_HP = 1
"""Maximum HP, when given, is at least one."""

MAX_NAME_LENGTH = 100
"""Longest accepted combatant display name."""

# Fields a partial update may touch
MUTABLE_COMBATANT_FIELDS = ("name", "initiative", "current_hp", "max_hp", "is_npc")

# =============================================================================
# Storage
# =============================================================================

DEFAULT_DATABASE_PATH = "data/combat_tracker.db"
"""Default SQLite file, relative to the working directory."""

SCHEMA_VERSION = 1
"""Current SQLite schema version."""


__all__ = [
    "MIN_INITIATIVE",
    "MAX_INITIATIVE",
    "MIN_CURRENT_HP",
    "MIN_MAX_HP",
    "MAX_NAME_LENGTH",
    "MUTABLE_COMBATANT_FIELDS",
    "DEFAULT_DATABASE_PATH",
    "SCHEMA_VERSION",
]
