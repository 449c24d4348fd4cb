"""Engine module: turn ordering, combat sessions and demo seeding.

Example:
    >>> from combat_tracker.engine import CombatSession
    >>> from combat_tracker.storage import InMemoryCombatantStore
    >>> session = CombatSession(InMemoryCombatantStore())
    >>> owlbear = session.add({"name": "Owlbear", "initiative": 9, "currentHp": 59, "isNpc": True})
    >>> session.next_turn().current.name
    'Owlbear'
"""

from __future__ import annotations

from combat_tracker.engine.seed import DEMO_ENCOUNTER, SeedSummary, seed_demo_encounter
from combat_tracker.engine.session import CombatSession
from combat_tracker.engine.turn_sequencer import (
    TurnSequencer,
    order_combatants,
    turn_order_key,
)


__all__ = [
    "TurnSequencer",
    "order_combatants",
    "turn_order_key",
    "CombatSession",
    "DEMO_ENCOUNTER",
    "SeedSummary",
    "seed_demo_encounter",
]
