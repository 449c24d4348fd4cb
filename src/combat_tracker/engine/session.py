"""Combat session: a store paired with a turn sequencer.

The session holds the grouping flag and active-turn pointer server-side.
Every mutation goes to the store first; the session then re-reads the
authoritative combatant list and refreshes the sequencer, so the held
order never drifts from the store. A failed write propagates and leaves
the sequencer untouched. Every public method holds the session lock.
"""

from __future__ import annotations

import threading
from collections.abc import Mapping
from typing import Any

from combat_tracker.core.logging import get_logger
from combat_tracker.engine.seed import SeedSummary, seed_demo_encounter
from combat_tracker.engine.turn_sequencer import TurnSequencer
from combat_tracker.models.combatant import Combatant
from combat_tracker.models.turn import TurnSnapshot
from combat_tracker.storage.base import CombatantStore

logger = get_logger(__name__)


class CombatSession:
    """Mutate combatants and step through turns against one store."""

    def __init__(self, store: CombatantStore, *, group_by_type: bool = False) -> None:
        """Initialize the session from the store's current contents.

        Args:
            store: The combatant store to read and write.
            group_by_type: Initial grouping mode.
        """
        self.store = store
        # Routes run in a threadpool; one request at a time touches the sequencer
        self._lock = threading.RLock()
        self.sequencer = TurnSequencer(store.list_all(), group_by_type=group_by_type)
        logger.info("CombatSession initialized", combatants=len(self.sequencer))

    def sync(self) -> TurnSnapshot:
        """Re-read the store and refresh the turn order."""
        with self._lock:
            self.sequencer.refresh(self.store.list_all())
            return self.sequencer.snapshot()

    def snapshot(self) -> TurnSnapshot:
        """Current turn state, re-synced with the store."""
        return self.sync()

    # -------------------------------------------------------------------------
    # Roster mutations
    # -------------------------------------------------------------------------

    def add(self, fields: Mapping[str, Any]) -> Combatant:
        """Create a combatant and recompute the order."""
        with self._lock:
            combatant = self.store.create(fields)
            self.sync()
            return combatant

    def update(self, combatant_id: int, changes: Mapping[str, Any]) -> Combatant:
        """Apply a partial update and recompute the order."""
        with self._lock:
            combatant = self.store.update(combatant_id, changes)
            self.sync()
            return combatant

    def replace(self, combatant_id: int, fields: Mapping[str, Any]) -> Combatant:
        """Replace a combatant's fields and recompute the order."""
        with self._lock:
            combatant = self.store.replace(combatant_id, fields)
            self.sync()
            return combatant

    def set_hp(self, combatant_id: int, current_hp: int) -> Combatant:
        """Set current HP. Order is unaffected but the view is refreshed."""
        with self._lock:
            combatant = self.store.update_hp(combatant_id, current_hp)
            self.sync()
            return combatant

    def set_initiative(self, combatant_id: int, initiative: int) -> Combatant:
        """Set initiative and re-sort."""
        with self._lock:
            combatant = self.store.update_initiative(combatant_id, initiative)
            self.sync()
            return combatant

    def remove(self, combatant_id: int) -> None:
        """Delete one combatant; the pointer is clamped to the shorter order."""
        with self._lock:
            self.store.delete_one(combatant_id)
            self.sync()

    def seed(self, encounter: list[dict[str, Any]] | None = None) -> SeedSummary:
        """Replace the roster with the demo encounter.

        Seeding empties the store first, so the pointer returns to 0 as
        with a reset.
        """
        with self._lock:
            summary = seed_demo_encounter(self.store, encounter)
            self.sequencer.reset()
            self.sync()
            return summary

    def reset(self) -> TurnSnapshot:
        """Delete every combatant and return the pointer to 0."""
        with self._lock:
            self.store.delete_all()
            self.sequencer.reset()
            logger.info("Combat reset")
            return self.sequencer.snapshot()

    # -------------------------------------------------------------------------
    # Turn control
    # -------------------------------------------------------------------------

    def set_group_by_type(self, group_by_type: bool) -> TurnSnapshot:
        """Toggle grouping mode."""
        with self._lock:
            self.sync()
            self.sequencer.set_group_by_type(group_by_type)
            return self.sequencer.snapshot()

    def next_turn(self) -> TurnSnapshot:
        """Advance to the next combatant."""
        with self._lock:
            self.sync()
            self.sequencer.next_turn()
            return self.sequencer.snapshot()

    def previous_turn(self) -> TurnSnapshot:
        """Step back to the previous combatant."""
        with self._lock:
            self.sync()
            self.sequencer.previous_turn()
            return self.sequencer.snapshot()

    def jump_to(self, combatant_id: int) -> TurnSnapshot:
        """Make a specific combatant active; unknown ids are ignored."""
        with self._lock:
            self.sync()
            self.sequencer.jump_to(combatant_id)
            return self.sequencer.snapshot()


__all__ = ["CombatSession"]
