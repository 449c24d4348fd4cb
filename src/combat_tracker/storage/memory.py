"""In-memory store backends.

State lives for the life of the process. Ids come from a monotonic
counter and are never reused, even after ``delete_all``.
"""

from __future__ import annotations

from datetime import datetime
from itertools import count
from typing import Any

from combat_tracker.core.logging import get_logger
from combat_tracker.models.combatant import Combatant, CombatantCreate
from combat_tracker.models.tutorial import TutorialStep, TutorialStepCreate
from combat_tracker.storage.base import (
    CombatantStore,
    TutorialStore,
    combatant_not_found,
    tutorial_step_not_found,
)

logger = get_logger(__name__)


class InMemoryCombatantStore(CombatantStore):
    """Combatant store backed by a dict keyed by id."""

    backend_name = "memory"

    def __init__(self) -> None:
        self._combatants: dict[int, Combatant] = {}
        self._ids = count(1)

    def list_all(self) -> list[Combatant]:
        return list(self._combatants.values())

    def get(self, combatant_id: int) -> Combatant:
        try:
            return self._combatants[combatant_id]
        except KeyError:
            raise combatant_not_found(combatant_id) from None

    def _insert(self, fields: CombatantCreate) -> Combatant:
        combatant = Combatant(id=next(self._ids), **fields.model_dump())
        self._combatants[combatant.id] = combatant
        return combatant

    def _apply(self, combatant_id: int, changes: dict[str, Any]) -> Combatant:
        current = self.get(combatant_id)
        updated = Combatant.model_validate({**current.model_dump(), **changes})
        self._combatants[combatant_id] = updated
        return updated

    def delete_one(self, combatant_id: int) -> None:
        if self._combatants.pop(combatant_id, None) is None:
            raise combatant_not_found(combatant_id)
        logger.info("Combatant deleted", combatant_id=combatant_id, backend=self.backend_name)

    def delete_all(self) -> None:
        removed = len(self._combatants)
        self._combatants.clear()
        logger.info("All combatants deleted", removed=removed, backend=self.backend_name)


class InMemoryTutorialStore(TutorialStore):
    """Tutorial store backed by a dict keyed by id."""

    backend_name = "memory"

    def __init__(self) -> None:
        self._steps: dict[int, TutorialStep] = {}
        self._ids = count(1)

    def list_all(self) -> list[TutorialStep]:
        return sorted(self._steps.values(), key=lambda s: (s.step_id, s.id))

    def get(self, record_id: int) -> TutorialStep:
        try:
            return self._steps[record_id]
        except KeyError:
            raise tutorial_step_not_found(record_id) from None

    def _insert(self, fields: TutorialStepCreate) -> TutorialStep:
        step = TutorialStep(id=next(self._ids), **fields.model_dump())
        self._steps[step.id] = step
        return step

    def _apply(self, record_id: int, changes: dict[str, Any]) -> TutorialStep:
        current = self.get(record_id)
        updated = TutorialStep.model_validate(
            {
                **current.model_dump(),
                **changes,
                "version": current.version + 1,
                "updated_at": datetime.now(),
            }
        )
        self._steps[record_id] = updated
        return updated

    def delete(self, record_id: int) -> None:
        if self._steps.pop(record_id, None) is None:
            raise tutorial_step_not_found(record_id)
        logger.info("Tutorial step deleted", record_id=record_id)


__all__ = [
    "InMemoryCombatantStore",
    "InMemoryTutorialStore",
]
