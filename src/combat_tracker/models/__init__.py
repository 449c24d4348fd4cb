"""Pydantic V2 schemas for combatants, tutorial content and turn state."""

from __future__ import annotations

from combat_tracker.models.combatant import (
    Combatant,
    CombatantCreate,
    CombatantUpdate,
    validate_input,
)
from combat_tracker.models.turn import TurnSnapshot
from combat_tracker.models.tutorial import (
    DEFAULT_TUTORIAL_STEPS,
    TutorialStep,
    TutorialStepCreate,
    TutorialStepUpdate,
)


__all__ = [
    # Combatants
    "Combatant",
    "CombatantCreate",
    "CombatantUpdate",
    "validate_input",
    # Turn state
    "TurnSnapshot",
    # Tutorial
    "TutorialStep",
    "TutorialStepCreate",
    "TutorialStepUpdate",
    "DEFAULT_TUTORIAL_STEPS",
]
