"""Store interfaces shared by every persistence backend.

Backends implement a small set of primitives; validation and the
convenience updates live here so both backends reject exactly the same
input. Updates are last-write-wins with single-record atomicity.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from combat_tracker.core.constants import MUTABLE_COMBATANT_FIELDS
from combat_tracker.core.exceptions import NotFoundError, ValidationError
from combat_tracker.core.logging import get_logger
from combat_tracker.models.combatant import (
    Combatant,
    CombatantCreate,
    CombatantUpdate,
    validate_input,
)
from combat_tracker.models.tutorial import (
    TutorialStep,
    TutorialStepCreate,
    TutorialStepUpdate,
)

logger = get_logger(__name__)


def combatant_not_found(combatant_id: int) -> NotFoundError:
    """Build the error raised for a missing combatant id."""
    return NotFoundError(
        "Combatant not found",
        resource="combatant",
        resource_id=combatant_id,
    )


def tutorial_step_not_found(step_id: int) -> NotFoundError:
    """Build the error raised for a missing tutorial record id."""
    return NotFoundError(
        "Tutorial content not found",
        resource="tutorial_step",
        resource_id=step_id,
    )


# =============================================================================
# Combatant Store
# =============================================================================


class CombatantStore(ABC):
    """Durable mapping from combatant id to Combatant record.

    ``list_all`` returns raw (id) order; ordering for turns is imposed by
    the turn sequencer.
    """

    backend_name: str = "abstract"

    @abstractmethod
    def list_all(self) -> list[Combatant]:
        """Return every combatant in raw order."""

    @abstractmethod
    def get(self, combatant_id: int) -> Combatant:
        """Return one combatant.

        Raises:
            NotFoundError: If the id is absent.
        """

    @abstractmethod
    def _insert(self, fields: CombatantCreate) -> Combatant:
        """Persist validated fields under a fresh id."""

    @abstractmethod
    def _apply(self, combatant_id: int, changes: dict[str, Any]) -> Combatant:
        """Persist validated changes to one record.

        Raises:
            NotFoundError: If the id is absent.
        """

    @abstractmethod
    def delete_one(self, combatant_id: int) -> None:
        """Delete one combatant.

        Raises:
            NotFoundError: If the id is absent.
        """

    @abstractmethod
    def delete_all(self) -> None:
        """Remove every combatant. Always succeeds."""

    def create(self, fields: Mapping[str, Any] | CombatantCreate) -> Combatant:
        """Validate and add a combatant.

        Args:
            fields: ``name``, ``initiative``, ``currentHp`` and optionally
                ``maxHp`` and ``isNpc`` (wire or Python names).

        Returns:
            The stored combatant with its assigned id.

        Raises:
            ValidationError: If any field is missing or out of range.
        """
        validated = validate_input(CombatantCreate, fields)
        combatant = self._insert(validated)
        logger.info(
            "Combatant created",
            combatant_id=combatant.id,
            name=combatant.name,
            initiative=combatant.initiative,
            backend=self.backend_name,
        )
        return combatant

    def update(
        self,
        combatant_id: int,
        changes: Mapping[str, Any] | CombatantUpdate,
    ) -> Combatant:
        """Apply a partial update.

        Input is validated before the record is looked up, so a bad value
        on a missing id reports the validation failure.

        Raises:
            ValidationError: If the change set is empty or invalid.
            NotFoundError: If the id is absent.
        """
        validated = validate_input(CombatantUpdate, changes)
        combatant = self._apply(combatant_id, validated.changes())
        logger.info(
            "Combatant updated",
            combatant_id=combatant_id,
            fields=sorted(validated.model_fields_set),
        )
        return combatant

    def update_field(self, combatant_id: int, field: str, value: Any) -> Combatant:
        """Update a single field by wire or Python name.

        Raises:
            ValidationError: If the field is unknown or the value invalid.
            NotFoundError: If the id is absent.
        """
        python_name = _FIELD_ALIASES.get(field, field)
        if python_name not in MUTABLE_COMBATANT_FIELDS:
            raise ValidationError(
                f"Unknown combatant field: {field}",
                field_name=field,
            )
        return self.update(combatant_id, {python_name: value})

    def update_hp(self, combatant_id: int, current_hp: int) -> Combatant:
        """Set current hit points."""
        return self.update_field(combatant_id, "current_hp", current_hp)

    def update_initiative(self, combatant_id: int, initiative: int) -> Combatant:
        """Set initiative."""
        return self.update_field(combatant_id, "initiative", initiative)

    def replace(
        self,
        combatant_id: int,
        fields: Mapping[str, Any] | CombatantCreate,
    ) -> Combatant:
        """Replace every mutable field (full-record edit).

        Omitted optional fields fall back to their defaults, so a missing
        ``maxHp`` clears it.

        Raises:
            ValidationError: If the record is incomplete or invalid.
            NotFoundError: If the id is absent.
        """
        validated = validate_input(CombatantCreate, fields)
        combatant = self._apply(combatant_id, validated.model_dump())
        logger.info("Combatant replaced", combatant_id=combatant_id)
        return combatant


_FIELD_ALIASES = {
    "currentHp": "current_hp",
    "maxHp": "max_hp",
    "isNpc": "is_npc",
}


# =============================================================================
# Tutorial Store
# =============================================================================


class TutorialStore(ABC):
    """Flat key-value store for tutorial steps, independent of combat."""

    backend_name: str = "abstract"

    @abstractmethod
    def list_all(self) -> list[TutorialStep]:
        """Return every stored step ordered by step_id, then id."""

    @abstractmethod
    def get(self, record_id: int) -> TutorialStep:
        """Return one step.

        Raises:
            NotFoundError: If the id is absent.
        """

    @abstractmethod
    def _insert(self, fields: TutorialStepCreate) -> TutorialStep:
        """Persist a validated step under a fresh id."""

    @abstractmethod
    def _apply(self, record_id: int, changes: dict[str, Any]) -> TutorialStep:
        """Persist changes and bump the version.

        Raises:
            NotFoundError: If the id is absent.
        """

    @abstractmethod
    def delete(self, record_id: int) -> None:
        """Delete one step.

        Raises:
            NotFoundError: If the id is absent.
        """

    def create(self, fields: Mapping[str, Any] | TutorialStepCreate) -> TutorialStep:
        """Validate and store a tutorial step."""
        step = self._insert(validate_input(TutorialStepCreate, fields))
        logger.info("Tutorial step created", record_id=step.id, step_id=step.step_id)
        return step

    def update(
        self,
        record_id: int,
        changes: Mapping[str, Any] | TutorialStepUpdate,
    ) -> TutorialStep:
        """Apply a partial update and bump the version."""
        validated = validate_input(TutorialStepUpdate, changes)
        step = self._apply(record_id, validated.changes())
        logger.info("Tutorial step updated", record_id=record_id, version=step.version)
        return step


__all__ = [
    "CombatantStore",
    "TutorialStore",
    "combatant_not_found",
    "tutorial_step_not_found",
]
