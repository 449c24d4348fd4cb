"""Tests for combatant schemas and input validation."""

from __future__ import annotations

from typing import Any

import pytest
from pydantic import ValidationError as PydanticValidationError

from combat_tracker.core.exceptions import ValidationError
from combat_tracker.models.combatant import (
    Combatant,
    CombatantCreate,
    CombatantUpdate,
    validate_input,
)


class TestCombatantCreate:
    """Tests for the create schema."""

    def test_accepts_wire_names(self, sample_combatant_data: dict[str, Any]) -> None:
        """camelCase keys populate snake_case fields."""
        created = validate_input(CombatantCreate, sample_combatant_data)

        assert created.current_hp == 45
        assert created.max_hp == 45
        assert created.is_npc is False

    def test_accepts_python_names(self) -> None:
        """snake_case keys are accepted too."""
        created = validate_input(
            CombatantCreate,
            {"name": "Owlbear", "initiative": 9, "current_hp": 45, "is_npc": True},
        )
        assert created.is_npc is True
        assert created.max_hp is None

    @pytest.mark.parametrize("initiative", [1, 30])
    def test_initiative_bounds_inclusive(self, initiative: int) -> None:
        """Both ends of [1, 30] are valid."""
        created = validate_input(
            CombatantCreate,
            {"name": "X", "initiative": initiative, "currentHp": 1},
        )
        assert created.initiative == initiative

    @pytest.mark.parametrize(
        ("overrides", "field_name"),
        [
            ({"initiative": 31}, "initiative"),
            ({"initiative": 0}, "initiative"),
            ({"currentHp": -1}, "currentHp"),
            ({"maxHp": 0}, "maxHp"),
            ({"name": ""}, "name"),
            ({"name": "   "}, "name"),
            ({"initiative": "18"}, "initiative"),
            ({"isNpc": 1}, "isNpc"),
        ],
    )
    def test_rejects_invalid_field(
        self,
        sample_combatant_data: dict[str, Any],
        overrides: dict[str, Any],
        field_name: str,
    ) -> None:
        """The offending field is named by its wire name."""
        with pytest.raises(ValidationError) as exc_info:
            validate_input(CombatantCreate, {**sample_combatant_data, **overrides})

        assert exc_info.value.field_name == field_name

    def test_missing_name(self) -> None:
        """A missing name is reported as such."""
        with pytest.raises(ValidationError) as exc_info:
            validate_input(CombatantCreate, {"initiative": 10, "currentHp": 5})

        assert exc_info.value.field_name == "name"

    def test_name_is_stripped(self) -> None:
        """Surrounding whitespace is removed."""
        created = validate_input(CombatantCreate, {"name": "  Owlbear ", "initiative": 9, "currentHp": 1})
        assert created.name == "Owlbear"

    def test_current_hp_may_exceed_max_hp(self) -> None:
        """No clamp is applied to current HP."""
        created = validate_input(
            CombatantCreate,
            {"name": "Tank", "initiative": 5, "currentHp": 80, "maxHp": 40},
        )
        assert created.current_hp == 80

    def test_client_id_ignored(self, sample_combatant_data: dict[str, Any]) -> None:
        """Ids are assigned by the store, never by the client."""
        created = validate_input(CombatantCreate, {**sample_combatant_data, "id": 99})
        assert "id" not in created.model_dump()


class TestCombatantUpdate:
    """Tests for the partial update schema."""

    def test_only_provided_fields(self) -> None:
        """Unset fields are not part of the change set."""
        update = validate_input(CombatantUpdate, {"currentHp": 3})
        assert update.changes() == {"current_hp": 3}

    def test_max_hp_may_be_cleared(self) -> None:
        """An explicit null clears the maximum."""
        update = validate_input(CombatantUpdate, {"maxHp": None})
        assert update.changes() == {"max_hp": None}

    def test_empty_update_rejected(self) -> None:
        """At least one field is required."""
        with pytest.raises(ValidationError, match="No fields to update"):
            validate_input(CombatantUpdate, {})

    def test_null_name_rejected(self) -> None:
        """Only maxHp may be null."""
        with pytest.raises(ValidationError) as exc_info:
            validate_input(CombatantUpdate, {"name": None})

        assert exc_info.value.field_name == "name"

    def test_out_of_range_initiative(self) -> None:
        """Range checks apply to updates as well."""
        with pytest.raises(ValidationError) as exc_info:
            validate_input(CombatantUpdate, {"initiative": 31})

        assert exc_info.value.field_name == "initiative"


class TestCombatant:
    """Tests for the stored record."""

    def test_to_wire_uses_camel_case(self) -> None:
        """Serialized keys match the JSON contract."""
        combatant = Combatant(id=1, name="A", initiative=18, current_hp=10)

        assert combatant.to_wire() == {
            "id": 1,
            "name": "A",
            "initiative": 18,
            "currentHp": 10,
            "maxHp": None,
            "isNpc": False,
        }

    def test_stored_record_is_immutable(self) -> None:
        """Changes go through a store, never by assigning to a record."""
        combatant = Combatant(id=1, name="A", initiative=18, current_hp=10)

        with pytest.raises(PydanticValidationError):
            combatant.current_hp = 0

        assert combatant.current_hp == 10
