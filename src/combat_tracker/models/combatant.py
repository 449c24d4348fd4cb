"""Pydantic V2 schemas for combatants.

Field names are snake_case in Python and camelCase on the wire
(``currentHp``, ``maxHp``, ``isNpc``), matching the JSON the web client
exchanges with the API.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from combat_tracker.core.constants import (
    MAX_INITIATIVE,
    MAX_NAME_LENGTH,
    MIN_CURRENT_HP,
    MIN_INITIATIVE,
    MIN_MAX_HP,
)
from combat_tracker.core.exceptions import ValidationError


ModelT = TypeVar("ModelT", bound=BaseModel)

Name = Annotated[str, Field(min_length=1, max_length=MAX_NAME_LENGTH, description="Display name")]
InitiativeValue = Annotated[
    int, Field(ge=MIN_INITIATIVE, le=MAX_INITIATIVE, description="Initiative (1-30)")
]
CurrentHp = Annotated[int, Field(ge=MIN_CURRENT_HP, description="Current HP")]
MaxHp = Annotated[int, Field(ge=MIN_MAX_HP, description="Maximum HP")]


def _strip_name(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    if not stripped:
        raise ValueError("name must not be blank")
    return stripped


class Combatant(BaseModel):
    """A participant in tracked combat, as held by a store.

    ``current_hp`` is deliberately not capped by ``max_hp``.

    Attributes:
        id: Store-assigned identifier, stable for the combatant's lifetime.
        name: Display name.
        initiative: Initiative value in [1, 30].
        current_hp: Current hit points (>= 0).
        max_hp: Optional maximum hit points (>= 1).
        is_npc: Whether this is an NPC or monster (grouping only).
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="forbid",
    )

    id: int = Field(description="Store-assigned combatant ID")
    name: Name
    initiative: InitiativeValue
    current_hp: CurrentHp
    max_hp: MaxHp | None = None
    is_npc: bool = False

    def to_wire(self) -> dict[str, Any]:
        """Serialize with camelCase keys for JSON clients."""
        return self.model_dump(by_alias=True)


class CombatantCreate(BaseModel):
    """Fields accepted when adding a combatant.

    Strict typing: ``"18"`` is not an initiative and ``1`` is not a flag.
    Unknown keys (including a client-supplied ``id``) are ignored.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        strict=True,
        extra="ignore",
    )

    name: Name
    initiative: InitiativeValue
    current_hp: CurrentHp
    max_hp: MaxHp | None = None
    is_npc: bool = False

    @field_validator("name")
    @classmethod
    def normalize_name(cls, value: str | None) -> str | None:
        """Strip surrounding whitespace and reject blank names."""
        return _strip_name(value)


class CombatantUpdate(BaseModel):
    """A partial change to an existing combatant.

    Only explicitly provided fields are applied. ``max_hp`` may be set to
    null to clear it; every other field rejects null.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        strict=True,
        extra="ignore",
    )

    name: Name | None = None
    initiative: InitiativeValue | None = None
    current_hp: CurrentHp | None = None
    max_hp: MaxHp | None = None
    is_npc: bool | None = None

    @field_validator("name")
    @classmethod
    def normalize_name(cls, value: str | None) -> str | None:
        """Strip surrounding whitespace and reject blank names."""
        return _strip_name(value)

    @model_validator(mode="after")
    def check_fields(self) -> "CombatantUpdate":
        """Reject empty updates and nulls on non-nullable fields.

        Raises:
            ValidationError: If no field is set or a required field is null.
        """
        if not self.model_fields_set:
            raise ValidationError("No fields to update")
        for field_name in self.model_fields_set:
            if field_name != "max_hp" and getattr(self, field_name) is None:
                raise ValidationError(
                    f"{to_camel(field_name)} may not be null",
                    field_name=to_camel(field_name),
                )
        return self

    def changes(self) -> dict[str, Any]:
        """Return only the fields the caller provided, by Python name."""
        return self.model_dump(exclude_unset=True)


def validate_input(model: type[ModelT], data: Mapping[str, Any] | BaseModel) -> ModelT:
    """Validate raw input against an input schema.

    Args:
        model: The schema class to validate against.
        data: A mapping of wire or Python field names, or an instance.

    Returns:
        The validated model instance.

    Raises:
        ValidationError: Naming the first offending field by its wire name.
    """
    if isinstance(data, model):
        return data
    if isinstance(data, BaseModel):
        data = data.model_dump(exclude_unset=True)
    try:
        return model.model_validate(data)
    except PydanticValidationError as exc:
        first = exc.errors()[0]
        loc = first.get("loc") or ()
        field_name = str(loc[0]) if loc else None
        invalid_value = None if first["type"] == "missing" else first.get("input")
        raise ValidationError(
            f"Invalid {field_name or 'input'}: {first['msg']}",
            field_name=field_name,
            invalid_value=invalid_value if not isinstance(invalid_value, Mapping) else None,
            details={"error_count": exc.error_count()},
        ) from exc


__all__ = [
    "Combatant",
    "CombatantCreate",
    "CombatantUpdate",
    "validate_input",
]
