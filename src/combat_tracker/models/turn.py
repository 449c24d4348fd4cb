"""Pydantic V2 schema for the observable state of a turn sequence."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from combat_tracker.models.combatant import Combatant


class TurnSnapshot(BaseModel):
    """Point-in-time view of a turn sequence.

    Attributes:
        order: The turn order sequence.
        current_index: Active-turn pointer (0 when the sequence is empty).
        current: Combatant at the pointer, or None when empty.
        round: Current round number, starting at 1.
        group_by_type: Whether heroes are sorted ahead of NPCs.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    order: list[Combatant] = Field(default_factory=list)
    current_index: int = Field(default=0, ge=0)
    current: Combatant | None = None
    round: int = Field(default=1, ge=1)
    group_by_type: bool = False

    def to_wire(self) -> dict[str, Any]:
        """Serialize with camelCase keys for JSON clients."""
        return self.model_dump(by_alias=True)


__all__ = ["TurnSnapshot"]
