"""Pydantic V2 schemas for tutorial content.

Tutorial steps are versioned records with a free-form JSON body. They
have no interaction with combat ordering.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from combat_tracker.core.exceptions import ValidationError


class TutorialStep(BaseModel):
    """A stored tutorial step.

    Attributes:
        id: Store-assigned identifier.
        step_id: Position of the step within the tutorial.
        title: Step heading.
        description: Short subtitle.
        content: Free-form JSON body rendered by the client.
        version: Starts at 1, incremented on every update.
        updated_at: Time of the last write.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    step_id: int = Field(ge=0)
    title: str = Field(min_length=1)
    description: str = ""
    content: dict[str, Any] = Field(default_factory=dict)
    version: int = Field(default=1, ge=1)
    updated_at: datetime = Field(default_factory=datetime.now)

    def to_wire(self) -> dict[str, Any]:
        """Serialize with camelCase keys for JSON clients."""
        return self.model_dump(by_alias=True, mode="json")


class TutorialStepCreate(BaseModel):
    """Fields accepted when storing a tutorial step."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        strict=True,
        extra="ignore",
    )

    step_id: int = Field(ge=0)
    title: str = Field(min_length=1)
    description: str = ""
    content: dict[str, Any] = Field(default_factory=dict)


class TutorialStepUpdate(BaseModel):
    """A partial change to a tutorial step."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        strict=True,
        extra="ignore",
    )

    step_id: int | None = Field(default=None, ge=0)
    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    content: dict[str, Any] | None = None

    @model_validator(mode="after")
    def check_fields(self) -> "TutorialStepUpdate":
        """Reject empty updates and explicit nulls."""
        if not self.model_fields_set:
            raise ValidationError("No fields to update")
        for field_name in self.model_fields_set:
            if getattr(self, field_name) is None:
                raise ValidationError(
                    f"{to_camel(field_name)} may not be null",
                    field_name=to_camel(field_name),
                )
        return self

    def changes(self) -> dict[str, Any]:
        """Return only the fields the caller provided."""
        return self.model_dump(exclude_unset=True)


# Shown when no steps have been stored
DEFAULT_TUTORIAL_STEPS: list[dict[str, Any]] = [
    {
        "stepId": 0,
        "title": "Welcome to Combat Tracker!",
        "description": "A tool for running tabletop combat.",
        "content": {
            "intro": "Combat Tracker helps you:",
            "bullets": [
                "Track initiative order",
                "Manage character HP",
                "Keep combat flowing smoothly",
            ],
        },
    },
    {
        "stepId": 1,
        "title": "Adding Characters",
        "description": "Start by adding your players and monsters to the combat.",
        "content": {
            "intro": "For each character, enter:",
            "bullets": [
                "Name: the character's name",
                "Initiative: their initiative roll (1-30)",
                "Current HP: starting hit points",
                "Max HP: optional maximum HP",
                "NPC: toggle for non-player characters",
            ],
        },
    },
    {
        "stepId": 2,
        "title": "Running Combat",
        "description": "Step through turns in initiative order.",
        "content": {
            "intro": "During combat:",
            "bullets": [
                "Next Turn advances to the next combatant, wrapping each round",
                "Group by type lists heroes ahead of NPCs",
                "Edit HP and initiative inline; the order updates immediately",
                "Reset clears every combatant and starts over",
            ],
        },
    },
]


__all__ = [
    "TutorialStep",
    "TutorialStepCreate",
    "TutorialStepUpdate",
    "DEFAULT_TUTORIAL_STEPS",
]
