"""HTTP endpoints for combatants, turn control, tutorial content and seeding.

All bodies are JSON with camelCase keys. Bodies are validated by the
stores, so the API rejects exactly what the stores reject.
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Body, Request, Response, status

from combat_tracker.api.dependencies import SessionDep, TutorialStoreDep
from combat_tracker.core.exceptions import ValidationError


JsonBody = Annotated[dict[str, Any], Body()]

characters_router = APIRouter(prefix="/api/characters", tags=["characters"])
turn_router = APIRouter(prefix="/api/turn", tags=["turn"])
tutorial_router = APIRouter(prefix="/api/tutorial", tags=["tutorial"])
system_router = APIRouter(prefix="/api", tags=["system"])


def _require(body: dict[str, Any], key: str) -> Any:
    if key not in body:
        raise ValidationError(f"{key} is required", field_name=key)
    return body[key]


# =============================================================================
# Combatants
# =============================================================================


@characters_router.get("")
def list_characters(session: SessionDep) -> list[dict[str, Any]]:
    """Return every combatant in raw store order."""
    return [c.to_wire() for c in session.store.list_all()]


@characters_router.post("", status_code=status.HTTP_201_CREATED)
def create_character(session: SessionDep, body: JsonBody) -> dict[str, Any]:
    """Add a combatant."""
    return session.add(body).to_wire()


@characters_router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def reset_characters(session: SessionDep) -> Response:
    """Remove every combatant and reset the turn pointer."""
    session.reset()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@characters_router.patch("/{combatant_id}")
def update_character(
    combatant_id: int,
    session: SessionDep,
    body: JsonBody,
) -> dict[str, Any]:
    """Apply a partial update."""
    return session.update(combatant_id, body).to_wire()


@characters_router.put("/{combatant_id}")
def replace_character(
    combatant_id: int,
    session: SessionDep,
    body: JsonBody,
) -> dict[str, Any]:
    """Replace every mutable field."""
    return session.replace(combatant_id, body).to_wire()


@characters_router.patch("/{combatant_id}/hp")
def update_character_hp(
    combatant_id: int,
    session: SessionDep,
    body: JsonBody,
) -> dict[str, Any]:
    """Set current HP."""
    return session.set_hp(combatant_id, _require(body, "currentHp")).to_wire()


@characters_router.patch("/{combatant_id}/initiative")
def update_character_initiative(
    combatant_id: int,
    session: SessionDep,
    body: JsonBody,
) -> dict[str, Any]:
    """Set initiative."""
    return session.set_initiative(combatant_id, _require(body, "initiative")).to_wire()


@characters_router.delete("/{combatant_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_character(combatant_id: int, session: SessionDep) -> Response:
    """Remove one combatant."""
    session.remove(combatant_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# =============================================================================
# Turn control
# =============================================================================


@turn_router.get("")
def get_turn(session: SessionDep) -> dict[str, Any]:
    """Return the turn order and active pointer."""
    return session.snapshot().to_wire()


@turn_router.post("/next")
def next_turn(session: SessionDep) -> dict[str, Any]:
    """Advance to the next combatant."""
    return session.next_turn().to_wire()


@turn_router.post("/previous")
def previous_turn(session: SessionDep) -> dict[str, Any]:
    """Step back to the previous combatant."""
    return session.previous_turn().to_wire()


@turn_router.post("/jump/{combatant_id}")
def jump_to(combatant_id: int, session: SessionDep) -> dict[str, Any]:
    """Make a combatant active. Unknown ids leave the pointer alone."""
    return session.jump_to(combatant_id).to_wire()


@turn_router.put("/grouping")
def set_grouping(session: SessionDep, body: JsonBody) -> dict[str, Any]:
    """Turn grouping of heroes ahead of NPCs on or off."""
    group_by_type = _require(body, "groupByType")
    if not isinstance(group_by_type, bool):
        raise ValidationError(
            "groupByType must be a boolean",
            field_name="groupByType",
            invalid_value=group_by_type,
        )
    return session.set_group_by_type(group_by_type).to_wire()


# =============================================================================
# Tutorial content
# =============================================================================


@tutorial_router.get("")
def list_tutorial(store: TutorialStoreDep) -> list[dict[str, Any]]:
    """Return stored tutorial steps in step order."""
    return [step.to_wire() for step in store.list_all()]


@tutorial_router.post("", status_code=status.HTTP_201_CREATED)
def create_tutorial(store: TutorialStoreDep, body: JsonBody) -> dict[str, Any]:
    """Store a tutorial step."""
    return store.create(body).to_wire()


@tutorial_router.patch("/{record_id}")
def update_tutorial(
    record_id: int,
    store: TutorialStoreDep,
    body: JsonBody,
) -> dict[str, Any]:
    """Apply a partial update to a tutorial step."""
    return store.update(record_id, body).to_wire()


@tutorial_router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_tutorial(record_id: int, store: TutorialStoreDep) -> Response:
    """Delete a tutorial step."""
    store.delete(record_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# =============================================================================
# System
# =============================================================================


@system_router.post("/seed")
def seed(session: SessionDep) -> dict[str, Any]:
    """Replace the roster with the demo encounter."""
    summary = session.seed()
    return {
        "success": True,
        "message": "Database seeded successfully!",
        "stats": summary.to_wire(),
    }


@system_router.get("/health")
def health(request: Request, session: SessionDep) -> dict[str, Any]:
    """Report liveness and the active backend."""
    settings = request.app.state.settings
    return {
        "status": "ok",
        "version": settings.app_version,
        "backend": session.store.backend_name,
    }


__all__ = [
    "characters_router",
    "turn_router",
    "tutorial_router",
    "system_router",
]
