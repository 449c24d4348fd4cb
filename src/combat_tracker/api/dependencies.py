"""Dependency providers for the HTTP API.

Objects are created once in ``create_app`` and read from ``app.state``.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from combat_tracker.engine.session import CombatSession
from combat_tracker.storage.base import TutorialStore


def get_session(request: Request) -> CombatSession:
    """Get the combat session from application state."""
    return request.app.state.session


def get_tutorial_store(request: Request) -> TutorialStore:
    """Get the tutorial content store from application state."""
    return request.app.state.stores.tutorials


SessionDep = Annotated[CombatSession, Depends(get_session)]
TutorialStoreDep = Annotated[TutorialStore, Depends(get_tutorial_store)]


__all__ = [
    "get_session",
    "get_tutorial_store",
    "SessionDep",
    "TutorialStoreDep",
]
