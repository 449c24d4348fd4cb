"""HTTP API for the Combat Tracker.

Usage:
    combat-tracker-api

    Or programmatically:
        from combat_tracker.api import create_app
        app = create_app()
"""

from __future__ import annotations

from combat_tracker.api.app import create_app, run


__all__ = [
    "create_app",
    "run",
]
