"""Streamlit user interface for the Combat Tracker.

Usage:
    Run the application with:
        streamlit run src/combat_tracker/ui/app.py

    Or:
        combat-tracker-ui
"""

from __future__ import annotations


def run_app() -> None:
    """Run the Streamlit application.

    Note: This launches a subprocess running streamlit.
    """
    import subprocess
    import sys
    from pathlib import Path

    app_path = Path(__file__).parent / "app.py"
    subprocess.run([sys.executable, "-m", "streamlit", "run", str(app_path)], check=False)


__all__ = [
    "run_app",
]
