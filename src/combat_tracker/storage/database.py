"""SQLite persistence layer for the Combat Tracker.

Provides persistent storage for:
- Combatants (the combat roster)
- Tutorial content (versioned help steps with a JSON body)

Default location: data/combat_tracker.db (see StorageSettings).
"""

from __future__ import annotations

import json
import sqlite3
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any, Generator

from combat_tracker.core.constants import DEFAULT_DATABASE_PATH, SCHEMA_VERSION
from combat_tracker.core.exceptions import StorageFault
from combat_tracker.core.logging import get_logger
from combat_tracker.models.combatant import Combatant, CombatantCreate
from combat_tracker.models.tutorial import TutorialStep, TutorialStepCreate
from combat_tracker.storage.base import (
    CombatantStore,
    TutorialStore,
    combatant_not_found,
    tutorial_step_not_found,
)

logger = get_logger(__name__)


_COMBATANT_COLUMNS = "id, name, initiative, current_hp, max_hp, is_npc"
_TUTORIAL_COLUMNS = "id, step_id, title, description, content_json, version, updated_at"


def combatant_from_row(row: tuple[Any, ...]) -> Combatant:
    """Create a Combatant from a database row."""
    return Combatant(
        id=row[0],
        name=row[1],
        initiative=row[2],
        current_hp=row[3],
        max_hp=row[4],
        is_npc=bool(row[5]),
    )


def tutorial_step_from_row(row: tuple[Any, ...]) -> TutorialStep:
    """Create a TutorialStep from a database row."""
    return TutorialStep(
        id=row[0],
        step_id=row[1],
        title=row[2],
        description=row[3],
        content=json.loads(row[4]),
        version=row[5],
        updated_at=datetime.fromisoformat(row[6]),
    )


# =============================================================================
# Database Class
# =============================================================================


class Database:
    """SQLite database shared by the combatant and tutorial stores.

    Every operation opens its own connection, commits on success and rolls
    back on failure, so a failed write never leaves partial state behind.
    """

    def __init__(self, db_path: str | Path | None = None) -> None:
        """Initialize database.

        Args:
            db_path: Path to database file. If None, uses the default location.
        """
        self.db_path = Path(db_path) if db_path is not None else Path(DEFAULT_DATABASE_PATH)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_schema()
        logger.info(f"Database initialized at {self.db_path}")

    @contextmanager
    def connection(self, operation: str) -> Generator[sqlite3.Connection, None, None]:
        """Get a database connection with proper cleanup.

        Args:
            operation: Name of the calling operation, reported on failure.

        Raises:
            StorageFault: If SQLite raises any error.
        """
        try:
            conn = sqlite3.connect(str(self.db_path))
        except sqlite3.Error as exc:
            raise StorageFault(
                f"Could not open database: {exc}",
                operation=operation,
                details={"db_path": str(self.db_path)},
            ) from exc
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as exc:
            conn.rollback()
            logger.error("Storage operation failed", operation=operation, error=str(exc))
            raise StorageFault(f"Database error: {exc}", operation=operation) from exc
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _init_schema(self) -> None:
        """Initialize database schema."""
        with self.connection("init_schema") as conn:
            cursor = conn.cursor()

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS schema_version (
                    version INTEGER PRIMARY KEY
                )
            """)

            # AUTOINCREMENT so ids are never reused after deletes
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS combatants (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    name TEXT NOT NULL,
                    initiative INTEGER NOT NULL CHECK (initiative BETWEEN 1 AND 30),
                    current_hp INTEGER NOT NULL CHECK (current_hp >= 0),
                    max_hp INTEGER CHECK (max_hp IS NULL OR max_hp >= 1),
                    is_npc INTEGER NOT NULL DEFAULT 0
                )
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS tutorial_content (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    step_id INTEGER NOT NULL,
                    title TEXT NOT NULL,
                    description TEXT NOT NULL DEFAULT '',
                    content_json TEXT NOT NULL,
                    version INTEGER NOT NULL DEFAULT 1,
                    updated_at TEXT NOT NULL
                )
            """)

            cursor.execute("""
                CREATE INDEX IF NOT EXISTS idx_tutorial_step
                ON tutorial_content(step_id)
            """)

            cursor.execute(
                "INSERT OR REPLACE INTO schema_version (version) VALUES (?)",
                (SCHEMA_VERSION,),
            )


# =============================================================================
# Stores
# =============================================================================


class SqliteCombatantStore(CombatantStore):
    """Combatant store persisted in SQLite."""

    backend_name = "sqlite"

    def __init__(self, database: Database) -> None:
        self.database = database

    def list_all(self) -> list[Combatant]:
        with self.database.connection("list_combatants") as conn:
            cursor = conn.execute(f"SELECT {_COMBATANT_COLUMNS} FROM combatants ORDER BY id")
            return [combatant_from_row(tuple(row)) for row in cursor.fetchall()]

    def get(self, combatant_id: int) -> Combatant:
        with self.database.connection("get_combatant") as conn:
            cursor = conn.execute(
                f"SELECT {_COMBATANT_COLUMNS} FROM combatants WHERE id = ?",
                (combatant_id,),
            )
            row = cursor.fetchone()
        if row is None:
            raise combatant_not_found(combatant_id)
        return combatant_from_row(tuple(row))

    def _insert(self, fields: CombatantCreate) -> Combatant:
        with self.database.connection("create_combatant") as conn:
            cursor = conn.execute(
                """
                INSERT INTO combatants (name, initiative, current_hp, max_hp, is_npc)
                VALUES (?, ?, ?, ?, ?)
                """,
                (fields.name, fields.initiative, fields.current_hp, fields.max_hp, int(fields.is_npc)),
            )
            combatant_id = cursor.lastrowid
        return Combatant(id=combatant_id, **fields.model_dump())

    def _apply(self, combatant_id: int, changes: dict[str, Any]) -> Combatant:
        # Column names come from the validated update schema, never from input keys
        assignments = ", ".join(f"{column} = ?" for column in changes)
        values = [int(v) if column == "is_npc" else v for column, v in changes.items()]
        with self.database.connection("update_combatant") as conn:
            cursor = conn.execute(
                f"UPDATE combatants SET {assignments} WHERE id = ? RETURNING {_COMBATANT_COLUMNS}",
                (*values, combatant_id),
            )
            row = next(iter(cursor.fetchall()), None)
        if row is None:
            raise combatant_not_found(combatant_id)
        return combatant_from_row(tuple(row))

    def delete_one(self, combatant_id: int) -> None:
        with self.database.connection("delete_combatant") as conn:
            deleted = conn.execute(
                "DELETE FROM combatants WHERE id = ?", (combatant_id,)
            ).rowcount > 0
        if not deleted:
            raise combatant_not_found(combatant_id)
        logger.info(f"Deleted combatant: {combatant_id}")

    def delete_all(self) -> None:
        with self.database.connection("delete_all_combatants") as conn:
            removed = conn.execute("DELETE FROM combatants").rowcount
        logger.info("All combatants deleted", removed=removed, backend=self.backend_name)


class SqliteTutorialStore(TutorialStore):
    """Tutorial store persisted in SQLite."""

    backend_name = "sqlite"

    def __init__(self, database: Database) -> None:
        self.database = database

    def list_all(self) -> list[TutorialStep]:
        with self.database.connection("list_tutorial") as conn:
            cursor = conn.execute(
                f"SELECT {_TUTORIAL_COLUMNS} FROM tutorial_content ORDER BY step_id, id"
            )
            return [tutorial_step_from_row(tuple(row)) for row in cursor.fetchall()]

    def get(self, record_id: int) -> TutorialStep:
        with self.database.connection("get_tutorial") as conn:
            row = conn.execute(
                f"SELECT {_TUTORIAL_COLUMNS} FROM tutorial_content WHERE id = ?",
                (record_id,),
            ).fetchone()
        if row is None:
            raise tutorial_step_not_found(record_id)
        return tutorial_step_from_row(tuple(row))

    def _insert(self, fields: TutorialStepCreate) -> TutorialStep:
        now = datetime.now()
        with self.database.connection("create_tutorial") as conn:
            cursor = conn.execute(
                """
                INSERT INTO tutorial_content
                (step_id, title, description, content_json, version, updated_at)
                VALUES (?, ?, ?, ?, 1, ?)
                """,
                (
                    fields.step_id,
                    fields.title,
                    fields.description,
                    json.dumps(fields.content, default=str),
                    now.isoformat(),
                ),
            )
            record_id = cursor.lastrowid
        return TutorialStep(id=record_id, version=1, updated_at=now, **fields.model_dump())

    def _apply(self, record_id: int, changes: dict[str, Any]) -> TutorialStep:
        columns = dict(changes)
        if "content" in columns:
            columns["content_json"] = json.dumps(columns.pop("content"), default=str)
        columns["updated_at"] = datetime.now().isoformat()
        assignments = ", ".join(f"{column} = ?" for column in columns)
        with self.database.connection("update_tutorial") as conn:
            rows = conn.execute(
                f"""
                UPDATE tutorial_content SET {assignments}, version = version + 1
                WHERE id = ? RETURNING {_TUTORIAL_COLUMNS}
                """,
                (*columns.values(), record_id),
            ).fetchall()
        row = rows[0] if rows else None
        if row is None:
            raise tutorial_step_not_found(record_id)
        return tutorial_step_from_row(tuple(row))

    def delete(self, record_id: int) -> None:
        with self.database.connection("delete_tutorial") as conn:
            deleted = conn.execute(
                "DELETE FROM tutorial_content WHERE id = ?", (record_id,)
            ).rowcount > 0
        if not deleted:
            raise tutorial_step_not_found(record_id)
        logger.info(f"Deleted tutorial step: {record_id}")


__all__ = [
    "Database",
    "SqliteCombatantStore",
    "SqliteTutorialStore",
    "combatant_from_row",
    "tutorial_step_from_row",
]
