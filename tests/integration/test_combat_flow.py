"""Integration tests for combat flow.

Runs complete encounters through a CombatSession backed by SQLite, from
seeding through several rounds to a reset.
"""

from __future__ import annotations

from pathlib import Path

from combat_tracker.engine import CombatSession
from combat_tracker.storage import Database, SqliteCombatantStore


class TestCombatFlow:
    """Test complete combat scenarios."""

    def test_full_round_with_casualty(self, tmp_path: Path) -> None:
        """Seed, play a round, drop a monster, and keep going."""
        session = CombatSession(SqliteCombatantStore(Database(tmp_path / "combat.db")))
        session.seed()

        # Highest initiatives: Lyralei 22, Hooded Figure 20, Gandrix 18, Dire Wolf 17
        order = [c.name for c in session.snapshot().order]
        assert order[:4] == [
            "Lyralei Windwhisper",
            "Mysterious Hooded Figure",
            "Gandrix the Wise",
            "Dire Wolf Alpha",
        ]

        session.next_turn()
        hooded = session.snapshot().current
        assert hooded.name == "Mysterious Hooded Figure"

        # The active combatant falls; Gandrix slides into the active slot
        session.set_hp(hooded.id, 0)
        session.remove(hooded.id)
        snapshot = session.snapshot()
        assert snapshot.current_index == 1
        assert snapshot.current.name == "Gandrix the Wise"
        assert len(snapshot.order) == 14

        for _ in range(len(snapshot.order) - 1):
            session.next_turn()
        assert session.snapshot().round == 2
        assert session.snapshot().current.name == "Lyralei Windwhisper"

    def test_grouped_encounter(self, tmp_path: Path) -> None:
        """With grouping, all five heroes act before any monster."""
        session = CombatSession(
            SqliteCombatantStore(Database(tmp_path / "combat.db")),
            group_by_type=True,
        )
        session.seed()

        order = session.snapshot().order

        assert [c.is_npc for c in order] == [False] * 5 + [True] * 10
        assert order[5].name == "Mysterious Hooded Figure"

    def test_roster_survives_restart(self, tmp_path: Path) -> None:
        """A new session over the same file sees the same roster."""
        db_path = tmp_path / "combat.db"
        first = CombatSession(SqliteCombatantStore(Database(db_path)))
        first.add({"name": "Owlbear", "initiative": 9, "currentHp": 45, "maxHp": 59, "isNpc": True})
        first.add({"name": "Thorin", "initiative": 12, "currentHp": 68})

        second = CombatSession(SqliteCombatantStore(Database(db_path)))

        assert [c.name for c in second.snapshot().order] == ["Thorin", "Owlbear"]
        # The pointer is session state and starts fresh
        assert second.snapshot().current_index == 0

    def test_reset_then_rebuild(self, tmp_path: Path) -> None:
        """After a reset, new combatants start from the top."""
        session = CombatSession(SqliteCombatantStore(Database(tmp_path / "combat.db")))
        session.seed()
        session.next_turn()
        session.next_turn()

        session.reset()
        session.add({"name": "Solo", "initiative": 1, "currentHp": 1})

        snapshot = session.snapshot()
        assert snapshot.current_index == 0
        assert snapshot.round == 1
        assert snapshot.current.name == "Solo"
