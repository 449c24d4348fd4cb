"""Tests for CombatSession."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from combat_tracker.core.exceptions import NotFoundError, ValidationError
from combat_tracker.engine import CombatSession
from combat_tracker.storage import CombatantStore


@pytest.fixture
def session(combatant_store: CombatantStore) -> CombatSession:
    """A session over an empty store of each backend."""
    return CombatSession(combatant_store)


def add(session: CombatSession, name: str, initiative: int, *, is_npc: bool = False) -> int:
    return session.add(
        {"name": name, "initiative": initiative, "currentHp": 10, "isNpc": is_npc}
    ).id


class TestRoster:
    """Mutations go through the store and resync the order."""

    def test_add_resorts(self, session: CombatSession) -> None:
        """New combatants appear in initiative order."""
        add(session, "A", 18)
        add(session, "B", 22)
        add(session, "C", 10)

        snapshot = session.snapshot()

        assert [c.name for c in snapshot.order] == ["B", "A", "C"]

    def test_initiative_edit_resorts(self, session: CombatSession) -> None:
        """Raising initiative moves a combatant up."""
        add(session, "A", 18)
        slow = add(session, "B", 2)

        session.set_initiative(slow, 25)

        assert [c.name for c in session.snapshot().order] == ["B", "A"]

    def test_failed_write_leaves_order(self, session: CombatSession) -> None:
        """A rejected update changes neither store nor order."""
        fighter = add(session, "A", 18)
        before = session.snapshot()

        with pytest.raises(ValidationError):
            session.set_initiative(fighter, 31)
        with pytest.raises(NotFoundError):
            session.remove(fighter + 100)

        assert session.snapshot() == before

    def test_set_hp(self, session: CombatSession) -> None:
        """HP edits are reflected in the order snapshot."""
        fighter = add(session, "A", 18)

        session.set_hp(fighter, 3)

        assert session.snapshot().current.current_hp == 3

    def test_remove_active_clamps_pointer(self, session: CombatSession) -> None:
        """Deleting the last slot while active wraps the pointer."""
        add(session, "A", 18)
        last = add(session, "B", 5)
        session.previous_turn()

        session.remove(last)

        snapshot = session.snapshot()
        assert snapshot.current_index == 0
        assert snapshot.current.name == "A"


class TestTurnControl:
    """Pointer movement through the session."""

    def test_next_and_previous(self, session: CombatSession) -> None:
        """Snapshots reflect each move."""
        add(session, "A", 18)
        add(session, "B", 22)

        assert session.next_turn().current.name == "A"
        assert session.next_turn().round == 2
        assert session.previous_turn().current.name == "A"

    def test_jump_and_grouping(self, session: CombatSession) -> None:
        """Grouping re-sorts while the pointer stays in its slot."""
        hero = add(session, "Hero", 5)
        add(session, "Dragon", 30, is_npc=True)

        assert session.jump_to(hero).current_index == 1

        snapshot = session.set_group_by_type(True)

        assert snapshot.group_by_type is True
        assert snapshot.current_index == 1
        assert snapshot.current.name == "Dragon"

    def test_toggle_on_then_off_matches_next_read(self, session: CombatSession) -> None:
        """Ungrouping restores input order for ties and the next sync agrees."""
        add(session, "Orc", 10, is_npc=True)
        add(session, "Hero", 10)

        assert [c.name for c in session.set_group_by_type(True).order] == ["Hero", "Orc"]
        toggled = session.set_group_by_type(False)
        synced = session.snapshot()

        assert [c.name for c in toggled.order] == ["Orc", "Hero"]
        assert synced.order == toggled.order
        assert synced.current == toggled.current

    def test_external_store_changes_are_picked_up(self, session: CombatSession) -> None:
        """Writes made directly to the store show on the next read."""
        session.store.create({"name": "Sneaky", "initiative": 30, "currentHp": 1})

        assert session.snapshot().current.name == "Sneaky"

    def test_reset(self, session: CombatSession) -> None:
        """Reset empties the store and restarts the pointer."""
        add(session, "A", 18)
        add(session, "B", 22)
        session.next_turn()

        snapshot = session.reset()

        assert snapshot.order == []
        assert snapshot.current_index == 0
        assert session.store.list_all() == []


class TestSeed:
    """Seeding through the session."""

    def test_seed_replaces_roster(self, session: CombatSession) -> None:
        """Seeding discards existing combatants and starts at the top."""
        add(session, "Leftover", 30)
        session.next_turn()

        summary = session.seed()
        snapshot = session.snapshot()

        assert summary.total == 15
        assert len(snapshot.order) == 15
        assert snapshot.current_index == 0
        assert snapshot.current.name == "Lyralei Windwhisper"
        assert "Leftover" not in [c.name for c in snapshot.order]


class TestConcurrency:
    """Sessions are shared by the API's worker threads."""

    def test_parallel_turns_and_edits(self, session: CombatSession) -> None:
        """Interleaved turn moves and roster edits never see a torn order."""
        for index in range(6):
            add(session, f"Base{index}", index * 3, is_npc=index % 2 == 0)

        def churn(worker: int) -> None:
            for step in range(15):
                added = add(session, f"W{worker}-{step}", (worker + step) % 20)
                snapshot = session.next_turn()
                assert snapshot.current is not None
                assert 0 <= snapshot.current_index < len(snapshot.order)
                session.set_group_by_type(step % 2 == 0)
                session.previous_turn()
                session.remove(added)

        with ThreadPoolExecutor(max_workers=4) as pool:
            for future in [pool.submit(churn, worker) for worker in range(4)]:
                future.result()

        snapshot = session.snapshot()
        assert len(snapshot.order) == 6
        assert 0 <= snapshot.current_index < 6
