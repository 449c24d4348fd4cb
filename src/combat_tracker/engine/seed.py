"""Demo encounter for trying the tracker out.

Seeding replaces whatever is in the store with five heroes and ten
monsters and NPCs.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from combat_tracker.core.logging import get_logger
from combat_tracker.models.combatant import Combatant
from combat_tracker.storage.base import CombatantStore

logger = get_logger(__name__)


DEMO_ENCOUNTER: list[dict[str, Any]] = [
    # Player characters
    {"name": "Gandrix the Wise", "initiative": 18, "currentHp": 45, "maxHp": 45, "isNpc": False},
    {"name": "Thorin Ironforge", "initiative": 12, "currentHp": 68, "maxHp": 75, "isNpc": False},
    {"name": "Lyralei Windwhisper", "initiative": 22, "currentHp": 32, "maxHp": 38, "isNpc": False},
    {"name": "Zuko Flamefist", "initiative": 15, "currentHp": 42, "maxHp": 52, "isNpc": False},
    {"name": "Brother Marcus", "initiative": 10, "currentHp": 48, "maxHp": 48, "isNpc": False},
    # Monsters
    {"name": "Ancient Red Dragon", "initiative": 16, "currentHp": 256, "maxHp": 546, "isNpc": True},
    {"name": "Goblin Scout #1", "initiative": 14, "currentHp": 7, "maxHp": 7, "isNpc": True},
    {"name": "Goblin Scout #2", "initiative": 13, "currentHp": 5, "maxHp": 7, "isNpc": True},
    {"name": "Goblin Warchief", "initiative": 11, "currentHp": 35, "maxHp": 42, "isNpc": True},
    {"name": "Owlbear", "initiative": 9, "currentHp": 45, "maxHp": 59, "isNpc": True},
    {"name": "Skeleton Warrior", "initiative": 8, "currentHp": 13, "maxHp": 13, "isNpc": True},
    {"name": "Dire Wolf Alpha", "initiative": 17, "currentHp": 28, "maxHp": 37, "isNpc": True},
    {"name": "Bandit Captain", "initiative": 12, "currentHp": 52, "maxHp": 65, "isNpc": True},
    # NPCs
    {"name": "Sir Reginald (Town Guard)", "initiative": 6, "currentHp": 32, "maxHp": 32, "isNpc": True},
    {"name": "Mysterious Hooded Figure", "initiative": 20, "currentHp": 1, "maxHp": 1, "isNpc": True},
]


@dataclass(frozen=True)
class SeedSummary:
    """Counts describing a freshly seeded encounter."""

    total: int
    heroes: int
    npcs: int
    highest_initiative: int
    total_hp: int

    @classmethod
    def from_combatants(cls, combatants: list[Combatant]) -> SeedSummary:
        heroes = sum(1 for c in combatants if not c.is_npc)
        return cls(
            total=len(combatants),
            heroes=heroes,
            npcs=len(combatants) - heroes,
            highest_initiative=max((c.initiative for c in combatants), default=0),
            total_hp=sum(c.current_hp for c in combatants),
        )

    def to_wire(self) -> dict[str, int]:
        return {
            "total": self.total,
            "heroes": self.heroes,
            "npcs": self.npcs,
            "highestInitiative": self.highest_initiative,
            "totalHp": self.total_hp,
        }


def seed_demo_encounter(
    store: CombatantStore,
    encounter: list[dict[str, Any]] | None = None,
) -> SeedSummary:
    """Clear the store and insert the demo encounter.

    Args:
        store: The combatant store to seed.
        encounter: Combatant records to insert instead of DEMO_ENCOUNTER.

    Returns:
        Summary counts of the inserted combatants.

    Raises:
        ValidationError: If a supplied record is invalid. Records before it
            remain inserted.
    """
    store.delete_all()
    inserted = [store.create(record) for record in (encounter or DEMO_ENCOUNTER)]
    summary = SeedSummary.from_combatants(inserted)
    logger.info("Demo encounter seeded", **asdict(summary))
    return summary


__all__ = [
    "DEMO_ENCOUNTER",
    "SeedSummary",
    "seed_demo_encounter",
]
