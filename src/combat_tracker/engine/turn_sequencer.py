"""Turn order and active-turn tracking.

The turn order sequence is the combatant list sorted by initiative
(highest first). With grouping enabled, every non-NPC sorts ahead of every
NPC before initiative is compared. Ties keep their input order.

The active-turn pointer is a position in that sequence, not a reference
to a combatant. After any change to the sequence (insert, delete,
initiative edit, grouping toggle) the pointer keeps its numeric value,
reduced modulo the new length, and whoever now occupies that slot is
active.

Nothing here raises: an empty sequence makes every pointer move a no-op.
"""

from __future__ import annotations

from collections.abc import Iterable

from combat_tracker.core.logging import get_logger
from combat_tracker.models.combatant import Combatant
from combat_tracker.models.turn import TurnSnapshot

logger = get_logger(__name__)


def turn_order_key(combatant: Combatant, *, group_by_type: bool) -> tuple[bool, int]:
    """Sort key for descending turn order.

    Args:
        combatant: The combatant to rank.
        group_by_type: Rank every non-NPC ahead of every NPC.

    Returns:
        Tuple of (is hero group, initiative), meant for a reversed sort.
    """
    return (not combatant.is_npc if group_by_type else True, combatant.initiative)


def order_combatants(
    combatants: Iterable[Combatant],
    *,
    group_by_type: bool = False,
) -> list[Combatant]:
    """Compute the turn order sequence.

    Python's sort is stable under ``reverse=True`` as well, so equal keys
    retain their input order.

    Args:
        combatants: Combatants in any order.
        group_by_type: Whether heroes sort ahead of NPCs.

    Returns:
        A new list in turn order.
    """
    return sorted(
        combatants,
        key=lambda c: turn_order_key(c, group_by_type=group_by_type),
        reverse=True,
    )


class TurnSequencer:
    """Track the turn order sequence and the active-turn pointer.

    Also counts rounds: the round advances when ``next_turn`` wraps past
    the end of the sequence and steps back when ``previous_turn`` wraps
    past the start. The round never affects ordering or the pointer.
    """

    def __init__(
        self,
        combatants: Iterable[Combatant] = (),
        *,
        group_by_type: bool = False,
    ) -> None:
        """Initialize the sequencer.

        Args:
            combatants: Initial combatant set.
            group_by_type: Initial grouping mode.
        """
        self._group_by_type = group_by_type
        # Raw input order; every sort starts from here so ties stay stable
        self._combatants: list[Combatant] = list(combatants)
        self._order: list[Combatant] = order_combatants(self._combatants, group_by_type=group_by_type)
        self._current_index: int = 0
        self._round: int = 1

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def group_by_type(self) -> bool:
        """Whether heroes sort ahead of NPCs."""
        return self._group_by_type

    @property
    def turn_order(self) -> list[Combatant]:
        """Get the turn order sequence.

        Returns:
            A copy of the ordered combatant list.
        """
        return list(self._order)

    @property
    def current_index(self) -> int:
        """Get the active-turn pointer (0 when the sequence is empty)."""
        return self._current_index

    @property
    def current_combatant(self) -> Combatant | None:
        """Get the combatant at the pointer.

        Returns:
            The active combatant, or None if the sequence is empty.
        """
        order = self._order
        if not order:
            return None
        return order[self._current_index % len(order)]

    @property
    def current_round(self) -> int:
        """Get the current round number, starting at 1."""
        return self._round

    def __len__(self) -> int:
        return len(self._order)

    def snapshot(self) -> TurnSnapshot:
        """Capture the observable state."""
        return TurnSnapshot(
            order=self.turn_order,
            current_index=self._current_index,
            current=self.current_combatant,
            round=self._round,
            group_by_type=self._group_by_type,
        )

    # -------------------------------------------------------------------------
    # Recomputation
    # -------------------------------------------------------------------------

    def _resort(self) -> None:
        order = order_combatants(self._combatants, group_by_type=self._group_by_type)
        self._current_index %= max(len(order), 1)
        self._order = order

    def refresh(self, combatants: Iterable[Combatant]) -> None:
        """Replace the combatant set and recompute the order.

        The pointer keeps its position, reduced modulo the new length, so
        the active combatant may change without a turn transition.

        Args:
            combatants: The authoritative combatant set.
        """
        self._combatants = list(combatants)
        self._resort()
        logger.debug(
            "Turn order refreshed",
            length=len(self._order),
            current_index=self._current_index,
        )

    def set_group_by_type(self, group_by_type: bool) -> None:
        """Toggle grouping mode and re-sort.

        The pointer stays positional.
        """
        self._group_by_type = group_by_type
        self._resort()
        logger.info("Grouping mode changed", group_by_type=group_by_type)

    def reset(self) -> None:
        """Clear the sequence and return the pointer to 0."""
        self._current_index = 0
        self._combatants = []
        self._order = []
        self._round = 1
        logger.info("Turn sequencer reset")

    # -------------------------------------------------------------------------
    # Pointer movement
    # -------------------------------------------------------------------------

    def next_turn(self) -> Combatant | None:
        """Advance the pointer, wrapping to the start of the next round.

        Returns:
            The newly active combatant, or None if the sequence is empty.
        """
        if not self._order:
            return None

        self._current_index = (self._current_index + 1) % len(self._order)
        if self._current_index == 0:
            self._round += 1
            logger.info("New round started", round=self._round)

        current = self.current_combatant
        logger.debug("Next turn", combatant=current.name, index=self._current_index)
        return current

    def previous_turn(self) -> Combatant | None:
        """Move the pointer back, wrapping to the end of the previous round.

        Returns:
            The newly active combatant, or None if the sequence is empty.
        """
        if not self._order:
            return None

        if self._current_index == 0:
            self._current_index = len(self._order) - 1
            self._round = max(self._round - 1, 1)
        else:
            self._current_index -= 1

        current = self.current_combatant
        logger.debug("Previous turn", combatant=current.name, index=self._current_index)
        return current

    def jump_to(self, combatant_id: int) -> Combatant | None:
        """Move the pointer to a specific combatant.

        An id that is not in the sequence leaves the pointer unchanged.

        Returns:
            The active combatant after the jump (None if the sequence is empty).
        """
        for index, combatant in enumerate(self._order):
            if combatant.id == combatant_id:
                self._current_index = index
                logger.debug("Jumped to combatant", combatant=combatant.name, index=index)
                break
        else:
            logger.debug("Jump target not in turn order", combatant_id=combatant_id)
        return self.current_combatant


__all__ = [
    "turn_order_key",
    "order_combatants",
    "TurnSequencer",
]
