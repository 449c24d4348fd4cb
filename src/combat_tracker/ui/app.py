"""Combat Tracker - Streamlit front end.

The grouping flag and the active-turn pointer live in
``st.session_state`` and are lost on reload. The combatant roster is
re-read from the store on every rerun, so edits made elsewhere (another
browser tab, the HTTP API) show up on the next interaction.

Run with:
    streamlit run src/combat_tracker/ui/app.py
"""

from __future__ import annotations

from typing import Any

import streamlit as st

from combat_tracker.core.config import get_settings
from combat_tracker.core.exceptions import CombatTrackerError, ValidationError
from combat_tracker.core.logging import configure_logging, get_logger
from combat_tracker.engine.seed import seed_demo_encounter
from combat_tracker.engine.turn_sequencer import TurnSequencer
from combat_tracker.models.combatant import Combatant
from combat_tracker.models.tutorial import DEFAULT_TUTORIAL_STEPS
from combat_tracker.storage import Stores, create_stores

logger = get_logger(__name__)


# =============================================================================
# Page Configuration
# =============================================================================


settings = get_settings()
configure_logging(level=settings.log_level, json_format=settings.json_logs)

st.set_page_config(
    page_title=settings.ui.page_title,
    page_icon="⚔️",
    layout="centered",
    menu_items={
        "Get Help": None,
        "Report a bug": None,
        "About": "Combat Tracker - initiative and HP for tabletop sessions",
    },
)


# =============================================================================
# State
# =============================================================================


@st.cache_resource
def get_stores() -> Stores:
    """Stores shared by every browser session of this server."""
    return create_stores(settings.storage)


def get_sequencer() -> TurnSequencer:
    """Per-browser-session turn sequencer."""
    if "sequencer" not in st.session_state:
        st.session_state.sequencer = TurnSequencer(
            group_by_type=settings.tracker.group_by_type,
        )
    return st.session_state.sequencer


def report(exc: CombatTrackerError) -> None:
    """Show a store failure to the user."""
    if isinstance(exc, ValidationError) and exc.field_name:
        st.session_state.flash = ("error", f"{exc.field_name}: {exc.message}")
    else:
        st.session_state.flash = ("error", exc.message)
    logger.warning("UI action failed", error=exc)


# =============================================================================
# Callbacks
# =============================================================================


def on_add() -> None:
    max_hp = st.session_state.add_max_hp
    fields: dict[str, Any] = {
        "name": st.session_state.add_name,
        "initiative": int(st.session_state.add_initiative),
        "currentHp": int(st.session_state.add_current_hp),
        "maxHp": int(max_hp) if max_hp else None,
        "isNpc": st.session_state.add_is_npc,
    }
    try:
        combatant = get_stores().combatants.create(fields)
    except CombatTrackerError as exc:
        report(exc)
        return
    st.session_state.flash = ("success", f"{combatant.name} joined the combat")


def on_hp_change(combatant_id: int) -> None:
    try:
        get_stores().combatants.update_hp(combatant_id, int(st.session_state[f"hp_{combatant_id}"]))
    except CombatTrackerError as exc:
        report(exc)


def on_initiative_change(combatant_id: int) -> None:
    value = int(st.session_state[f"init_{combatant_id}"])
    try:
        get_stores().combatants.update_initiative(combatant_id, value)
    except CombatTrackerError as exc:
        report(exc)


def on_remove(combatant_id: int) -> None:
    try:
        get_stores().combatants.delete_one(combatant_id)
    except CombatTrackerError as exc:
        report(exc)
        return
    st.session_state.flash = ("info", "The character has been removed from combat")


def on_reset() -> None:
    try:
        get_stores().combatants.delete_all()
    except CombatTrackerError as exc:
        report(exc)
        return
    get_sequencer().reset()
    st.session_state.flash = ("info", "All characters have been removed")


def on_seed() -> None:
    try:
        summary = seed_demo_encounter(get_stores().combatants)
    except CombatTrackerError as exc:
        report(exc)
        return
    # Seeding replaces the roster, so the pointer starts over
    get_sequencer().reset()
    st.session_state.flash = (
        "success",
        f"Seeded {summary.heroes} heroes and {summary.npcs} NPCs",
    )


def on_group_toggle() -> None:
    get_sequencer().set_group_by_type(st.session_state.group_by_type)


# =============================================================================
# Rendering
# =============================================================================


def render_combatant(combatant: Combatant, *, is_current: bool) -> None:
    """Render one row of the turn order."""
    col_turn, col_name, col_init, col_hp, col_remove = st.columns([1, 5, 2, 2, 1])

    with col_turn:
        st.button(
            "▶" if is_current else "·",
            key=f"jump_{combatant.id}",
            on_click=get_sequencer().jump_to,
            args=(combatant.id,),
            help="Make this combatant active",
        )
    with col_name:
        label = f"**{combatant.name}**" if is_current else combatant.name
        badge = " 👹" if combatant.is_npc else " 🛡️"
        hp_note = f" / {combatant.max_hp} HP" if combatant.max_hp else " HP"
        st.markdown(f"{label}{badge}  \n{combatant.current_hp}{hp_note}")
    with col_init:
        st.number_input(
            "Init",
            min_value=1,
            max_value=30,
            value=combatant.initiative,
            key=f"init_{combatant.id}",
            on_change=on_initiative_change,
            args=(combatant.id,),
        )
    with col_hp:
        st.number_input(
            "HP",
            min_value=0,
            value=combatant.current_hp,
            key=f"hp_{combatant.id}",
            on_change=on_hp_change,
            args=(combatant.id,),
        )
    with col_remove:
        st.button("🗑️", key=f"remove_{combatant.id}", on_click=on_remove, args=(combatant.id,))


def render_add_form() -> None:
    with st.expander("➕ Add to Combat"):
        with st.form("add_combatant", clear_on_submit=True):
            st.text_input("Name", key="add_name")
            col1, col2, col3 = st.columns(3)
            with col1:
                st.number_input("Initiative", min_value=1, max_value=30, value=10, key="add_initiative")
            with col2:
                st.number_input("Current HP", min_value=0, value=10, key="add_current_hp")
            with col3:
                st.number_input("Max HP (0 = none)", min_value=0, value=0, key="add_max_hp")
            st.checkbox("NPC", key="add_is_npc")
            st.form_submit_button("Add", on_click=on_add)


def render_turn_order(sequencer: TurnSequencer) -> None:
    order = sequencer.turn_order
    if not order:
        st.info("No combatants yet. Add some to start tracking turns.")
        return

    current = sequencer.current_combatant
    if not sequencer.group_by_type:
        for combatant in order:
            render_combatant(combatant, is_current=combatant.id == current.id)
        return

    # Display sections only; turns still run through the single flat order
    heroes = [c for c in order if not c.is_npc]
    npcs = [c for c in order if c.is_npc]
    for title, section in (("Heroes", heroes), ("NPCs & Monsters", npcs)):
        if section:
            st.subheader(title)
            for combatant in section:
                render_combatant(combatant, is_current=combatant.id == current.id)


def render_tutorial() -> None:
    try:
        steps = [step.to_wire() for step in get_stores().tutorials.list_all()]
    except CombatTrackerError as exc:
        logger.warning("Tutorial content unavailable", error=exc)
        steps = []
    with st.expander("❓ How to use"):
        for step in steps or DEFAULT_TUTORIAL_STEPS:
            st.markdown(f"#### {step['title']}")
            if step.get("description"):
                st.caption(step["description"])
            content = step.get("content") or {}
            if content.get("intro"):
                st.markdown(content["intro"])
            for bullet in content.get("bullets", []):
                st.markdown(f"- {bullet}")


def main() -> None:
    """Render the tracker page."""
    sequencer = get_sequencer()

    try:
        sequencer.refresh(get_stores().combatants.list_all())
    except CombatTrackerError as exc:
        st.error(f"Could not load combatants: {exc.message}")
        return

    st.title("⚔️ Combat Tracker")

    flash = st.session_state.pop("flash", None)
    if flash:
        kind, message = flash
        getattr(st, kind)(message)

    render_add_form()

    col1, col2, col3, col4, col5 = st.columns([3, 2, 2, 2, 2])
    with col1:
        st.toggle(
            "Group by type",
            value=sequencer.group_by_type,
            key="group_by_type",
            on_change=on_group_toggle,
        )
    with col2:
        st.button("⏮ Previous", on_click=sequencer.previous_turn, disabled=not len(sequencer))
    with col3:
        st.button("Next Turn ⏭", on_click=sequencer.next_turn, disabled=not len(sequencer))
    with col4:
        st.button("Reset", on_click=on_reset, type="secondary")
    with col5:
        st.button("Seed demo", key="seed_demo", on_click=on_seed, type="secondary")

    if len(sequencer):
        current = sequencer.current_combatant
        st.metric(f"Round {sequencer.current_round}", current.name)

    st.divider()
    render_turn_order(sequencer)
    st.divider()
    render_tutorial()


main()
