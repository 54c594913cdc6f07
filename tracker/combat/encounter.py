"""
Encounter context for the tracker.

An encounter binds the initiative reducers to one static roster, so a
caller holding the persisted state only needs to say which combatant an
action targets. Each encounter is independent of every other one; nothing
is shared through module level registries.
"""

from typing import Any

from catchery import log_warning

from tracker.character.combatant import Combatant, InitiativeBlock
from tracker.combat import initiative
from tracker.combat.identity import combatant_key
from tracker.combat.initiative import InitiativeState
from tracker.combat.turn_order import SortedInitiativeItem, sort_initiative_items
from tracker.core.constants import MAIN_POOL
from tracker.core.logging import log_info


class Encounter:
    """
    Applies user actions to the initiative state of one encounter.

    Combatants are addressed by their position in the roster, the way the
    rows of a tracker refer to them. An index outside the roster is logged
    and leaves the state unchanged.
    """

    def __init__(self, block: InitiativeBlock) -> None:
        """
        Initialize the Encounter.

        Args:
            block (InitiativeBlock): The static roster of the encounter.

        """
        self.block: InitiativeBlock = block

    @property
    def combatants(self) -> list[Combatant]:
        """The combatants, in roster order."""
        return self.block.items

    def combatant(self, index: int) -> Combatant | None:
        """
        Returns the combatant at the given roster index.

        Args:
            index (int): The roster index.

        Returns:
            Combatant | None: The combatant, or None when the index is invalid.

        """
        if 0 <= index < len(self.block.items):
            return self.block.items[index]
        log_warning(
            "Combatant index out of range",
            {"index": index, "combatants": len(self.block.items)},
        )
        return None

    def key_of(self, index: int) -> str | None:
        """Returns the identity key of the combatant at the given index."""
        combatant = self.combatant(index)
        return combatant_key(combatant) if combatant else None

    def new_state(self) -> InitiativeState:
        """Returns the initial state of the encounter."""
        return initiative.reset_initiative(self.block)

    def sorted_items(self, state: InitiativeState) -> list[SortedInitiativeItem]:
        """Returns the roster in initiative order."""
        return sort_initiative_items(self.block.items, state.initiatives)

    def active_combatant(self, state: InitiativeState) -> Combatant | None:
        """Returns the combatant holding the turn, or None."""
        return initiative.active_combatant(self.block, state)

    def set_initiative(self, state: InitiativeState, index: int, value: Any) -> InitiativeState:
        """Records the rolled initiative of the combatant at the given index."""
        combatant = self.combatant(index)
        if combatant is None:
            return state
        return initiative.set_initiative(state, combatant, value)

    def damage(
        self,
        state: InitiativeState,
        index: int,
        amount: Any,
        pool: str = MAIN_POOL,
    ) -> InitiativeState:
        """Damages one pool of the combatant at the given index."""
        combatant = self.combatant(index)
        if combatant is None:
            return state
        return initiative.damage_pool(state, combatant, pool, amount)

    def heal(
        self,
        state: InitiativeState,
        index: int,
        amount: Any,
        pool: str = MAIN_POOL,
    ) -> InitiativeState:
        """Heals one pool of the combatant at the given index."""
        combatant = self.combatant(index)
        if combatant is None:
            return state
        return initiative.heal_pool(state, combatant, pool, amount)

    def next_turn(self, state: InitiativeState) -> InitiativeState:
        """Moves the turn forward, resetting round consumables on a new round."""
        return initiative.next_turn(self.block, state)

    def previous_turn(self, state: InitiativeState) -> InitiativeState:
        """Moves the turn backward."""
        return initiative.previous_turn(self.block, state)

    def reset(self) -> InitiativeState:
        """Starts the encounter over."""
        log_info("Encounter reset", {"combatants": len(self.block.items)})
        return initiative.reset_initiative(self.block)

    def set_consumable(self, state: InitiativeState, state_key: str, value: Any) -> InitiativeState:
        """
        Records the usage of a consumable, capped at its declared uses.

        Args:
            state (InitiativeState): The current state.
            state_key (str): The state key of the consumable.
            value (Any): The new usage count.

        Returns:
            InitiativeState: The new state.

        """
        consumable = self.block.find_consumable(state_key)
        if consumable is None:
            log_warning(
                "Unknown consumable",
                {"state_key": state_key},
            )
            return state
        return initiative.set_consumable(state, state_key, value, consumable.uses)
