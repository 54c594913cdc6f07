"""
Initiative tracker module.

Defines the persisted state of an initiative tracker and the reducers that
apply one user action to it: rolling initiative, damaging and healing a hit
point pool, moving the turn forward or backward, resetting the encounter and
spending consumables. Every reducer takes the previous state and returns a
complete replacement state, or the same object when nothing changed.
"""

from typing import Any

from catchery import log_warning
from pydantic import BaseModel, ConfigDict, Field, field_validator

from tracker.character.combatant import Combatant, InitiativeBlock, get_max_hp
from tracker.combat.consumables import clamp_consumable_usage, reset_round_consumables
from tracker.combat.health import damage, heal
from tracker.combat.identity import combatant_key
from tracker.combat.turn_order import (
    calculate_next_turn,
    calculate_previous_turn,
    sort_initiative_items,
)
from tracker.core.constants import FIRST_ROUND, MAIN_POOL, NO_ACTIVE_INDEX
from tracker.core.logging import log_debug
from tracker.core.utils import to_int


class InitiativeState(BaseModel):
    """
    The persisted state of an initiative tracker.

    Serialized with `model_dump(by_alias=True)`, the state uses the camelCase
    keys of the persisted format.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    initiatives: dict[str, int] = Field(
        default_factory=dict,
        description="Rolled initiative by combatant key.",
    )
    hp: dict[str, dict[str, int]] = Field(
        default_factory=dict,
        description="Current hit points by combatant key, then by pool key.",
    )
    active_index: int = Field(
        default=NO_ACTIVE_INDEX,
        alias="activeIndex",
        description="Roster index of the active combatant, -1 for none.",
    )
    round: int = Field(
        default=FIRST_ROUND,
        description="The current round, starting at 1.",
    )
    consumables: dict[str, int] = Field(
        default_factory=dict,
        description="Usage count by consumable state key.",
    )

    @field_validator("initiatives", "consumables", mode="before")
    @classmethod
    def check_counters(cls, value: Any) -> dict[str, int]:
        if not isinstance(value, dict):
            return {}
        return {str(key): to_int(count, str(key)) for key, count in value.items()}

    @field_validator("hp", mode="before")
    @classmethod
    def check_hp(cls, value: Any) -> dict[str, dict[str, int]]:
        if not isinstance(value, dict):
            return {}
        return {
            str(key): {
                str(pool): to_int(current, f"{key}.{pool}")
                for pool, current in pools.items()
            }
            for key, pools in value.items()
            if isinstance(pools, dict)
        }

    @field_validator("active_index", mode="before")
    @classmethod
    def check_active_index(cls, value: Any) -> int:
        if value is None:
            return NO_ACTIVE_INDEX
        return to_int(value, "activeIndex")

    @field_validator("round", mode="before")
    @classmethod
    def check_round(cls, value: Any) -> int:
        round_number = to_int(value, "round")
        if round_number < FIRST_ROUND:
            log_warning(
                "Round below the first round, using the first round",
                {"round": value},
            )
            return FIRST_ROUND
        return round_number


def reset_initiative(block: InitiativeBlock) -> InitiativeState:
    """
    Builds a fresh state for the roster.

    Args:
        block (InitiativeBlock): The static roster.

    Returns:
        InitiativeState: Initiatives at 0, every pool at full hit points,
        consumables unused, round 1 and no active combatant.

    """
    initiatives: dict[str, int] = {}
    hp: dict[str, dict[str, int]] = {}
    for combatant in block.items:
        key = combatant_key(combatant)
        initiatives[key] = 0
        hp[key] = combatant.pool_capacities()

    consumables = {consumable.state_key: 0 for consumable in block.consumables}

    log_debug(
        "Reset initiative",
        {"combatants": len(block.items), "consumables": len(consumables)},
    )
    return InitiativeState(
        initiatives=initiatives,
        hp=hp,
        active_index=NO_ACTIVE_INDEX,
        round=FIRST_ROUND,
        consumables=consumables,
    )


def set_initiative(state: InitiativeState, combatant: Combatant, value: Any) -> InitiativeState:
    """
    Records the rolled initiative of a combatant.

    Args:
        state (InitiativeState): The current state.
        combatant (Combatant): The combatant.
        value (Any): The rolled initiative, normalized to an integer.

    Returns:
        InitiativeState: The new state.

    """
    key = combatant_key(combatant)
    initiative = to_int(value, "initiative")
    if key in state.initiatives and state.initiatives[key] == initiative:
        return state

    initiatives = dict(state.initiatives)
    initiatives[key] = initiative
    return state.model_copy(update={"initiatives": initiatives})


def _set_pool(state: InitiativeState, key: str, pool: str, value: int) -> InitiativeState:
    hp = dict(state.hp)
    pools = dict(hp.get(key, {}))
    pools[pool] = value
    hp[key] = pools
    return state.model_copy(update={"hp": hp})


def damage_pool(
    state: InitiativeState,
    combatant: Combatant,
    pool: str = MAIN_POOL,
    amount: Any = 0,
) -> InitiativeState:
    """
    Damages one hit point pool of a combatant.

    Args:
        state (InitiativeState): The current state.
        combatant (Combatant): The combatant.
        pool (str): The pool key, "main" for single pool combatants.
        amount (Any): The damage, normalized to an integer.

    Returns:
        InitiativeState: The new state. Hit points stay within [0, max].

    """
    key = combatant_key(combatant)
    current = state.hp.get(key, {}).get(pool, 0)
    damage_amount = to_int(amount, "amount")
    if damage_amount <= 0:
        return state

    new_current = damage(current, 0, damage_amount).new_current
    # A pool stored above a lowered roster maximum is brought back within it.
    maximum = get_max_hp(combatant, pool)
    if maximum > 0:
        new_current = min(new_current, maximum)
    if key in state.hp and pool in state.hp[key] and new_current == current:
        return state

    log_debug(
        f"{combatant.name} takes damage",
        {"pool": pool, "from": current, "to": new_current},
    )
    return _set_pool(state, key, pool, new_current)


def heal_pool(
    state: InitiativeState,
    combatant: Combatant,
    pool: str = MAIN_POOL,
    amount: Any = 0,
) -> InitiativeState:
    """
    Heals one hit point pool of a combatant.

    Args:
        state (InitiativeState): The current state.
        combatant (Combatant): The combatant.
        pool (str): The pool key, "main" for single pool combatants.
        amount (Any): The healing, normalized to an integer.

    Returns:
        InitiativeState: The new state. Hit points never exceed the pool's
        maximum.

    """
    key = combatant_key(combatant)
    current = state.hp.get(key, {}).get(pool, 0)
    healing = to_int(amount, "amount")
    if healing <= 0:
        return state

    result = heal(current, healing, get_max_hp(combatant, pool))
    new_current = max(0, result.new_current)
    if key in state.hp and pool in state.hp[key] and new_current == current:
        return state

    log_debug(
        f"{combatant.name} is healed",
        {"pool": pool, "from": current, "to": new_current},
    )
    return _set_pool(state, key, pool, new_current)


def next_turn(block: InitiativeBlock, state: InitiativeState) -> InitiativeState:
    """
    Moves the turn to the next combatant.

    When the move starts a new round, the consumables that reset on a new
    round are cleared in the returned state as well.

    Args:
        block (InitiativeBlock): The static roster.
        state (InitiativeState): The current state.

    Returns:
        InitiativeState: The new state.

    """
    sorted_items = sort_initiative_items(block.items, state.initiatives)
    advance = calculate_next_turn(sorted_items, state.active_index, state.round)

    if advance.next_active_index == state.active_index and advance.new_round == state.round:
        return state

    update: dict[str, Any] = {
        "active_index": advance.next_active_index,
        "round": advance.new_round,
    }
    if advance.round_incremented:
        update["consumables"] = reset_round_consumables(
            state.consumables, block.consumables
        )
        log_debug("New round", {"round": advance.new_round})

    log_debug(
        "Next turn",
        {"active": advance.next_active_index, "round": advance.new_round},
    )
    return state.model_copy(update=update)


def previous_turn(block: InitiativeBlock, state: InitiativeState) -> InitiativeState:
    """
    Moves the turn back to the previous combatant.

    Args:
        block (InitiativeBlock): The static roster.
        state (InitiativeState): The current state.

    Returns:
        InitiativeState: The new state.

    """
    sorted_items = sort_initiative_items(block.items, state.initiatives)
    rewind = calculate_previous_turn(sorted_items, state.active_index, state.round)

    if rewind.prev_active_index == state.active_index and rewind.new_round == state.round:
        return state

    log_debug(
        "Previous turn",
        {"active": rewind.prev_active_index, "round": rewind.new_round},
    )
    return state.model_copy(
        update={
            "active_index": rewind.prev_active_index,
            "round": rewind.new_round,
        }
    )


def set_consumable(
    state: InitiativeState,
    state_key: str,
    value: Any,
    uses: int | None = None,
) -> InitiativeState:
    """
    Records the usage of a consumable.

    Args:
        state (InitiativeState): The current state.
        state_key (str): The state key of the consumable.
        value (Any): The new usage count, normalized to an integer.
        uses (int | None): The available uses, used as an upper bound.

    Returns:
        InitiativeState: The new state.

    """
    usage = clamp_consumable_usage(to_int(value, state_key), uses)
    if state.consumables.get(state_key) == usage:
        return state

    consumables = dict(state.consumables)
    consumables[state_key] = usage
    return state.model_copy(update={"consumables": consumables})


def active_combatant(block: InitiativeBlock, state: InitiativeState) -> Combatant | None:
    """Returns the combatant holding the turn, or None."""
    if 0 <= state.active_index < len(block.items):
        return block.items[state.active_index]
    return None
