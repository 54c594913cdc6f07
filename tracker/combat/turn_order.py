"""
Turn order module for the tracker.

Sorts the roster by initiative and moves the active turn forward or
backward through that order. Rounds are counted purely from the turn
pointer wrapping around the end (or the start) of the order.
"""

from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict, Field

from tracker.character.combatant import Combatant
from tracker.combat.identity import combatant_key
from tracker.core.constants import FIRST_ROUND, NO_ACTIVE_INDEX


class SortedInitiativeItem(BaseModel):
    """A combatant placed in the initiative order."""

    model_config = ConfigDict(frozen=True)

    combatant: Combatant = Field(
        description="The static combatant definition.",
    )
    index: int = Field(
        description="The position of the combatant in the roster.",
    )
    initiative: int = Field(
        default=0,
        description="The rolled initiative of the combatant.",
    )


class TurnAdvance(BaseModel):
    """Outcome of moving to the next turn."""

    model_config = ConfigDict(frozen=True)

    next_active_index: int = Field(
        description="Roster index of the new active combatant, -1 for none.",
    )
    new_round: int = Field(
        description="The round after the move.",
    )
    round_incremented: bool = Field(
        default=False,
        description="True when the move started a new round.",
    )


class TurnRewind(BaseModel):
    """Outcome of moving to the previous turn."""

    model_config = ConfigDict(frozen=True)

    prev_active_index: int = Field(
        description="Roster index of the new active combatant, -1 for none.",
    )
    new_round: int = Field(
        description="The round after the move.",
    )


def sort_initiative_items(
    items: Sequence[Combatant],
    initiatives: dict[str, int],
) -> list[SortedInitiativeItem]:
    """
    Orders the roster by initiative, highest first.

    Args:
        items (Sequence[Combatant]):
            The roster, in roster order.
        initiatives (dict[str, int]):
            The rolled initiatives by combatant key. Missing entries count
            as 0.

    Returns:
        list[SortedInitiativeItem]:
            The combatants sorted by descending initiative. Ties keep the
            roster order.

    """
    entries = [
        SortedInitiativeItem(
            combatant=combatant,
            index=index,
            initiative=initiatives.get(combatant_key(combatant), 0),
        )
        for index, combatant in enumerate(items)
    ]
    # sorted() is stable, so ties keep their roster order.
    return sorted(entries, key=lambda entry: entry.initiative, reverse=True)


def _position_of(sorted_items: Sequence[SortedInitiativeItem], active_index: int) -> int:
    """Returns the position of the active combatant in the order, or -1."""
    for position, entry in enumerate(sorted_items):
        if entry.index == active_index:
            return position
    return -1


def calculate_next_turn(
    sorted_items: Sequence[SortedInitiativeItem],
    current_active_index: int,
    current_round: int,
) -> TurnAdvance:
    """
    Computes the next active combatant.

    Args:
        sorted_items (Sequence[SortedInitiativeItem]):
            The initiative order.
        current_active_index (int):
            Roster index of the active combatant, -1 for none.
        current_round (int):
            The current round.

    Returns:
        TurnAdvance:
            The next combatant in the order. Past the last combatant the turn
            wraps to the first one and the round goes up by one. Starting an
            encounter (no active combatant) goes to the first combatant
            without changing the round.

    """
    if not sorted_items:
        return TurnAdvance(
            next_active_index=NO_ACTIVE_INDEX,
            new_round=current_round,
            round_incremented=False,
        )

    position = _position_of(sorted_items, current_active_index)

    if position == -1 or position == len(sorted_items) - 1:
        # Wrap around, only a turn that was running ends a round.
        round_incremented = position != -1
        return TurnAdvance(
            next_active_index=sorted_items[0].index,
            new_round=current_round + 1 if round_incremented else current_round,
            round_incremented=round_incremented,
        )

    return TurnAdvance(
        next_active_index=sorted_items[position + 1].index,
        new_round=current_round,
        round_incremented=False,
    )


def calculate_previous_turn(
    sorted_items: Sequence[SortedInitiativeItem],
    current_active_index: int,
    current_round: int,
) -> TurnRewind:
    """
    Computes the previous active combatant.

    Args:
        sorted_items (Sequence[SortedInitiativeItem]):
            The initiative order.
        current_active_index (int):
            Roster index of the active combatant, -1 for none.
        current_round (int):
            The current round.

    Returns:
        TurnRewind:
            The previous combatant in the order. Before the first combatant
            the turn wraps to the last one and, if a turn was running, the
            round goes down by one but never below the first round.

    """
    if not sorted_items:
        return TurnRewind(prev_active_index=NO_ACTIVE_INDEX, new_round=current_round)

    position = _position_of(sorted_items, current_active_index)

    if position == -1 or position == 0:
        new_round = current_round
        if position != -1 and current_round > FIRST_ROUND:
            new_round = current_round - 1
        return TurnRewind(
            prev_active_index=sorted_items[-1].index,
            new_round=new_round,
        )

    return TurnRewind(
        prev_active_index=sorted_items[position - 1].index,
        new_round=current_round,
    )
