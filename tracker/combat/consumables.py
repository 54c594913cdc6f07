"""
Consumable reset coordination for the tracker.

Consumables declared with `reset_on_round` are cleared whenever the turn
order starts a new round. The reset is applied by the same transition that
increments the round, never as a separate step.
"""

from collections.abc import Sequence

from tracker.character.combatant import InitiativeConsumable


def reset_round_consumables(
    consumables: dict[str, int],
    definitions: Sequence[InitiativeConsumable],
) -> dict[str, int]:
    """
    Clears the usage of every consumable that resets on a new round.

    Args:
        consumables (dict[str, int]):
            The usage counters by state key.
        definitions (Sequence[InitiativeConsumable]):
            The declared consumables.

    Returns:
        dict[str, int]:
            A new mapping with the round-scoped counters set to 0.

    """
    new_consumables = dict(consumables)
    for consumable in definitions:
        if consumable.reset_on_round:
            new_consumables[consumable.state_key] = 0
    return new_consumables


def clamp_consumable_usage(value: int, uses: int | None = None) -> int:
    """
    Restricts a usage counter to the boxes available.

    Args:
        value (int): The requested usage.
        uses (int | None): The available uses, None when unknown.

    Returns:
        int: The usage floored at 0 and capped at `uses` when given.

    """
    value = max(0, value)
    if uses is not None:
        value = min(value, uses)
    return value
