"""
Death saving throw tracking for the tracker.

Hit dice and death saves are both shown as a row of boxes where checking a
box checks every box before it and unchecking one clears every box after
it. The used count of a row is therefore always a contiguous prefix.
"""

from tracker.core.constants import DEATH_SAVE_SLOTS


def toggle_used_count(current_used: int, index: int) -> int:
    """
    Toggles the box at the given index of a cascading row.

    Args:
        current_used (int):
            Number of boxes currently checked.
        index (int):
            Zero-based index of the toggled box.

    Returns:
        int:
            The new number of checked boxes: `index` when the box was
            checked (it and every later box are cleared), `index + 1`
            otherwise (it and every earlier box are checked).

    """
    if index < 0:
        return current_used
    if index < current_used:
        return index
    return index + 1


def update_death_save_successes(current_successes: int, index: int) -> int:
    """Toggles a box of the successes row."""
    return min(toggle_used_count(current_successes, index), DEATH_SAVE_SLOTS)


def update_death_save_failures(current_failures: int, index: int) -> int:
    """Toggles a box of the failures row."""
    return min(toggle_used_count(current_failures, index), DEATH_SAVE_SLOTS)


def is_dead(successes: int, failures: int) -> bool:
    """
    Checks whether the death saving throws ended in death.

    Args:
        successes (int): Number of successful saves.
        failures (int): Number of failed saves.

    Returns:
        bool: True with three failures and fewer than three successes.

    """
    return failures >= DEATH_SAVE_SLOTS and successes < DEATH_SAVE_SLOTS


def is_death_saves_complete(successes: int, failures: int) -> bool:
    """Checks whether either row is full, i.e. the sequence is resolved."""
    return successes >= DEATH_SAVE_SLOTS or failures >= DEATH_SAVE_SLOTS


def should_track_death_saves(current_hp: int) -> bool:
    """Death saves only matter while the character is at 0 HP or less."""
    return current_hp <= 0
