"""
Tests for consumable usage helpers.
"""

from tracker.character.combatant import InitiativeConsumable
from tracker.combat.consumables import clamp_consumable_usage, reset_round_consumables


def test_reset_only_round_consumables():
    """
    Test that only consumables flagged for the round are cleared.
    """
    definitions = [
        InitiativeConsumable(state_key="legendary", uses=3, reset_on_round=True),
        InitiativeConsumable(state_key="lair", uses=1),
    ]
    consumables = {"legendary": 2, "lair": 1}
    reset = reset_round_consumables(consumables, definitions)
    assert reset == {"legendary": 0, "lair": 1}
    assert consumables == {"legendary": 2, "lair": 1}


def test_reset_adds_missing_round_consumables():
    """
    Test that a round consumable missing from the state is added at 0.
    """
    definitions = [InitiativeConsumable(state_key="reaction", reset_on_round=True)]
    assert reset_round_consumables({}, definitions) == {"reaction": 0}


def test_clamp_usage():
    """
    Test that usage is floored at 0 and capped at the available uses.
    """
    assert clamp_consumable_usage(-1) == 0
    assert clamp_consumable_usage(7) == 7
    assert clamp_consumable_usage(7, uses=3) == 3
    assert clamp_consumable_usage(2, uses=3) == 2
