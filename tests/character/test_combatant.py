"""
Tests for the static roster records.
"""

import pytest
from tracker.character.combatant import (
    Combatant,
    InitiativeBlock,
    InitiativeConsumable,
    get_max_hp,
)
from tracker.character.hit_dice import HitDice
from tracker.core.constants import MAIN_POOL


@pytest.fixture
def bandits():
    return Combatant(name="Bandits", ac=12, hp={"Bandit 1": 11, "Bandit 2": 8})


def test_single_pool(bandits):
    """
    Test the pools of a combatant with one hit point total.
    """
    knight = Combatant(name="Knight", ac=18, hp=52)
    assert not knight.is_group
    assert knight.pool_capacities() == {MAIN_POOL: 52}
    assert get_max_hp(knight) == 52


def test_group_pools(bandits):
    """
    Test the pools of a group of creatures.
    """
    assert bandits.is_group
    assert bandits.pool_capacities() == {"Bandit 1": 11, "Bandit 2": 8}
    assert get_max_hp(bandits, "Bandit 2") == 8
    assert get_max_hp(bandits, "Bandit 3") == 0


def test_pool_capacities_are_copies(bandits):
    """
    Test that the returned capacities can be changed without touching the roster.
    """
    capacities = bandits.pool_capacities()
    capacities["Bandit 1"] = 0
    assert bandits.hp["Bandit 1"] == 11


def test_combatant_without_hit_points():
    """
    Test that a combatant without hit points has no pools.
    """
    commoner = Combatant(name="Commoner")
    assert commoner.pool_capacities() == {}
    assert get_max_hp(commoner) == 0
    assert not commoner.is_group


def test_single_hit_dice_mapping_is_wrapped():
    """
    Test that a single hit dice mapping is accepted in place of a list.
    """
    cleric = Combatant(name="Cleric", hp=27, hitdice={"dice": "d8", "value": 3})
    assert cleric.hitdice == [HitDice(dice="d8", value=3)]


def test_find_consumable():
    """
    Test the lookup of a consumable by state key.
    """
    legendary = InitiativeConsumable(label="Legendary Actions", state_key="legendary", uses=3)
    block = InitiativeBlock(consumables=[legendary])
    assert block.find_consumable("legendary") == legendary
    assert block.find_consumable("lair") is None


def test_consumable_defaults():
    """
    Test the defaults of a consumable definition.
    """
    consumable = InitiativeConsumable(state_key="reaction")
    assert consumable.label == ""
    assert consumable.uses == 1
    assert not consumable.reset_on_round
