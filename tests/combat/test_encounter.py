"""
Tests for the encounter context.
"""

import pytest
from tracker.character.combatant import Combatant, InitiativeBlock, InitiativeConsumable
from tracker.combat.encounter import Encounter
from tracker.core.constants import MAIN_POOL, NO_ACTIVE_INDEX


@pytest.fixture
def encounter():
    return Encounter(
        InitiativeBlock(
            items=[
                Combatant(name="Rogue", ac=15, hp=22),
                Combatant(name="Ogre", ac=11, hp=59),
            ],
            consumables=[
                InitiativeConsumable(
                    label="Reactions",
                    state_key="reactions",
                    uses=2,
                    reset_on_round=True,
                ),
            ],
        )
    )


def test_new_state(encounter):
    """
    Test that a new encounter starts in round 1 with nobody active.
    """
    state = encounter.new_state()
    assert state.round == 1
    assert state.active_index == NO_ACTIVE_INDEX
    assert state.hp[encounter.key_of(1)] == {MAIN_POOL: 59}


def test_actions_by_roster_index(encounter):
    """
    Test a short fight driven through roster indices.
    """
    state = encounter.new_state()
    state = encounter.set_initiative(state, 0, 17)
    state = encounter.set_initiative(state, 1, 8)

    state = encounter.next_turn(state)
    assert encounter.active_combatant(state).name == "Rogue"

    state = encounter.damage(state, 1, 20)
    assert state.hp[encounter.key_of(1)][MAIN_POOL] == 39

    state = encounter.next_turn(state)
    assert encounter.active_combatant(state).name == "Ogre"

    state = encounter.damage(state, 0, 13)
    state = encounter.heal(state, 0, 4)
    assert state.hp[encounter.key_of(0)][MAIN_POOL] == 13

    state = encounter.previous_turn(state)
    assert encounter.active_combatant(state).name == "Rogue"


def test_out_of_range_index_is_no_op(encounter):
    """
    Test that an unknown roster index leaves the state unchanged.
    """
    state = encounter.new_state()
    assert encounter.combatant(5) is None
    assert encounter.key_of(-1) is None
    assert encounter.set_initiative(state, 5, 10) is state
    assert encounter.damage(state, 5, 10) is state
    assert encounter.heal(state, -1, 10) is state


def test_set_consumable_is_capped_by_uses(encounter):
    """
    Test that consumable usage is capped at the declared uses.
    """
    state = encounter.set_consumable(encounter.new_state(), "reactions", 5)
    assert state.consumables["reactions"] == 2


def test_unknown_consumable_is_no_op(encounter):
    """
    Test that an undeclared consumable leaves the state unchanged.
    """
    state = encounter.new_state()
    assert encounter.set_consumable(state, "spell_slots", 1) is state


def test_round_resets_consumables(encounter):
    """
    Test that the reactions are cleared when the second round starts.
    """
    state = encounter.new_state()
    state = encounter.set_initiative(state, 0, 17)
    state = encounter.next_turn(state)
    state = encounter.next_turn(state)
    state = encounter.set_consumable(state, "reactions", 1)
    state = encounter.next_turn(state)
    assert state.round == 2
    assert state.consumables["reactions"] == 0


def test_encounters_are_independent():
    """
    Test that two encounters never share state.
    """
    first = Encounter(InitiativeBlock(items=[Combatant(name="Knight", hp=52)]))
    second = Encounter(InitiativeBlock(items=[Combatant(name="Bandit", hp=11)]))
    first_state = first.next_turn(first.new_state())
    second_state = second.new_state()
    assert first_state.active_index == 0
    assert second_state.active_index == NO_ACTIVE_INDEX
    assert set(first_state.hp).isdisjoint(second_state.hp)


def test_reset_starts_over(encounter):
    """
    Test that a reset returns the initial state.
    """
    state = encounter.next_turn(encounter.new_state())
    assert encounter.reset() == encounter.new_state()
    assert state != encounter.reset()
