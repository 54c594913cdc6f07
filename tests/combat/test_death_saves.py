"""
Tests for the cascading box toggles and the death save rules.
"""

import pytest
from tracker.combat.death_saves import (
    is_dead,
    is_death_saves_complete,
    should_track_death_saves,
    toggle_used_count,
    update_death_save_failures,
    update_death_save_successes,
)


@pytest.mark.parametrize("used", range(0, 6))
@pytest.mark.parametrize("index", range(0, 6))
def test_toggle_rule(used, index):
    """
    Test that a checked box clears itself and every later box, and an
    unchecked box checks itself and every earlier box.
    """
    expected = index if index < used else index + 1
    assert toggle_used_count(used, index) == expected


def test_toggle_twice_is_not_always_identity():
    """
    Test that toggling the same box twice only restores the count at the boundary.
    """
    assert toggle_used_count(toggle_used_count(3, 2), 2) == 3
    assert toggle_used_count(toggle_used_count(3, 0), 0) == 1


def test_toggle_negative_index_is_no_op():
    """
    Test that a negative box index changes nothing.
    """
    assert toggle_used_count(2, -1) == 2


def test_death_save_rows_are_capped():
    """
    Test that death save rows never exceed three checked boxes.
    """
    assert update_death_save_successes(0, 2) == 3
    assert update_death_save_successes(0, 5) == 3
    assert update_death_save_failures(2, 7) == 3
    assert update_death_save_failures(3, 0) == 0


@pytest.mark.parametrize("failures", [0, 1, 2])
@pytest.mark.parametrize("successes", [0, 1, 2, 3])
def test_not_dead_below_three_failures(successes, failures):
    """
    Test that fewer than three failures is never death.
    """
    assert not is_dead(successes, failures)


@pytest.mark.parametrize("successes, expected", [(0, True), (2, True), (3, False)])
def test_dead_with_three_failures(successes, expected):
    """
    Test that three failures is death unless three successes were reached.
    """
    assert is_dead(successes, 3) == expected


def test_death_saves_complete():
    """
    Test that the sequence is resolved once either row is full.
    """
    assert is_death_saves_complete(3, 0)
    assert is_death_saves_complete(0, 3)
    assert not is_death_saves_complete(2, 2)


def test_should_track_death_saves():
    """
    Test that death saves only matter at 0 HP or less.
    """
    assert should_track_death_saves(0)
    assert should_track_death_saves(-1)
    assert not should_track_death_saves(1)
