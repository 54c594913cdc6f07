"""
Tests for the hit point arithmetic of the health engine.
"""

import pytest
from tracker.combat.health import (
    DamageResult,
    HealResult,
    apply_temporary,
    damage,
    health_percentage,
    health_status,
    heal,
)
from tracker.core.constants import HealthStatus


@pytest.mark.parametrize("amount", [0, -1, -20])
def test_non_positive_amounts_are_no_ops(amount):
    """
    Test that damage, healing and temporary hit points ignore non-positive amounts.
    """
    assert heal(4, amount, 10) == HealResult(new_current=4, reset_death_saves=False)
    assert damage(4, 2, amount) == DamageResult(new_current=4, new_temporary=2)
    assert apply_temporary(3, amount) == 3


def test_heal_from_zero():
    """
    Test that healing from 0 HP restores hit points and asks for a death save reset.
    """
    result = heal(0, 5, 10)
    assert result.new_current == 5
    assert result.reset_death_saves


def test_heal_is_capped_at_maximum():
    """
    Test that healing never exceeds the maximum hit points.
    """
    result = heal(8, 5, 10)
    assert result.new_current == 10
    assert not result.reset_death_saves


def test_heal_does_not_reset_death_saves_when_conscious():
    """
    Test that the death save reset only happens when crossing from 0 HP.
    """
    assert not heal(1, 5, 10).reset_death_saves
    assert not heal(10, 5, 10).reset_death_saves


def test_heal_that_stays_at_zero_does_not_reset_death_saves():
    """
    Test that healing a pool whose maximum is 0 keeps the death saves.
    """
    result = heal(0, 5, 0)
    assert result.new_current == 0
    assert not result.reset_death_saves


def test_damage_consumes_temporary_first():
    """
    Test that temporary hit points absorb damage before real hit points.
    """
    assert damage(10, 3, 5) == DamageResult(new_current=8, new_temporary=0)


def test_damage_fully_absorbed_by_temporary():
    """
    Test that damage not exceeding temporary hit points leaves real hit points alone.
    """
    assert damage(10, 5, 5) == DamageResult(new_current=10, new_temporary=0)
    assert damage(10, 5, 2) == DamageResult(new_current=10, new_temporary=3)


def test_damage_floors_at_zero():
    """
    Test that hit points never become negative.
    """
    assert damage(10, 0, 15) == DamageResult(new_current=0, new_temporary=0)


def test_temporary_hit_points_do_not_stack():
    """
    Test that the higher of the old and new temporary hit points is kept.
    """
    assert apply_temporary(0, 5) == 5
    assert apply_temporary(5, 3) == 5
    assert apply_temporary(5, 8) == 8


def test_health_percentage_is_clamped():
    """
    Test the display percentage, including an empty pool.
    """
    assert health_percentage(5, 10) == 50.0
    assert health_percentage(15, 10) == 100.0
    assert health_percentage(-3, 10) == 0.0
    assert health_percentage(5, 0) == 0.0


@pytest.mark.parametrize(
    "current, maximum, expected",
    [
        (0, 10, HealthStatus.DEAD),
        (-2, 10, HealthStatus.DEAD),
        (3, 10, HealthStatus.INJURED),
        (5, 10, HealthStatus.NORMAL),
        (9, 10, HealthStatus.HEALTHY),
        (10, 10, HealthStatus.HEALTHY),
        (4, 0, HealthStatus.INJURED),
    ],
)
def test_health_status(current, maximum, expected):
    """
    Test the coarse health classification used by the sheets.
    """
    assert health_status(current, maximum) == expected
