"""
Health module for the tracker.

Handles the hit point arithmetic shared by characters and initiative
combatants: healing capped at the maximum, damage absorbed by temporary hit
points first, non-stacking temporary hit points and the display helpers
built on top of the health percentage.
"""

from pydantic import BaseModel, ConfigDict, Field

from tracker.core.constants import HEALTHY_THRESHOLD, INJURED_THRESHOLD, HealthStatus


class HealResult(BaseModel):
    """Outcome of a healing computation."""

    model_config = ConfigDict(frozen=True)

    new_current: int = Field(
        description="The hit points after healing.",
    )
    reset_death_saves: bool = Field(
        default=False,
        description="True when healing brought the character back above 0 HP.",
    )


class DamageResult(BaseModel):
    """Outcome of a damage computation."""

    model_config = ConfigDict(frozen=True)

    new_current: int = Field(
        description="The hit points after damage.",
    )
    new_temporary: int = Field(
        description="The temporary hit points after damage.",
    )


def heal(current: int, amount: int, maximum: int) -> HealResult:
    """
    Heals a hit point pool, capping the result at the maximum.

    Args:
        current (int):
            The current hit points.
        amount (int):
            The amount to heal. Non-positive amounts change nothing.
        maximum (int):
            The maximum hit points of the pool.

    Returns:
        HealResult:
            The new hit points, and whether the death saves must be reset
            because the character went from 0 or less to above 0.

    """
    if amount <= 0:
        return HealResult(new_current=current, reset_death_saves=False)

    new_current = min(current + amount, maximum)
    return HealResult(
        new_current=new_current,
        reset_death_saves=current <= 0 and new_current > 0,
    )


def damage(current: int, temporary: int, amount: int) -> DamageResult:
    """
    Applies damage, consuming temporary hit points before real ones.

    Args:
        current (int):
            The current hit points.
        temporary (int):
            The current temporary hit points.
        amount (int):
            The damage to apply. Non-positive amounts change nothing.

    Returns:
        DamageResult:
            The new hit points and temporary hit points. Hit points never
            drop below 0.

    """
    if amount <= 0:
        return DamageResult(new_current=current, new_temporary=temporary)

    remaining = amount
    new_temporary = temporary

    # Temporary hit points absorb the damage first.
    if new_temporary > 0:
        if amount <= new_temporary:
            new_temporary -= amount
            remaining = 0
        else:
            remaining = amount - new_temporary
            new_temporary = 0

    new_current = current
    if remaining > 0:
        new_current = max(0, current - remaining)

    return DamageResult(new_current=new_current, new_temporary=new_temporary)


def apply_temporary(current_temp: int, new_amount: int) -> int:
    """
    Grants temporary hit points. They do not stack: the higher value is kept.

    Args:
        current_temp (int): The current temporary hit points.
        new_amount (int): The temporary hit points being granted.

    Returns:
        int: The resulting temporary hit points.

    """
    if new_amount <= 0:
        return current_temp
    return max(current_temp, new_amount)


def health_percentage(current: int, maximum: int) -> float:
    """
    Computes the health percentage of a pool for display.

    Args:
        current (int): The current hit points.
        maximum (int): The maximum hit points.

    Returns:
        float: The percentage clamped to [0, 100]; 0 for an empty pool.

    """
    if maximum <= 0:
        return 0.0
    return max(0.0, min(100.0, (current / maximum) * 100))


def health_status(current: int, maximum: int) -> HealthStatus:
    """
    Classifies a hit point pool for display.

    Args:
        current (int): The current hit points.
        maximum (int): The maximum hit points.

    Returns:
        HealthStatus: DEAD at 0 HP or less, INJURED at a third of the pool or
        less, HEALTHY at 90% or more, NORMAL otherwise.

    """
    if current <= 0:
        return HealthStatus.DEAD
    percent = health_percentage(current, maximum)
    if percent <= INJURED_THRESHOLD:
        return HealthStatus.INJURED
    if percent >= HEALTHY_THRESHOLD:
        return HealthStatus.HEALTHY
    return HealthStatus.NORMAL
