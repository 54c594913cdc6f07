"""
Character module for the tracker.

This module holds the static roster models supplied by the caller and the
health state of individual characters, including hit dice usage.
"""

from .combatant import (
    Combatant,
    InitiativeBlock,
    InitiativeConsumable,
    get_max_hp,
)
from .health_state import (
    HealthBlock,
    HealthState,
    ResetConfig,
    add_temporary_hp,
    damage_health,
    default_health_state,
    heal_health,
    migrate_health_state,
    reset_health,
    toggle_death_save,
    toggle_hit_die,
)
from .hit_dice import (
    HitDice,
    HitDiceUsage,
    MultiHitDiceUsage,
    SingleHitDiceUsage,
)

__all__ = [
    # Import from combatant.py
    "Combatant",
    "InitiativeBlock",
    "InitiativeConsumable",
    "get_max_hp",
    # Import from health_state.py
    "HealthBlock",
    "HealthState",
    "ResetConfig",
    "add_temporary_hp",
    "damage_health",
    "default_health_state",
    "heal_health",
    "migrate_health_state",
    "reset_health",
    "toggle_death_save",
    "toggle_hit_die",
    # Import from hit_dice.py
    "HitDice",
    "HitDiceUsage",
    "MultiHitDiceUsage",
    "SingleHitDiceUsage",
]
