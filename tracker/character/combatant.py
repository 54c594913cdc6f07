"""
Static roster module for the tracker.

Defines the combatant records supplied by the roster provider, the
consumables declared for an encounter, and the initiative block that groups
them. These records never change during an encounter.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tracker.character.hit_dice import HitDice
from tracker.core.constants import MAIN_POOL


def normalize_hitdice(value: Any) -> Any:
    """A single hit dice mapping is accepted in place of a one-element list."""
    if isinstance(value, (dict, HitDice)):
        return [value]
    return value


class Combatant(BaseModel):
    """
    A participant of the initiative order.

    A combatant either has one hit point pool, given as a number, or is a
    group of identical creatures tracked separately, given as a mapping from
    the creature label to its maximum hit points.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(
        description="The name of the combatant.",
    )
    ac: int | None = Field(
        default=None,
        description="The armor class of the combatant.",
    )
    hp: int | dict[str, int] | None = Field(
        default=None,
        description="Maximum hit points, or maximum hit points by group member.",
    )
    hitdice: list[HitDice] | None = Field(
        default=None,
        description="The hit dice of the combatant, by die type.",
    )
    link: str | None = Field(
        default=None,
        description="Optional reference to the combatant's sheet.",
    )

    @field_validator("hitdice", mode="before")
    @classmethod
    def check_hitdice(cls, value: Any) -> Any:
        return normalize_hitdice(value)

    @property
    def is_group(self) -> bool:
        """True when the combatant tracks several creatures."""
        return isinstance(self.hp, dict) and len(self.hp) > 1

    def pool_capacities(self) -> dict[str, int]:
        """
        Returns the maximum hit points of every pool of the combatant.

        Returns:
            dict[str, int]:
                `{"main": hp}` for a single pool, a copy of the group mapping
                for a group, and an empty mapping when no hit points are set.

        """
        if isinstance(self.hp, int):
            return {MAIN_POOL: self.hp}
        if isinstance(self.hp, dict):
            return dict(self.hp)
        return {}


def get_max_hp(combatant: Combatant, pool: str = MAIN_POOL) -> int:
    """
    Returns the maximum hit points of one pool of a combatant.

    Args:
        combatant (Combatant): The combatant.
        pool (str): The pool key, "main" for single pool combatants.

    Returns:
        int: The maximum hit points, 0 when the pool is unknown.

    """
    if isinstance(combatant.hp, int):
        return combatant.hp
    if isinstance(combatant.hp, dict):
        return combatant.hp.get(pool, 0)
    return 0


class InitiativeConsumable(BaseModel):
    """A limited-use resource tracked alongside the initiative order."""

    model_config = ConfigDict(frozen=True)

    label: str = Field(
        default="",
        description="The label shown next to the boxes.",
    )
    state_key: str = Field(
        description="The key of the usage counter in the initiative state.",
    )
    uses: int = Field(
        default=1,
        description="The number of uses available.",
        ge=0,
    )
    reset_on_round: bool = Field(
        default=False,
        description="Whether the usage is cleared when a new round starts.",
    )


class InitiativeBlock(BaseModel):
    """The static roster of an encounter."""

    model_config = ConfigDict(frozen=True)

    items: list[Combatant] = Field(
        default_factory=list,
        description="The combatants, in roster order.",
    )
    consumables: list[InitiativeConsumable] = Field(
        default_factory=list,
        description="The consumables of the encounter.",
    )

    def find_consumable(self, state_key: str) -> InitiativeConsumable | None:
        """Returns the consumable declared with the given state key, if any."""
        for consumable in self.consumables:
            if consumable.state_key == state_key:
                return consumable
        return None
