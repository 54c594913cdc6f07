"""
Hit dice module for the tracker.

Defines the static hit dice definition and the usage record of a character.
Usage comes in two shapes: a single counter for characters with one die
type, and one counter per die type for multiclass characters. Persisted
state stores them as a bare number or a bare mapping; in memory they are a
union discriminated on `kind`.
"""

from typing import Annotated, Any, Literal, TypeAlias

from pydantic import BaseModel, ConfigDict, Field

from tracker.combat.death_saves import toggle_used_count
from tracker.core.utils import to_int


class HitDice(BaseModel):
    """A pool of hit dice of one type, e.g. three d10."""

    model_config = ConfigDict(frozen=True)

    dice: str = Field(
        description="The die type, e.g. 'd10'.",
    )
    value: int = Field(
        default=1,
        description="How many dice of this type the character has.",
        ge=0,
    )


class SingleHitDiceUsage(BaseModel):
    """Used hit dice of a character with a single die type."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["single"] = "single"
    used: int = Field(
        default=0,
        description="Number of hit dice used.",
    )


class MultiHitDiceUsage(BaseModel):
    """Used hit dice of a character with several die types."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["multi"] = "multi"
    used: dict[str, int] = Field(
        default_factory=dict,
        description="Number of hit dice used, by die type.",
    )


HitDiceUsage: TypeAlias = Annotated[
    SingleHitDiceUsage | MultiHitDiceUsage,
    Field(discriminator="kind"),
]


def parse_hit_dice_usage(raw: Any) -> dict[str, Any]:
    """
    Converts a persisted usage value to the tagged form.

    Args:
        raw (Any):
            A number (single die type), a mapping of die type to count, or an
            already tagged usage.

    Returns:
        dict[str, Any]:
            The tagged representation accepted by `HitDiceUsage`.

    """
    if isinstance(raw, (SingleHitDiceUsage, MultiHitDiceUsage)):
        return raw.model_dump()
    if isinstance(raw, dict):
        if raw.get("kind") in ("single", "multi") and "used" in raw:
            return raw
        return {
            "kind": "multi",
            "used": {
                str(dice): to_int(count, f"hitdiceUsed.{dice}")
                for dice, count in raw.items()
            },
        }
    return {"kind": "single", "used": to_int(raw, "hitdiceUsed")}


def dump_hit_dice_usage(usage: SingleHitDiceUsage | MultiHitDiceUsage) -> int | dict[str, int]:
    """Returns the persisted form of a usage: a number or a mapping."""
    if usage.kind == "single":
        return usage.used
    return dict(usage.used)


def default_hit_dice_usage(hitdice: list[HitDice] | None) -> SingleHitDiceUsage | MultiHitDiceUsage:
    """
    Builds the initial usage for the given hit dice definitions.

    Args:
        hitdice (list[HitDice] | None): The hit dice of the character.

    Returns:
        SingleHitDiceUsage | MultiHitDiceUsage:
            One zeroed counter per die type when several types are defined,
            a single zeroed counter otherwise.

    """
    if hitdice and len(hitdice) > 1:
        return MultiHitDiceUsage(used={hd.dice: 0 for hd in hitdice})
    return SingleHitDiceUsage()


def migrate_hit_dice_usage(
    usage: SingleHitDiceUsage | MultiHitDiceUsage,
    hitdice: list[HitDice] | None,
) -> SingleHitDiceUsage | MultiHitDiceUsage:
    """
    Adapts a stored usage to the current hit dice definitions.

    When a character gains a second die type the single counter is spread
    over the types in declaration order, each type taking at most its own
    dice. When it is back to a single type, that type's counter is kept.

    Args:
        usage (SingleHitDiceUsage | MultiHitDiceUsage): The stored usage.
        hitdice (list[HitDice] | None): The current hit dice definitions.

    Returns:
        SingleHitDiceUsage | MultiHitDiceUsage: The adapted usage, or the
        same object when no migration is needed.

    """
    if not hitdice:
        return usage

    if len(hitdice) > 1 and usage.kind == "single":
        used: dict[str, int] = {hd.dice: 0 for hd in hitdice}
        remaining = usage.used
        for hd in hitdice:
            if remaining <= 0:
                break
            taken = min(remaining, hd.value)
            used[hd.dice] = taken
            remaining -= taken
        return MultiHitDiceUsage(used=used)

    if len(hitdice) == 1 and usage.kind == "multi":
        return SingleHitDiceUsage(used=usage.used.get(hitdice[0].dice, 0))

    return usage


def toggle_hit_die(
    usage: SingleHitDiceUsage | MultiHitDiceUsage,
    dice_type: str | None,
    index: int,
) -> SingleHitDiceUsage | MultiHitDiceUsage:
    """
    Toggles one hit die box.

    Args:
        usage (SingleHitDiceUsage | MultiHitDiceUsage):
            The current usage.
        dice_type (str | None):
            The die type of the toggled row, None for the single row.
        index (int):
            Zero-based index of the toggled box.

    Returns:
        SingleHitDiceUsage | MultiHitDiceUsage:
            The new usage. A die type that does not match the shape of the
            usage leaves it unchanged.

    """
    if usage.kind == "single":
        if dice_type is not None:
            return usage
        return SingleHitDiceUsage(used=toggle_used_count(usage.used, index))

    if dice_type is None:
        return usage
    used = dict(usage.used)
    used[dice_type] = toggle_used_count(used.get(dice_type, 0), index)
    return MultiHitDiceUsage(used=used)


def total_hit_dice(hitdice: list[HitDice] | None) -> int:
    """Returns the total number of hit dice across every die type."""
    return sum(hd.value for hd in hitdice or [])
