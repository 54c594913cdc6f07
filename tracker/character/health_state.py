"""
Character health module for the tracker.

Defines the static health definition of a character, its persisted health
state, and the reducers that turn a state and an action into a new state.
Every reducer returns the very same state object when the action changes
nothing, so callers can skip persisting it.
"""

from typing import Any

from catchery import log_warning
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_serializer,
    field_validator,
)

from tracker.character.combatant import normalize_hitdice
from tracker.character.hit_dice import (
    HitDice,
    HitDiceUsage,
    MultiHitDiceUsage,
    SingleHitDiceUsage,
    default_hit_dice_usage,
    dump_hit_dice_usage,
    migrate_hit_dice_usage,
    parse_hit_dice_usage,
)
from tracker.character.hit_dice import toggle_hit_die as toggle_hit_dice_usage
from tracker.combat.death_saves import (
    update_death_save_failures,
    update_death_save_successes,
)
from tracker.combat.health import apply_temporary, damage, heal
from tracker.core.constants import (
    DEATH_SAVE_SLOTS,
    DEFAULT_HEALTH,
    DEFAULT_HEALTH_LABEL,
    DEFAULT_HEALTH_RESET_EVENT,
    DeathSaveKind,
)
from tracker.core.logging import log_debug
from tracker.core.utils import clamp, to_int


class ResetConfig(BaseModel):
    """An event that restores a resource, e.g. a long rest."""

    model_config = ConfigDict(frozen=True)

    event: str = Field(
        description="The name of the event, e.g. 'long-rest'.",
    )
    amount: int | None = Field(
        default=None,
        description="How much is restored, None for a full reset.",
    )


def normalize_reset_config(value: Any) -> list[Any]:
    """
    Normalizes a reset declaration to a list of reset entries.

    Args:
        value (Any):
            An event name, a single entry, or a list mixing both.

    Returns:
        list[Any]:
            A list of entries accepted by `ResetConfig`.

    """
    if value is None:
        return [{"event": DEFAULT_HEALTH_RESET_EVENT}]
    if not isinstance(value, list):
        value = [value]
    return [{"event": entry} if isinstance(entry, str) else entry for entry in value]


class HealthBlock(BaseModel):
    """The static health definition of a character."""

    model_config = ConfigDict(frozen=True)

    label: str = Field(
        default=DEFAULT_HEALTH_LABEL,
        description="The label of the health card.",
    )
    state_key: str | None = Field(
        default=None,
        description="The key under which the health state is persisted.",
    )
    health: int = Field(
        default=DEFAULT_HEALTH,
        description="The maximum hit points.",
    )
    hitdice: list[HitDice] | None = Field(
        default=None,
        description="The hit dice of the character, by die type.",
    )
    death_saves: bool = Field(
        default=True,
        description="Whether death saving throws are tracked.",
    )
    reset_on: list[ResetConfig] = Field(
        default_factory=lambda: [ResetConfig(event=DEFAULT_HEALTH_RESET_EVENT)],
        description="The events that restore the character's health.",
    )

    @field_validator("health", mode="before")
    @classmethod
    def check_health(cls, value: Any) -> int:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return to_int(value, "health")
        log_warning(
            f"Unresolved health value, using {DEFAULT_HEALTH}",
            {"health": value},
        )
        return DEFAULT_HEALTH

    @field_validator("hitdice", mode="before")
    @classmethod
    def check_hitdice(cls, value: Any) -> Any:
        return normalize_hitdice(value)

    @field_validator("reset_on", mode="before")
    @classmethod
    def check_reset_on(cls, value: Any) -> list[Any]:
        return normalize_reset_config(value)


class HealthState(BaseModel):
    """
    The persisted health of a character.

    Serialized with `model_dump(by_alias=True)`, the state uses the camelCase
    keys of the persisted format and stores `hitdiceUsed` as a bare number or
    a bare mapping.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    current: int = Field(
        default=0,
        description="The current hit points.",
    )
    temporary: int = Field(
        default=0,
        description="The temporary hit points.",
    )
    death_save_successes: int = Field(
        default=0,
        alias="deathSaveSuccesses",
        description="Checked boxes of the death save successes row.",
    )
    death_save_failures: int = Field(
        default=0,
        alias="deathSaveFailures",
        description="Checked boxes of the death save failures row.",
    )
    hitdice_used: HitDiceUsage = Field(
        default_factory=SingleHitDiceUsage,
        alias="hitdiceUsed",
        description="The used hit dice, as one counter or one per die type.",
    )

    @field_validator("current", mode="before")
    @classmethod
    def check_current(cls, value: Any) -> int:
        return max(0, to_int(value, "current"))

    @field_validator("temporary", mode="before")
    @classmethod
    def check_temporary(cls, value: Any) -> int:
        return max(0, to_int(value, "temporary"))

    @field_validator("death_save_successes", "death_save_failures", mode="before")
    @classmethod
    def check_death_saves(cls, value: Any, info: ValidationInfo) -> int:
        return clamp(to_int(value, str(info.field_name)), 0, DEATH_SAVE_SLOTS)

    @field_validator("hitdice_used", mode="before")
    @classmethod
    def check_hitdice_used(cls, value: Any) -> dict[str, Any]:
        return parse_hit_dice_usage(value)

    @field_serializer("hitdice_used")
    def serialize_hitdice_used(
        self, usage: SingleHitDiceUsage | MultiHitDiceUsage
    ) -> int | dict[str, int]:
        return dump_hit_dice_usage(usage)


def default_health_state(block: HealthBlock) -> HealthState:
    """
    Builds the initial health state of a character.

    Args:
        block (HealthBlock): The static health definition.

    Returns:
        HealthState: Full health, no temporary hit points, no hit dice used
        and no death saves.

    """
    return HealthState(
        current=block.health,
        temporary=0,
        death_save_successes=0,
        death_save_failures=0,
        hitdice_used=default_hit_dice_usage(block.hitdice),
    )


def migrate_health_state(state: HealthState, block: HealthBlock) -> HealthState:
    """
    Adapts a stored health state to a changed health definition.

    Args:
        state (HealthState): The stored state.
        block (HealthBlock): The current static health definition.

    Returns:
        HealthState: The migrated state, or the same object when the hit dice
        usage already matches the definition.

    """
    usage = migrate_hit_dice_usage(state.hitdice_used, block.hitdice)
    if usage is state.hitdice_used:
        return state
    log_debug(
        "Migrated hit dice usage",
        {"from": state.hitdice_used.kind, "to": usage.kind},
    )
    return state.model_copy(update={"hitdice_used": usage})


def heal_health(state: HealthState, amount: Any, max_health: int) -> HealthState:
    """
    Heals a character.

    Args:
        state (HealthState): The current state.
        amount (Any): The amount to heal, normalized to an integer.
        max_health (int): The maximum hit points of the character.

    Returns:
        HealthState: The new state. Healing from 0 HP or less to above 0
        clears both death save rows.

    """
    result = heal(state.current, to_int(amount, "amount"), max_health)
    if result.new_current == state.current and not result.reset_death_saves:
        return state

    update: dict[str, Any] = {"current": result.new_current}
    if result.reset_death_saves:
        update["death_save_successes"] = 0
        update["death_save_failures"] = 0

    log_debug(
        "Healed",
        {"from": state.current, "to": result.new_current},
    )
    return state.model_copy(update=update)


def damage_health(state: HealthState, amount: Any) -> HealthState:
    """
    Damages a character, consuming temporary hit points first.

    Args:
        state (HealthState): The current state.
        amount (Any): The damage, normalized to an integer.

    Returns:
        HealthState: The new state.

    """
    result = damage(state.current, state.temporary, to_int(amount, "amount"))
    if result.new_current == state.current and result.new_temporary == state.temporary:
        return state

    log_debug(
        "Damaged",
        {
            "current": f"{state.current}->{result.new_current}",
            "temporary": f"{state.temporary}->{result.new_temporary}",
        },
    )
    return state.model_copy(
        update={
            "current": result.new_current,
            "temporary": result.new_temporary,
        }
    )


def add_temporary_hp(state: HealthState, amount: Any) -> HealthState:
    """
    Grants temporary hit points. The higher of the old and new value is kept.

    Args:
        state (HealthState): The current state.
        amount (Any): The temporary hit points granted.

    Returns:
        HealthState: The new state.

    """
    new_temporary = apply_temporary(state.temporary, to_int(amount, "amount"))
    if new_temporary == state.temporary:
        return state
    return state.model_copy(update={"temporary": new_temporary})


def toggle_hit_die(state: HealthState, dice_type: str | None, index: int) -> HealthState:
    """
    Toggles a hit die box.

    Args:
        state (HealthState): The current state.
        dice_type (str | None): The die type of the row, None for the single row.
        index (int): Zero-based index of the box.

    Returns:
        HealthState: The new state.

    """
    usage = toggle_hit_dice_usage(state.hitdice_used, dice_type, index)
    if usage == state.hitdice_used:
        return state
    return state.model_copy(update={"hitdice_used": usage})


def toggle_death_save(state: HealthState, kind: DeathSaveKind | str, index: int) -> HealthState:
    """
    Toggles a death save box. Toggles are accepted at any hit points.

    Args:
        state (HealthState): The current state.
        kind (DeathSaveKind | str): The row, "success" or "failure", in any
            letter case.
        index (int): Zero-based index of the box.

    Returns:
        HealthState: The new state. An unknown row leaves it unchanged.

    """
    if isinstance(kind, str):
        try:
            kind = DeathSaveKind(kind.lower())
        except ValueError:
            log_warning(
                f"Unknown death save row '{kind}'",
                {"kind": kind, "index": index},
            )
            return state
    if kind == DeathSaveKind.SUCCESS:
        successes = update_death_save_successes(state.death_save_successes, index)
        if successes == state.death_save_successes:
            return state
        return state.model_copy(update={"death_save_successes": successes})

    failures = update_death_save_failures(state.death_save_failures, index)
    if failures == state.death_save_failures:
        return state
    return state.model_copy(update={"death_save_failures": failures})


def should_reset_on_event(reset_on: list[ResetConfig], event: str) -> bool:
    """Checks whether one of the reset entries listens to the given event."""
    return any(config.event == event for config in reset_on)


def reset_health(state: HealthState, block: HealthBlock, event: str) -> HealthState:
    """
    Applies a reset event, e.g. a long rest, to a character's health.

    Args:
        state (HealthState): The current state.
        block (HealthBlock): The static health definition.
        event (str): The name of the event.

    Returns:
        HealthState: The same state when the character does not reset on
        the event, otherwise full health with no temporary hit points, no
        hit dice used and no death saves.

    """
    if not should_reset_on_event(block.reset_on, event):
        return state
    log_debug(
        "Health reset",
        {"event": event, "state_key": block.state_key},
    )
    return default_health_state(block)
