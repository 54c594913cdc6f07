"""
Console sheets for the tracker.

Renders the initiative order and a character's health as rich markup, for
command line use and debugging. The markup is built by `format_*` functions
and printed by the matching `print_*` functions.
"""

from tracker.character.health_state import HealthBlock, HealthState
from tracker.character.hit_dice import total_hit_dice
from tracker.combat.death_saves import should_track_death_saves
from tracker.combat.encounter import Encounter
from tracker.combat.health import health_status
from tracker.combat.identity import combatant_key
from tracker.combat.initiative import InitiativeState
from tracker.combat.turn_order import SortedInitiativeItem
from tracker.core.constants import DEATH_SAVE_SLOTS, DeathSaveKind
from tracker.core.utils import cprint, crule, make_bar


def format_pool(current: int, maximum: int) -> str:
    """
    Formats one hit point pool as a colored bar followed by the numbers.

    Args:
        current (int): The current hit points.
        maximum (int): The maximum hit points.

    Returns:
        str: The formatted pool.

    """
    status = health_status(current, maximum)
    bar = make_bar(current, maximum, color=status.color)
    return f"{bar} {status.colorize(f'{current}/{maximum}')}"


def format_initiative_row(
    entry: SortedInitiativeItem,
    state: InitiativeState,
    is_active: bool = False,
) -> list[str]:
    """
    Formats one combatant of the initiative order.

    Args:
        entry (SortedInitiativeItem): The combatant and its initiative.
        state (InitiativeState): The current state.
        is_active (bool): Whether the combatant holds the turn.

    Returns:
        list[str]: The header line, followed by one line per pool for groups.

    """
    combatant = entry.combatant
    marker = "[bold yellow]▶[/]" if is_active else " "
    line = f"{marker} 🎲 {entry.initiative:3}  [bold]{combatant.name}[/]"
    if combatant.ac is not None:
        line += f"  🛡️ {combatant.ac}"

    current_hp = state.hp.get(combatant_key(combatant), {})
    capacities = combatant.pool_capacities()

    if not combatant.is_group:
        for pool, maximum in capacities.items():
            line += f"  {format_pool(current_hp.get(pool, 0), maximum)}"
        return [line]

    lines = [line]
    for pool, maximum in capacities.items():
        lines.append(f"      {pool:<12} {format_pool(current_hp.get(pool, 0), maximum)}")
    return lines


def print_initiative_tracker(encounter: Encounter, state: InitiativeState) -> None:
    """
    Prints the initiative order, the round and the consumables.

    Args:
        encounter (Encounter): The encounter.
        state (InitiativeState): The current state.

    """
    crule(f"⏱ Round {state.round}", style="cyan")
    for entry in encounter.sorted_items(state):
        for line in format_initiative_row(entry, state, entry.index == state.active_index):
            cprint(line)
    for consumable in encounter.block.consumables:
        used = state.consumables.get(consumable.state_key, 0)
        boxes = "▮" * used + "▯" * max(0, consumable.uses - used)
        label = consumable.label or consumable.state_key
        cprint(f"    {label}: {boxes}")


def format_health_state(state: HealthState, block: HealthBlock) -> list[str]:
    """
    Formats a character's health card.

    Args:
        state (HealthState): The current health state.
        block (HealthBlock): The static health definition.

    Returns:
        list[str]: The lines of the card.

    """
    line = f"[bold]{block.label}[/] {format_pool(state.current, block.health)}"
    if state.temporary > 0:
        line += f" [cyan]+{state.temporary} temp[/]"
    lines = [line]

    if block.hitdice:
        usage = state.hitdice_used
        if usage.kind == "single":
            lines.append(
                f"    Hit dice ({block.hitdice[0].dice}): "
                f"{usage.used}/{total_hit_dice(block.hitdice)} used"
            )
        else:
            for hd in block.hitdice:
                lines.append(f"    Hit dice ({hd.dice}): {usage.used.get(hd.dice, 0)}/{hd.value} used")

    if block.death_saves and should_track_death_saves(state.current):
        for kind, checked in (
            (DeathSaveKind.SUCCESS, state.death_save_successes),
            (DeathSaveKind.FAILURE, state.death_save_failures),
        ):
            boxes = kind.emoji * checked + "▯" * (DEATH_SAVE_SLOTS - checked)
            lines.append(f"    {kind.display_name}: {boxes}")
    return lines


def print_health_state(state: HealthState, block: HealthBlock) -> None:
    """Prints a character's health card."""
    for line in format_health_state(state, block):
        cprint(line)
