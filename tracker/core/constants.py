"""
Constants and enumerations for the tracker.

Defines the sentinel values, default health settings, status thresholds and
the enumerations shared by the turn, health and death-save engines.
"""

from enum import Enum

# Active index stored when no combatant holds the turn.
NO_ACTIVE_INDEX = -1

# Pool key used for combatants with a single hit point pool.
MAIN_POOL = "main"

# Number of boxes in each death saving throw row.
DEATH_SAVE_SLOTS = 3

# The first round of every encounter.
FIRST_ROUND = 1

# Defaults for a static health definition.
DEFAULT_HEALTH = 6
DEFAULT_HEALTH_LABEL = "Hit Points"
DEFAULT_HEALTH_RESET_EVENT = "long-rest"

# Health percentage thresholds used by the status classification.
INJURED_THRESHOLD = 33
HEALTHY_THRESHOLD = 90


class NiceEnum(Enum):
    """An enumeration that provides a nicer string representation."""

    def __str__(self) -> str:
        return self.name

    @property
    def display_name(self) -> str:
        return self.name.lower().capitalize()


class HealthStatus(NiceEnum):
    """Coarse health classification of a combatant, used for display."""

    DEAD = "dead"
    INJURED = "injured"
    NORMAL = "normal"
    HEALTHY = "healthy"

    @property
    def emoji(self) -> str:
        """Returns the emoji associated with this health status."""
        return {
            HealthStatus.DEAD: "💀",
            HealthStatus.INJURED: "🩸",
            HealthStatus.NORMAL: "❤️",
            HealthStatus.HEALTHY: "💚",
        }.get(self, "❔")

    @property
    def color(self) -> str:
        """Returns the color string associated with this health status."""
        return {
            HealthStatus.DEAD: "dim red",
            HealthStatus.INJURED: "bold red",
            HealthStatus.NORMAL: "yellow",
            HealthStatus.HEALTHY: "bold green",
        }.get(self, "dim white")

    @property
    def colored_name(self) -> str:
        return self.colorize(self.display_name)

    def colorize(self, message: str) -> str:
        """Applies health status color formatting to a message."""
        return f"[{self.color}]{message}[/]"


class DeathSaveKind(NiceEnum):
    """Identifies one of the two death saving throw rows."""

    SUCCESS = "success"
    FAILURE = "failure"

    @property
    def emoji(self) -> str:
        """Returns the emoji used for a checked box of this row."""
        return {
            DeathSaveKind.SUCCESS: "✅",
            DeathSaveKind.FAILURE: "❌",
        }.get(self, "❔")
