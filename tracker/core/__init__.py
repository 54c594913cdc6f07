"""
Core module for the tracker.

This module contains the constants, logging setup, input normalization and
console helpers shared by the rest of the tracker.
"""

from .constants import (
    DEATH_SAVE_SLOTS,
    FIRST_ROUND,
    MAIN_POOL,
    NO_ACTIVE_INDEX,
    DeathSaveKind,
    HealthStatus,
)
from .logging import setup_logging
from .utils import ccapture, clamp, cprint, crule, make_bar, to_int

__all__ = [
    # Import from constants.py
    "DEATH_SAVE_SLOTS",
    "FIRST_ROUND",
    "MAIN_POOL",
    "NO_ACTIVE_INDEX",
    "DeathSaveKind",
    "HealthStatus",
    # Import from logging.py
    "setup_logging",
    # Import from utils.py
    "ccapture",
    "clamp",
    "cprint",
    "crule",
    "make_bar",
    "to_int",
]
