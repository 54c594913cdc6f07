"""
Utilities module for the tracker.

Provides common utility functions and helpers, including console printing
with rich formatting and the numeric normalization shared by every engine.
"""

from __future__ import annotations

import re
from typing import Any

from catchery import log_warning
from rich.console import Console
from rich.rule import Rule

# Initialize the rich console.
_console = Console(markup=True, width=120, force_terminal=True, force_jupyter=False)

# Leading integer of a string, the way a form field is read.
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def cprint(*args: Any, **kwargs: Any) -> None:
    """
    Custom print function to handle colored output.

    Args:
        *args: Arguments to pass to the console print function.
        **kwargs: Keyword arguments to pass to the console print function.

    """
    _console.print(*args, **kwargs)


def crule(*args: Any, **kwargs: Any) -> None:
    """
    Custom print function to handle colored output with a rule.

    Args:
        *args: Arguments to pass to the Rule constructor.
        **kwargs: Keyword arguments to pass to the Rule constructor.

    """
    _console.print(Rule(*args, **kwargs))


def ccapture(content: Any) -> str:
    """
    Captures console output as a string.

    Args:
        content (Any): The content to capture.

    Returns:
        str: The captured output as a string.

    """
    with _console.capture() as capture:
        _console.print(content, markup=True, end="")
    return capture.get()


def to_int(value: Any, name: str = "value") -> int:
    """
    Normalizes a loosely typed numeric input to an integer.

    Missing values read as zero. Strings are read up to the first non-digit
    character, so "12" and "12 hp" both give 12. Anything that cannot be
    read as a number is logged and treated as zero.

    Args:
        value (Any): The raw input.
        name (str): Name of the input, used in the warning context.

    Returns:
        int: The normalized integer.

    """
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            log_warning(
                f"Non-finite number for '{name}', using 0",
                {"name": name, "value": value},
            )
            return 0
        return int(value)
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        if match:
            return int(match.group(1))
    log_warning(
        f"Non-numeric input for '{name}', using 0",
        {"name": name, "value": value, "type": type(value).__name__},
    )
    return 0


def clamp(value: int, lower: int, upper: int) -> int:
    """
    Restricts a value to the closed range [lower, upper].

    Args:
        value (int): The value to restrict.
        lower (int): The lower bound.
        upper (int): The upper bound.

    Returns:
        int: The restricted value.

    """
    return max(lower, min(value, upper))


def make_bar(current: int, maximum: int, length: int = 10, color: str = "white") -> str:
    """
    Creates a visual progress bar representation.

    Args:
        current (int): The current value.
        maximum (int): The maximum value.
        length (int): The length of the bar in characters. Defaults to 10.
        color (str): The color for the filled portion. Defaults to "white".

    Returns:
        str: A formatted progress bar string.

    """
    # Compute the filled part of the bar, an empty pool shows an empty bar.
    filled = 0
    if maximum > 0:
        filled = clamp(int((current / maximum) * length), 0, length)
    # Compute the empty part of the bar.
    empty = length - filled
    # Start by creating the bar with the filled part.
    bar = f"[{color}]" + "▮" * filled
    # If there is an empty part, add it to the bar.
    if empty > 0:
        bar += "[dim white]" + "▯" * empty + "[/]"
    bar += "[/]"
    return bar
