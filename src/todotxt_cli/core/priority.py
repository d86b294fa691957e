"""Priority options and validation."""

from __future__ import annotations

import re
import string
from typing import NamedTuple

_PRIORITY_RE = re.compile(r"^[A-Z]$")

PRIORITY_COLORS = {
    "A": "#ff4444",
    "B": "#ff9944",
    "C": "#ffdd44",
}
DEFAULT_PRIORITY_COLOR = "#cccccc"


class PriorityOption(NamedTuple):
    label: str
    value: str | None


def generate_priority_options(none_label: str = "None") -> list[PriorityOption]:
    """Return the "no priority" option followed by (A) through (Z)."""
    options = [PriorityOption(none_label, None)]
    options.extend(PriorityOption(f"({letter})", letter) for letter in string.ascii_uppercase)
    return options


def is_priority_valid(priority: str | None) -> bool:
    """None (no priority) or a single uppercase letter."""
    if priority is None:
        return True
    return _PRIORITY_RE.match(priority) is not None


def get_priority_color(priority: str | None) -> str:
    """Display color for a priority; everything below C shares one grey."""
    if priority is None:
        return DEFAULT_PRIORITY_COLOR
    return PRIORITY_COLORS.get(priority, DEFAULT_PRIORITY_COLOR)
