"""Saved filter presets.

All operations return new lists and never modify the list they are given.
"""

from __future__ import annotations

import random
import string
import time
from typing import NamedTuple

from todotxt_cli.models.filter import FilterPreset, FilterState

_BASE36 = string.digits + string.ascii_lowercase


class PresetChange(NamedTuple):
    presets: list[FilterPreset]
    success: bool
    preset_id: str | None = None


def _now_ms() -> int:
    return int(time.time() * 1000)


def _to_base36(number: int) -> str:
    if number == 0:
        return "0"
    digits = []
    while number:
        number, rem = divmod(number, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def generate_preset_id() -> str:
    suffix = "".join(random.choices(_BASE36, k=6))
    return f"preset-{_to_base36(_now_ms())}-{suffix}"


def create_preset(
    presets: list[FilterPreset], name: str, filter_state: FilterState
) -> PresetChange:
    """Add a preset named *name* saving a copy of *filter_state*."""
    now = _now_ms()
    existing = {preset.id for preset in presets}
    preset_id = generate_preset_id()
    while preset_id in existing:
        preset_id = generate_preset_id()
    preset = FilterPreset(
        id=preset_id,
        name=name,
        filter_state=filter_state.model_copy(deep=True),
        created_at=now,
        updated_at=now,
    )
    return PresetChange([*presets, preset], True, preset_id)


def update_preset(
    presets: list[FilterPreset],
    preset_id: str,
    name: str | None = None,
    filter_state: FilterState | None = None,
) -> PresetChange:
    """Rename and/or replace the state of a preset. Unknown ids fail."""
    for index, preset in enumerate(presets):
        if preset.id != preset_id:
            continue
        update: dict = {"updated_at": _now_ms()}
        if name is not None:
            update["name"] = name
        if filter_state is not None:
            update["filter_state"] = filter_state.model_copy(deep=True)
        updated = list(presets)
        updated[index] = preset.model_copy(update=update)
        return PresetChange(updated, True, preset_id)
    return PresetChange(list(presets), False)


def delete_preset(presets: list[FilterPreset], preset_id: str) -> PresetChange:
    remaining = [preset for preset in presets if preset.id != preset_id]
    return PresetChange(remaining, len(remaining) != len(presets), preset_id)


def get_preset_by_id(presets: list[FilterPreset], preset_id: str) -> FilterPreset | None:
    return next((preset for preset in presets if preset.id == preset_id), None)
