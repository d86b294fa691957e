"""Recurrence (``rec:``) parsing and next-occurrence generation."""

from __future__ import annotations

import calendar
import re
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Literal

from todotxt_cli.models.task import Task

from .dates import date_to_string, string_to_date
from .due import DUE_TAG
from .parser import extract_contexts, extract_projects, serialize_task
from .tags import remove_tag, remove_tag_token, set_tag_token
from .threshold import THRESHOLD_TAG

RecurrenceUnit = Literal["d", "w", "m", "y"]

RECURRENCE_TAG = "rec"
PRIORITY_TAG = "pri"

# Unit letter -> (singular, plural) for human-readable descriptions.
RECURRENCE_UNITS: dict[str, tuple[str, str]] = {
    "d": ("day", "days"),
    "w": ("week", "weeks"),
    "m": ("month", "months"),
    "y": ("year", "years"),
}

_RECURRENCE_RE = re.compile(r"^(\+?)(\d+)([dwmy])$")


@dataclass(frozen=True)
class RecurrencePattern:
    """Parsed ``rec:`` value.

    Attributes:
        value: Interval count
        unit: d(ay), w(eek), m(onth) or y(ear)
        strict: Leading ``+``; next date counts from the due date instead of
            the completion date
    """

    value: int
    unit: RecurrenceUnit
    strict: bool = False


def parse_recurrence_tag(value: str | None) -> RecurrencePattern | None:
    """Parse a recurrence value such as ``1d``, ``+2w`` or ``rec:3m``.

    Args:
        value: Tag value, with or without the ``rec:`` prefix

    Returns:
        RecurrencePattern, or None if the syntax is not recognized
    """
    if not value:
        return None
    if value.startswith(f"{RECURRENCE_TAG}:"):
        value = value[len(RECURRENCE_TAG) + 1 :]
    match = _RECURRENCE_RE.fullmatch(value)
    if match is None:
        return None
    strict, number, unit = match.groups()
    if int(number) < 1:
        return None
    return RecurrencePattern(value=int(number), unit=unit, strict=strict == "+")  # type: ignore[arg-type]


def describe_recurrence(pattern: RecurrencePattern) -> str:
    """Convert a pattern back to a human-readable description.

    Args:
        pattern: Parsed recurrence pattern

    Returns:
        Text such as "every day", "every 2 weeks (strict)"
    """
    singular, plural = RECURRENCE_UNITS[pattern.unit]
    text = f"every {singular}" if pattern.value == 1 else f"every {pattern.value} {plural}"
    if pattern.strict:
        text += " (strict)"
    return text


def _add_months(base: date, months: int) -> date:
    """Add *months*, clamping to the last day of the target month on overflow."""
    total = base.month - 1 + months
    year = base.year + total // 12
    month = total % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(base.day, last_day))


def add_interval(base: date, pattern: RecurrencePattern) -> date:
    """Return *base* moved forward by one recurrence interval."""
    if pattern.unit == "d":
        return base + timedelta(days=pattern.value)
    if pattern.unit == "w":
        return base + timedelta(weeks=pattern.value)
    if pattern.unit == "m":
        return _add_months(base, pattern.value)
    return _add_months(base, pattern.value * 12)


def calculate_next_due_date(
    pattern: RecurrencePattern,
    base_date: str,
    current_due_date: str | None = None,
) -> str:
    """Compute the next occurrence as YYYY-MM-DD.

    Non-strict patterns count from *base_date* (the completion date). Strict
    patterns count from *current_due_date* when it is a valid date.
    """
    reference = string_to_date(base_date)
    if pattern.strict:
        reference = string_to_date(current_due_date) or reference
    if reference is None:
        raise ValueError(f"Invalid base date: {base_date!r}")
    return date_to_string(add_interval(reference, pattern))


def create_recurring_task(task: Task, completion_date: str) -> Task | None:
    """Build the next occurrence of a recurring task.

    Returns None when the task has no valid ``rec:`` tag. The new task is
    incomplete, created on *completion_date*, has no priority and no ``pri:``
    tag, and its ``due:``/``t:`` tags are moved forward. The lead time between
    threshold and due date is preserved.
    """
    pattern = parse_recurrence_tag(task.tags.get(RECURRENCE_TAG))
    if pattern is None or string_to_date(completion_date) is None:
        return None

    old_due = string_to_date(task.tags.get(DUE_TAG))
    old_threshold = string_to_date(task.tags.get(THRESHOLD_TAG))

    next_due = calculate_next_due_date(
        pattern, completion_date, task.tags.get(DUE_TAG)
    )
    description = set_tag_token(task.description, DUE_TAG, next_due)
    tags = {**remove_tag(task.tags, PRIORITY_TAG), DUE_TAG: next_due}

    if THRESHOLD_TAG in task.tags:
        lead = (old_due - old_threshold) if old_due and old_threshold else timedelta(0)
        next_threshold = date_to_string(string_to_date(next_due) - lead)
        description = set_tag_token(description, THRESHOLD_TAG, next_threshold)
        tags[THRESHOLD_TAG] = next_threshold

    description = remove_tag_token(description, PRIORITY_TAG)

    recurring = Task(
        completed=False,
        priority=None,
        completion_date=None,
        creation_date=completion_date,
        description=description,
        projects=extract_projects(description),
        contexts=extract_contexts(description),
        tags=tags,
    )
    return recurring.model_copy(update={"raw": serialize_task(recurring)})
