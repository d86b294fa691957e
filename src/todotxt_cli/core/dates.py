"""Date helpers and the single clock seam of the engine.

Everything in ``todotxt_cli.core`` that needs "today" either takes it as an
explicit argument or, for the mutation shortcuts, asks ``get_today()``.
Tests swap the provider with ``set_today_provider``.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from datetime import date, datetime

DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

_today_provider: Callable[[], date] = date.today


def set_today_provider(provider: Callable[[], date] | None) -> None:
    """Replace the clock used by ``get_today``; None restores the system clock."""
    global _today_provider
    _today_provider = provider if provider is not None else date.today


def get_today() -> date:
    """Return the current local date from the active provider."""
    return _today_provider()


def get_today_string() -> str:
    """Return today as YYYY-MM-DD."""
    return date_to_string(get_today())


def as_date(value: date | datetime) -> date:
    """Drop the time-of-day part of *value*."""
    if isinstance(value, datetime):
        return value.date()
    return value


def date_to_string(value: date | datetime) -> str:
    """Format a date as YYYY-MM-DD."""
    return as_date(value).isoformat()


def string_to_date(value: str | None) -> date | None:
    """Parse a YYYY-MM-DD string into a date.

    Returns None unless the string has exactly the 4-2-2 digit shape and names
    a real calendar day (``2026-02-30`` and ``2026-13-01`` are rejected).
    """
    if not value or not DATE_RE.fullmatch(value):
        return None
    year, month, day = (int(part) for part in value.split("-"))
    try:
        return date(year, month, day)
    except ValueError:
        return None


def is_valid_date_string(value: str | None) -> bool:
    """Return True if *value* is a calendar-valid YYYY-MM-DD string."""
    return string_to_date(value) is not None


def is_same_date_string(first: str | None, second: str | None) -> bool:
    """Compare two date strings; None on either side is never equal."""
    if first is None or second is None:
        return False
    return first == second
