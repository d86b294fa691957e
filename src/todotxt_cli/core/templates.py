"""Task template placeholders."""

from __future__ import annotations

import re
from datetime import date, timedelta

from .dates import date_to_string, get_today

_TODAY_RE = re.compile(r"\{\{today\}\}", re.IGNORECASE)
_TOMORROW_RE = re.compile(r"\{\{tomorrow\}\}", re.IGNORECASE)


def expand_placeholders(template: str, today: date | None = None) -> str:
    """Replace ``{{today}}`` and ``{{tomorrow}}`` (any case) with dates."""
    if today is None:
        today = get_today()
    result = _TODAY_RE.sub(date_to_string(today), template)
    return _TOMORROW_RE.sub(date_to_string(today + timedelta(days=1)), result)
