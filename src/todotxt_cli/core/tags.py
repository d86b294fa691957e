"""key:value tag helpers.

Two layers live here: immutable operations on the tag map itself, and the
matching edits on the literal ``key:value`` tokens inside a description so the
two never drift apart.
"""

from __future__ import annotations

import re

# Lazy key: the first colon splits, so "a:b:c" is key "a" with value "b:c".
TAG_RE = re.compile(r"(\S+?):(\S+)")


def extract_tags(text: str) -> dict[str, str]:
    """Collect ``key:value`` tags from *text*.

    Matches starting with ``+`` or ``@`` are projects/contexts and are skipped
    as a whole, so ``+proj:x`` does not register a tag. Later duplicates
    overwrite earlier ones.
    """
    tags: dict[str, str] = {}
    for match in TAG_RE.finditer(text):
        if match.group(0)[0] in "+@":
            continue
        tags[match.group(1)] = match.group(2)
    return tags


def add_tag(tags: dict[str, str], key: str, value: str) -> dict[str, str]:
    """Return a copy of *tags* with *key* set to *value*."""
    return {**tags, key: value}


def remove_tag(tags: dict[str, str], key: str) -> dict[str, str]:
    """Return a copy of *tags* without *key*."""
    return {k: v for k, v in tags.items() if k != key}


def update_tag(tags: dict[str, str], key: str, value: str) -> dict[str, str]:
    """Return a copy of *tags* with *key* updated to *value*."""
    return add_tag(tags, key, value)


def parse_tag_input(text: str) -> tuple[str, str] | None:
    """Parse user input like ``"key: value"`` into a (key, value) pair.

    Returns None when there is no colon or either side is blank.
    """
    trimmed = text.strip()
    if not trimmed or ":" not in trimmed:
        return None
    key, value = trimmed.split(":", 1)
    key, value = key.strip(), value.strip()
    if not key or not value:
        return None
    return key, value


def serialize_tags(tags: dict[str, str]) -> str:
    """Render tags as ``"k1:v1 k2:v2"``."""
    return " ".join(f"{key}:{value}" for key, value in tags.items())


def _token_re(key: str) -> re.Pattern[str]:
    return re.compile(rf"(^|\s+){re.escape(key)}:\S+(?=\s|$)")


def has_tag_token(description: str, key: str) -> bool:
    """Return True if *description* contains a literal ``key:...`` token."""
    return _token_re(key).search(description) is not None


def remove_tag_token(description: str, key: str) -> str:
    """Remove every literal ``key:...`` token from *description*."""
    return _token_re(key).sub("", description).strip()


def set_tag_token(description: str, key: str, value: str) -> str:
    """Replace any ``key:...`` token in *description* with ``key:value`` at the end."""
    stripped = remove_tag_token(description, key)
    token = f"{key}:{value}"
    return f"{stripped} {token}" if stripped else token
