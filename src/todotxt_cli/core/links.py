"""Wiki-link and Markdown link extraction from task descriptions."""

from __future__ import annotations

import re
from typing import NamedTuple

WIKILINK_RE = re.compile(r"\[\[([^\]]+)\]\]")
MARKDOWN_LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")


class InternalLink(NamedTuple):
    """``[[link]]`` or ``[[link|alias]]``."""

    link: str
    alias: str | None = None


class ExternalLink(NamedTuple):
    """``[text](url)``."""

    text: str
    url: str


def extract_internal_links(description: str) -> list[InternalLink]:
    """Return the first wiki-link in *description*.

    Only the first ``[[...]]`` is reported. A blank link name yields no
    result. The alias is everything after the first pipe, later pipes
    included.
    """
    match = WIKILINK_RE.search(description)
    if match is None:
        return []
    content = match.group(1)
    if not content.strip():
        return []
    link, sep, alias = content.partition("|")
    if not link.strip():
        return []
    return [InternalLink(link, alias if sep else None)]


def extract_external_links(description: str) -> list[ExternalLink]:
    """Return every Markdown link in *description*, in order. URLs are not validated."""
    return [
        ExternalLink(text, url) for text, url in MARKDOWN_LINK_RE.findall(description)
    ]
