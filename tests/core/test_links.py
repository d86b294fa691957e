"""Tests for wiki-link and Markdown link extraction."""

from __future__ import annotations

from todotxt_cli.core.links import (
    ExternalLink,
    InternalLink,
    extract_external_links,
    extract_internal_links,
)


class TestInternalLinks:
    def test_plain(self):
        assert extract_internal_links("see [[Project Plan]]") == [InternalLink("Project Plan")]

    def test_alias(self):
        assert extract_internal_links("[[notes/plan|the plan]]") == [
            InternalLink("notes/plan", "the plan")
        ]

    def test_alias_keeps_later_pipes(self):
        assert extract_internal_links("[[a|b|c]]") == [InternalLink("a", "b|c")]

    def test_only_first_link(self):
        assert extract_internal_links("[[one]] and [[two]]") == [InternalLink("one")]

    def test_blank_name(self):
        assert extract_internal_links("[[   ]]") == []
        assert extract_internal_links("[[|alias]]") == []

    def test_none(self):
        assert extract_internal_links("no links") == []


class TestExternalLinks:
    def test_all_links(self):
        text = "read [docs](https://example.com/docs) and [notes](file:///tmp/x)"
        assert extract_external_links(text) == [
            ExternalLink("docs", "https://example.com/docs"),
            ExternalLink("notes", "file:///tmp/x"),
        ]

    def test_none(self):
        assert extract_external_links("[not a link] (x)") == []
