"""Task filters and the advanced search query language.

Advanced search queries are whitespace separated terms that must all match:

    Buy store|online -groceries /call (mom|dad)/ project:Home due:2026-01-01..2026-01-31

* ``a|b`` matches either alternative (``\\|`` is a literal pipe)
* ``-term`` must not match
* ``/re/`` is a case-insensitive regular expression and may contain spaces
* ``project:``, ``context:``, ``priority:`` and ``due:`` match structured fields
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from todotxt_cli.models.filter import FilterState, StatusMode
from todotxt_cli.models.task import Task

from .due import DUE_TAG
from .sorting import sort_todos

NO_PRIORITY = "none"
ALL = "all"

_OR_SPLIT_RE = re.compile(r"(?<!\\)\|")
_FIELDS = ("project", "context", "priority", "due")


def filter_by_priority(tasks: list[Task], priority: str | None) -> list[Task]:
    """Keep tasks with exactly *priority*; None keeps tasks without one."""
    return [task for task in tasks if task.priority == priority]


def filter_by_status(tasks: list[Task], status: StatusMode) -> list[Task]:
    if status == "active":
        return [task for task in tasks if not task.completed]
    if status == "completed":
        return [task for task in tasks if task.completed]
    return list(tasks)


def _contains(task: Task, needle: str) -> bool:
    needle = needle.lower()
    return (
        needle in task.description.lower()
        or any(needle in project.lower() for project in task.projects)
        or any(needle in context.lower() for context in task.contexts)
    )


def filter_by_search(tasks: list[Task], keyword: str) -> list[Task]:
    """Case-insensitive substring search over description, projects and contexts."""
    if keyword == "":
        return list(tasks)
    return [task for task in tasks if _contains(task, keyword)]


# ---------------------------------------------------------------------------
# Advanced search
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SearchTerm:
    """One whitespace separated term of an advanced query."""

    text: str
    negated: bool = False
    is_regex: bool = False


def _is_regex_literal(text: str) -> bool:
    return len(text) > 2 and text.startswith("/") and text.endswith("/")


def tokenize_query(query: str) -> list[SearchTerm]:
    """Split *query* into terms, keeping ``/.../`` regex terms whole.

    An unterminated regex is split on whitespace like ordinary text.
    """
    terms: list[SearchTerm] = []
    pos = 0
    length = len(query)

    while pos < length:
        if query[pos].isspace():
            pos += 1
            continue

        negated = False
        start = pos
        if query[pos] == "-" and pos + 1 < length and query[pos + 1] == "/":
            negated = True
            start = pos + 1

        if query[start] == "/":
            end = query.find("/", start + 1)
            if end != -1:
                text = query[start : end + 1]
                if _is_regex_literal(text):
                    terms.append(SearchTerm(text, negated=negated, is_regex=True))
                    pos = end + 1
                    continue

        end = pos
        while end < length and not query[end].isspace():
            end += 1
        token = query[pos:end]
        pos = end
        if token.startswith("-") and len(token) > 1:
            terms.append(SearchTerm(token[1:], negated=True))
        else:
            terms.append(SearchTerm(token))

    return terms


def _match_regex(task: Task, literal: str) -> bool:
    try:
        pattern = re.compile(literal[1:-1], re.IGNORECASE)
    except re.error:
        return _contains(task, literal)
    return (
        pattern.search(task.description) is not None
        or any(pattern.search(project) for project in task.projects)
        or any(pattern.search(context) for context in task.contexts)
    )


def _match_field(task: Task, field: str, value: str) -> bool:
    if field == "project":
        return any(project.lower() == value.lower() for project in task.projects)
    if field == "context":
        return any(context.lower() == value.lower() for context in task.contexts)
    if field == "priority":
        if value.lower() == NO_PRIORITY:
            return task.priority is None
        return task.priority == value
    # due
    due = task.tags.get(DUE_TAG)
    if due is None:
        return False
    start, sep, end = value.partition("..")
    if sep and start and end:
        return start <= due <= end
    return due == value


def _match_single(task: Task, text: str) -> bool:
    if _is_regex_literal(text):
        return _match_regex(task, text)
    field, sep, value = text.partition(":")
    if sep and value and field.lower() in _FIELDS:
        return _match_field(task, field.lower(), value)
    return _contains(task, text)


def _match_term(task: Task, term: SearchTerm) -> bool:
    if term.is_regex:
        return _match_regex(task, term.text)
    alternatives = [
        alt.replace("\\|", "|") for alt in _OR_SPLIT_RE.split(term.text) if alt
    ]
    if not alternatives:
        return True
    return any(_match_single(task, alt) for alt in alternatives)


def filter_by_advanced_search(tasks: list[Task], query: str) -> list[Task]:
    """Filter *tasks* with an advanced search query.

    Every term must hold: positive terms must match and negated terms must
    not. An empty or whitespace-only query keeps every task.
    """
    terms = tokenize_query(query.strip())
    if not terms:
        return list(tasks)
    return [
        task
        for task in tasks
        if all(_match_term(task, term) != term.negated for term in terms)
    ]


def apply_filter_state(tasks: list[Task], state: FilterState) -> list[Task]:
    """Apply status, priority, search and sort settings of a view, in that order."""
    result = filter_by_status(tasks, state.status)
    if state.priority != ALL:
        result = filter_by_priority(
            result, None if state.priority == NO_PRIORITY else state.priority
        )
    result = filter_by_advanced_search(result, state.search)
    if state.sort == "completion":
        result = sort_todos(result)
    return result
