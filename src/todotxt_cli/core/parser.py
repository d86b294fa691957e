"""todo.txt line parser and serializer.

A line is consumed left to right in a fixed order: completion marker,
priority, up to two dates, then the description. Projects, contexts and tags
are lifted from the whole original line and stay embedded in the description.

Document-level helpers work on whole file contents: they parse, change the
task list functionally and join the lines back with ``\\n``.
"""

from __future__ import annotations

import re

from todotxt_cli.models.task import Task

from .tags import extract_tags

COMPLETION_MARKER = "x "
PRIORITY_RE = re.compile(r"\(([A-Z])\)\s+")
DATE_PREFIX_RE = re.compile(r"(\d{4}-\d{2}-\d{2})\s+")
PROJECT_RE = re.compile(r"(?:^|\s)\+(\S+)")
CONTEXT_RE = re.compile(r"(?:^|\s)@(\S+)")


class _LineCursor:
    """Offset into a line with one-shot token consumers."""

    def __init__(self, line: str):
        self.line = line
        self.pos = 0

    def consume_literal(self, literal: str) -> bool:
        if self.line.startswith(literal, self.pos):
            self.pos += len(literal)
            return True
        return False

    def consume(self, pattern: re.Pattern[str]) -> str | None:
        match = pattern.match(self.line, self.pos)
        if match is None:
            return None
        self.pos = match.end()
        return match.group(1)

    def rest(self) -> str:
        return self.line[self.pos :]


def extract_projects(text: str) -> list[str]:
    """Return ``+project`` names in order of appearance."""
    return PROJECT_RE.findall(text)


def extract_contexts(text: str) -> list[str]:
    """Return ``@context`` names in order of appearance."""
    return CONTEXT_RE.findall(text)


def parse_line(line: str) -> Task:
    """Parse one todo.txt line into a Task.

    Malformed fragments (``(a)``, ``2026/01/01``, ``X done``) are never
    errors; they stay in the description as literal text.
    """
    cursor = _LineCursor(line)

    completed = cursor.consume_literal(COMPLETION_MARKER)
    priority = cursor.consume(PRIORITY_RE)

    completion_date: str | None = None
    creation_date: str | None = None
    first = cursor.consume(DATE_PREFIX_RE)
    if first is not None:
        second = cursor.consume(DATE_PREFIX_RE)
        if second is not None:
            completion_date, creation_date = first, second
        elif completed:
            completion_date = first
        else:
            creation_date = first

    return Task(
        completed=completed,
        priority=priority,
        completion_date=completion_date,
        creation_date=creation_date,
        description=cursor.rest(),
        projects=extract_projects(line),
        contexts=extract_contexts(line),
        tags=extract_tags(line),
        raw=line,
    )


def serialize_task(task: Task) -> str:
    """Render a Task as a todo.txt line.

    The description is written verbatim; projects, contexts and tags are
    already embedded in it and are not re-derived from the structured fields.
    """
    parts: list[str] = []
    if task.completed:
        parts.append("x ")
    if task.priority:
        parts.append(f"({task.priority}) ")
    if task.completed and task.completion_date:
        parts.append(f"{task.completion_date} ")
    if task.creation_date:
        parts.append(f"{task.creation_date} ")
    parts.append(task.description)
    return "".join(parts)


def with_serialized_raw(task: Task) -> Task:
    """Return *task* with ``raw`` set to its own serialized line."""
    return task.model_copy(update={"raw": serialize_task(task)})


def _line_of(task: Task) -> str:
    return task.raw if task.raw else serialize_task(task)


def join_tasks(tasks: list[Task]) -> str:
    """Join tasks back into document text, one line each, no trailing newline."""
    return "\n".join(_line_of(task) for task in tasks)


def parse_all(text: str) -> list[Task]:
    """Parse document text, skipping blank and whitespace-only lines."""
    return [parse_line(line) for line in text.split("\n") if line.strip()]


def update_todo_in_list(tasks: list[Task], index: int, task: Task) -> str:
    """Replace ``tasks[index]`` with *task* and return the document text.

    An out-of-range index leaves the list as it is.
    """
    if not 0 <= index < len(tasks):
        return join_tasks(tasks)
    updated = list(tasks)
    updated[index] = with_serialized_raw(task)
    return join_tasks(updated)


def update_at_index(text: str, index: int, task: Task) -> str:
    """Replace the task at *index* in *text*; out of range returns *text*."""
    tasks = parse_all(text)
    if not 0 <= index < len(tasks):
        return text
    return update_todo_in_list(tasks, index, task)


def append_task(text: str, task: Task) -> str:
    """Append *task* as the last line of *text*."""
    tasks = parse_all(text)
    tasks.append(with_serialized_raw(task))
    return join_tasks(tasks)


def delete_at_index(text: str, index: int) -> str:
    """Remove the task at *index* from *text*; out of range returns *text*."""
    tasks = parse_all(text)
    if not 0 <= index < len(tasks):
        return text
    del tasks[index]
    return join_tasks(tasks)
