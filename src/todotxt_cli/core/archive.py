"""Moving completed tasks to ``done.txt``."""

from __future__ import annotations

import os
from typing import NamedTuple

from todotxt_cli.models.task import Task

from .parser import parse_all, serialize_task

ARCHIVE_FILE_NAME = "done.txt"
TODOTXT_EXTENSIONS = (".txt", ".todotxt")


class ArchiveResult(NamedTuple):
    completed_tasks: list[Task]
    remaining_content: str


def archive_completed_tasks(text: str) -> ArchiveResult:
    """Split *text* into completed tasks and the content left behind.

    The remaining content keeps the original lines and ends with a newline,
    or is ``""`` when every task was completed.
    """
    tasks = parse_all(text)
    completed = [task for task in tasks if task.completed]
    remaining = "\n".join(task.raw for task in tasks if not task.completed)
    return ArchiveResult(completed, f"{remaining}\n" if remaining else "")


def append_to_archive_file(existing: str, completed_tasks: list[Task]) -> str:
    """Append *completed_tasks* to the archive text *existing*."""
    if not completed_tasks:
        return existing
    lines = "\n".join(serialize_task(task) for task in completed_tasks)
    head = existing.rstrip("\n")
    if not head:
        return f"{lines}\n"
    return f"{head}\n{lines}\n"


def get_archive_file_path(todo_path: str) -> str:
    """Return the ``done.txt`` path next to *todo_path*."""
    directory = os.path.dirname(todo_path)
    return os.path.join(directory, ARCHIVE_FILE_NAME) if directory else ARCHIVE_FILE_NAME


def should_open_as_todotxt(path: str, specified_paths: list[str]) -> bool:
    """An explicit path list wins; otherwise decide by file extension."""
    if specified_paths:
        return path in specified_paths
    return path.endswith(TODOTXT_EXTENSIONS)
