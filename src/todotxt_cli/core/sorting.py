"""Task ordering."""

from __future__ import annotations

from todotxt_cli.models.task import Task


def priority_key(task: Task) -> tuple[int, str, str]:
    """Sort key: priority A-Z, then no priority, then description.

    Descriptions compare by code point so the order does not depend on the
    locale.
    """
    if task.priority is None:
        return (1, "", task.description)
    return (0, task.priority, task.description)


def sort_todos(tasks: list[Task]) -> list[Task]:
    """Incomplete tasks first, each half ordered by ``priority_key``."""
    return sorted(tasks, key=lambda task: (task.completed, priority_key(task)))
