"""Focus view: what needs attention today."""

from __future__ import annotations

from datetime import date, datetime

from todotxt_cli.models.task import Task

from .due import get_task_due_status
from .sorting import priority_key
from .threshold import get_task_threshold_status


def is_in_focus(task: Task, today: date | datetime) -> bool:
    """Incomplete and either due by *today* or past its threshold date."""
    if task.completed:
        return False
    if get_task_due_status(task, today) in ("overdue", "today"):
        return True
    return get_task_threshold_status(task, today) == "ready"


def filter_focus_todos(tasks: list[Task], today: date | datetime) -> list[Task]:
    return [task for task in tasks if is_in_focus(task, today)]


def sort_focus_todos(tasks: list[Task]) -> list[Task]:
    return sorted(tasks, key=priority_key)
