"""Due date (``due:``) extraction and status."""

from __future__ import annotations

from datetime import date, datetime
from typing import Literal

from todotxt_cli.models.task import Task

from .dates import as_date, string_to_date

DueDateStatus = Literal["overdue", "today", "future"]

DUE_TAG = "due"


def get_due_date(task: Task) -> date | None:
    """Return the task's ``due:`` date, or None if missing or not a real date."""
    return string_to_date(task.tags.get(DUE_TAG))


def get_due_date_status(due: date | datetime, today: date | datetime) -> DueDateStatus:
    """Classify *due* against *today* at day granularity."""
    delta = (as_date(due) - as_date(today)).days
    if delta < 0:
        return "overdue"
    if delta == 0:
        return "today"
    return "future"


def get_task_due_status(task: Task, today: date | datetime) -> DueDateStatus | None:
    """Return the due status of *task*, or None when it has no valid due date."""
    due = get_due_date(task)
    if due is None:
        return None
    return get_due_date_status(due, today)
