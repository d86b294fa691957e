"""Threshold date (``t:``) extraction and status.

A threshold is the day a task becomes actionable. Before it the task is
``not_ready``; on and after it the task is ``ready``.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Literal

from todotxt_cli.models.task import Task

from .dates import as_date, string_to_date

ThresholdStatus = Literal["not_ready", "ready"]

THRESHOLD_TAG = "t"


def get_threshold_date(task: Task) -> date | None:
    """Return the task's ``t:`` date, or None if missing or not a real date."""
    return string_to_date(task.tags.get(THRESHOLD_TAG))


def get_threshold_date_status(
    threshold: date | datetime, today: date | datetime
) -> ThresholdStatus:
    """Classify *threshold* against *today* at day granularity."""
    if as_date(threshold) > as_date(today):
        return "not_ready"
    return "ready"


def get_task_threshold_status(
    task: Task, today: date | datetime
) -> ThresholdStatus | None:
    """Return the threshold status of *task*, or None without a valid ``t:``."""
    threshold = get_threshold_date(task)
    if threshold is None:
        return None
    return get_threshold_date_status(threshold, today)


def is_threshold_ready(task: Task, today: date | datetime) -> bool:
    """Return True unless the task is deferred past *today*."""
    return get_task_threshold_status(task, today) != "not_ready"
