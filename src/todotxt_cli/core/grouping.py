"""Grouping of tasks by project, context or priority.

Groups are returned as insertion ordered dicts keyed by the order in which a
key is first seen. Tasks without the grouped attribute go to a localized
"unclassified" bucket.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from todotxt_cli.models.filter import GroupMode
from todotxt_cli.models.task import Task

UNCLASSIFIED_LABELS = {
    "en": "Unclassified",
    "ja": "未分類",
}


def get_unclassified_label(language: str = "en") -> str:
    return UNCLASSIFIED_LABELS.get(language, UNCLASSIFIED_LABELS["en"])


def _group_by(
    tasks: Iterable[Task], keys_of: Callable[[Task], list[str]], language: str
) -> dict[str, list[Task]]:
    grouped: dict[str, list[Task]] = {}
    unclassified = get_unclassified_label(language)
    for task in tasks:
        keys = keys_of(task) or [unclassified]
        # a task listing the same project twice still shows up once per group
        for key in dict.fromkeys(keys):
            grouped.setdefault(key, []).append(task)
    return grouped


def group_by_project(tasks: list[Task], language: str = "en") -> dict[str, list[Task]]:
    return _group_by(tasks, lambda task: task.projects, language)


def group_by_context(tasks: list[Task], language: str = "en") -> dict[str, list[Task]]:
    return _group_by(tasks, lambda task: task.contexts, language)


def group_by_priority(tasks: list[Task], language: str = "en") -> dict[str, list[Task]]:
    return _group_by(
        tasks, lambda task: [task.priority] if task.priority else [], language
    )


def group_todos(
    tasks: list[Task], mode: GroupMode, language: str = "en"
) -> dict[str, list[Task]]:
    """Group *tasks* by *mode*; ``"none"`` yields a single group keyed ``""``."""
    if mode == "project":
        return group_by_project(tasks, language)
    if mode == "context":
        return group_by_context(tasks, language)
    if mode == "priority":
        return group_by_priority(tasks, language)
    return {"": list(tasks)}
