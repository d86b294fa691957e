"""Autocomplete suggestions gathered from existing tasks."""

from __future__ import annotations

from todotxt_cli.models.task import Task


def extract_projects(tasks: list[Task]) -> list[str]:
    """Unique project names across *tasks*, sorted."""
    return sorted({project for task in tasks for project in task.projects})


def extract_contexts(tasks: list[Task]) -> list[str]:
    """Unique context names across *tasks*, sorted."""
    return sorted({context for task in tasks for context in task.contexts})
