"""Task mutation operations.

Every function here is pure: it takes a Task, a task list or document text
and returns a new one. When "today" is not passed in, it is read from the
clock seam in ``core.dates``.
"""

from __future__ import annotations

from datetime import date
from typing import Any, NamedTuple

from todotxt_cli.models.task import Task, TaskUpdate

from .dates import date_to_string, get_today
from .due import DUE_TAG
from .parser import (
    append_task,
    extract_contexts,
    extract_projects,
    join_tasks,
    parse_all,
    serialize_task,
    update_todo_in_list,
    with_serialized_raw,
)
from .priority import is_priority_valid
from .recurrence import PRIORITY_TAG, create_recurring_task
from .tags import extract_tags, has_tag_token, remove_tag, remove_tag_token, set_tag_token
from .threshold import THRESHOLD_TAG


class ToggleResult(NamedTuple):
    """Result of toggle_completion."""

    original_task: Task
    recurring_task: Task | None = None


def _today_string(today: date | None) -> str:
    return date_to_string(today if today is not None else get_today())


def _normalize_priority(priority: str | None) -> str | None:
    if priority and is_priority_valid(priority):
        return priority
    return None


def toggle_completion(task: Task, today: date | None = None) -> ToggleResult:
    """Flip the completion state of *task*.

    Completing sets the completion date, archives the priority into a
    ``pri:`` tag and generates the next occurrence of a recurring task.
    Reopening clears the completion date and restores the archived priority.
    """
    if task.completed:
        priority = task.priority
        tags = task.tags
        description = task.description
        archived = _normalize_priority(tags.get(PRIORITY_TAG))
        if PRIORITY_TAG in tags:
            if archived:
                priority = archived
            tags = remove_tag(tags, PRIORITY_TAG)
            description = remove_tag_token(description, PRIORITY_TAG)
        reopened = task.model_copy(
            update={
                "completed": False,
                "completion_date": None,
                "priority": priority,
                "tags": tags,
                "description": description,
            }
        )
        return ToggleResult(with_serialized_raw(reopened))

    completion_date = _today_string(today)
    tags = dict(task.tags)
    description = task.description
    if task.priority:
        tags[PRIORITY_TAG] = task.priority
        description = set_tag_token(description, PRIORITY_TAG, task.priority)

    completed = task.model_copy(
        update={
            "completed": True,
            "completion_date": completion_date,
            "priority": None,
            "tags": tags,
            "description": description,
        }
    )
    return ToggleResult(
        with_serialized_raw(completed),
        create_recurring_task(task, completion_date),
    )


def create_task(
    description: str,
    priority: str | None = None,
    due_date: str | None = None,
    threshold_date: str | None = None,
    today: date | None = None,
) -> Task:
    """Create a new incomplete task dated today.

    ``due:`` is appended when *due_date* is given. ``t:`` is always appended,
    defaulting to today so new tasks are immediately actionable.
    """
    today_string = _today_string(today)
    text = description.strip()
    if due_date:
        text = set_tag_token(text, DUE_TAG, due_date)
    text = set_tag_token(text, THRESHOLD_TAG, threshold_date or today_string)

    task = Task(
        completed=False,
        priority=_normalize_priority(priority),
        creation_date=today_string,
        description=text,
        projects=extract_projects(text),
        contexts=extract_contexts(text),
        tags=extract_tags(text),
    )
    return with_serialized_raw(task)


def edit_task(task: Task, updates: TaskUpdate | dict[str, Any]) -> Task:
    """Apply a partial update to *task*.

    Only keys present in *updates* are applied. A new description re-derives
    projects, contexts and tags; tags the task already carried whose tokens
    the new text lacks are appended again so the tag map and the text stay in
    sync. ``due_date``/``threshold_date`` rewrite or (when falsy) remove their
    tag.
    """
    if isinstance(updates, dict):
        updates = TaskUpdate(**updates)

    description = task.description
    tags = dict(task.tags)
    priority = task.priority

    if updates.provided("description"):
        description = (updates.description or "").strip()
        new_tags = extract_tags(description)
        for key, value in task.tags.items():
            if key not in new_tags and not has_tag_token(description, key):
                description = set_tag_token(description, key, value)
                new_tags[key] = value
        tags = new_tags

    if updates.provided("priority"):
        priority = _normalize_priority(updates.priority)

    for field, key in (("due_date", DUE_TAG), ("threshold_date", THRESHOLD_TAG)):
        if not updates.provided(field):
            continue
        value = getattr(updates, field)
        if value:
            description = set_tag_token(description, key, value)
            tags[key] = value
        else:
            description = remove_tag_token(description, key)
            tags = remove_tag(tags, key)

    edited = task.model_copy(
        update={
            "description": description,
            "priority": priority,
            "projects": extract_projects(description),
            "contexts": extract_contexts(description),
            "tags": tags,
        }
    )
    return edited.model_copy(update={"raw": serialize_task(edited)})


def remove_from_list(tasks: list[Task], index: int) -> list[Task]:
    """Return *tasks* without the item at *index*; out of range is a no-op."""
    if not 0 <= index < len(tasks):
        return list(tasks)
    return tasks[:index] + tasks[index + 1 :]


delete_task = remove_from_list


def toggle_at_index(text: str, index: int, today: date | None = None) -> str:
    """Toggle the task at *index* in *text*.

    A generated recurring task is appended to the end of the document.
    """
    tasks = parse_all(text)
    if not 0 <= index < len(tasks):
        return text
    result = toggle_completion(tasks[index], today)
    updated = update_todo_in_list(tasks, index, result.original_task)
    if result.recurring_task is not None:
        updated = append_task(updated, result.recurring_task)
    return updated


def create_and_append_task(
    text: str,
    description: str,
    priority: str | None = None,
    due_date: str | None = None,
    threshold_date: str | None = None,
    today: date | None = None,
) -> str:
    """Create a task and append it to *text*."""
    task = create_task(description, priority, due_date, threshold_date, today)
    return append_task(text, task)


def edit_and_update_task(
    text: str, index: int, updates: TaskUpdate | dict[str, Any]
) -> str:
    """Edit the task at *index* in *text*; out of range returns *text*."""
    tasks = parse_all(text)
    if not 0 <= index < len(tasks):
        return text
    return update_todo_in_list(tasks, index, edit_task(tasks[index], updates))


def delete_and_remove_task(text: str, index: int) -> str:
    """Delete the task at *index* from *text*; out of range returns *text*."""
    tasks = parse_all(text)
    if not 0 <= index < len(tasks):
        return text
    return join_tasks(remove_from_list(tasks, index))
