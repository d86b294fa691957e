"""Task commands: list, add, done, edit, rm, focus, projects, contexts."""

from typing import Annotated, Any

import typer

from todotxt_cli.core.dates import get_today
from todotxt_cli.core.filters import apply_filter_state
from todotxt_cli.core.focus import filter_focus_todos, sort_focus_todos
from todotxt_cli.core.grouping import group_todos
from todotxt_cli.core.parser import parse_all
from todotxt_cli.core.presets import get_preset_by_id
from todotxt_cli.core.suggestions import extract_contexts, extract_projects
from todotxt_cli.core.tasks import (
    create_and_append_task,
    delete_and_remove_task,
    edit_and_update_task,
    toggle_at_index,
)
from todotxt_cli.core.templates import expand_placeholders
from todotxt_cli.core.validation import TaskForm, validate_task_form
from todotxt_cli.models.filter import FilterState
from todotxt_cli.models.task import Task
from todotxt_cli.services.config_service import get_config_service
from todotxt_cli.utils.exit_codes import ERROR_INVALID_ARGS, ERROR_NOT_FOUND
from todotxt_cli.utils.ui.console import get_console
from todotxt_cli.utils.ui.formatters import format_output, format_success, format_tasks

from .decorators import AppError, command_wrapper
from .utils import (
    FileOption,
    OutputOption,
    check_date,
    check_priority,
    get_file_service,
    resolve_index,
)

console = get_console()


def _numbered(tasks: list[Task], selected: list[Task]) -> list[tuple[int, Task]]:
    """Pair each selected task with its 1-based position in *tasks*."""
    positions = {id(task): number for number, task in enumerate(tasks, start=1)}
    return [(positions[id(task)], task) for task in selected]


def _find_preset_state(name_or_id: str) -> FilterState:
    presets = get_config_service().config.filter_presets
    preset = get_preset_by_id(presets, name_or_id)
    if preset is None:
        preset = next((p for p in presets if p.name == name_or_id), None)
    if preset is None:
        raise AppError(f"Preset '{name_or_id}' not found", ERROR_NOT_FOUND)
    return preset.filter_state


def build_filter_state(
    status: str | None,
    priority: str | None,
    search: str | None,
    group: str | None,
    sort: str | None,
    preset: str | None,
) -> FilterState:
    """Filter state from a preset or the configured defaults, overridden by options."""
    if preset:
        base = _find_preset_state(preset)
    else:
        ui = get_config_service().config.ui
        base = FilterState(sort=ui.default_sort, group=ui.default_group, status=ui.default_status)

    update: dict[str, Any] = {}
    if status is not None:
        update["status"] = status
    if priority is not None:
        update["priority"] = priority if priority in ("all", "none") else check_priority(priority)
    if search is not None:
        update["search"] = search
    if group is not None:
        update["group"] = group
    if sort is not None:
        update["sort"] = sort
    try:
        return FilterState.model_validate({**base.model_dump(), **update})
    except ValueError as e:
        raise AppError(f"Invalid filter option: {e}", ERROR_INVALID_ARGS) from e


@command_wrapper
def list_command(
    file: FileOption = None,
    output: OutputOption = "pretty",
    status: Annotated[
        str | None, typer.Option("--status", "-s", help="all, active or completed")
    ] = None,
    priority: Annotated[
        str | None, typer.Option("--priority", "-p", help="all, none or a letter A-Z")
    ] = None,
    search: Annotated[
        str | None,
        typer.Option("--search", "-q", help="Search query, e.g. 'Buy store|online -groceries'"),
    ] = None,
    group: Annotated[
        str | None, typer.Option("--group", "-g", help="none, project, context or priority")
    ] = None,
    sort: Annotated[
        str | None, typer.Option("--sort", help="default (file order) or completion")
    ] = None,
    preset: Annotated[
        str | None, typer.Option("--preset", help="Start from a saved preset (name or id)")
    ] = None,
) -> None:
    """List tasks."""
    state = build_filter_state(status, priority, search, group, sort, preset)
    tasks = parse_all(get_file_service(file).load())
    selected = apply_filter_state(tasks, state)

    language = get_config_service().config.ui.language
    groups = {
        name: _numbered(tasks, members)
        for name, members in group_todos(selected, state.group, language).items()
    }
    format_tasks(groups, get_today(), output)


@command_wrapper
def add_command(
    description: Annotated[list[str], typer.Argument(help="Task text; {{today}} and {{tomorrow}} are expanded")],
    file: FileOption = None,
    priority: Annotated[str | None, typer.Option("--priority", "-p", help="Priority A-Z")] = None,
    due: Annotated[str | None, typer.Option("--due", "-d", help="Due date YYYY-MM-DD")] = None,
    threshold: Annotated[
        str | None, typer.Option("--threshold", "-t", help="Start date YYYY-MM-DD (default today)")
    ] = None,
) -> None:
    """Add a task."""
    text = expand_placeholders(" ".join(description))
    result = validate_task_form(
        TaskForm(description=text, priority=priority and priority.upper(), due=due, threshold=threshold)
    )
    if not result.valid:
        raise AppError("; ".join(result.errors.values()), ERROR_INVALID_ARGS)

    service = get_file_service(file)
    updated = create_and_append_task(
        service.load(), text, check_priority(priority), due, threshold
    )
    service.save(updated)
    format_success(f"Added: {parse_all(updated)[-1].raw}")


@command_wrapper
def done_command(
    numbers: Annotated[list[int], typer.Argument(help="Task number(s) as shown by list")],
    file: FileOption = None,
) -> None:
    """Toggle completion of tasks. Completing a recurring task adds its next occurrence."""
    service = get_file_service(file)
    text = service.load()
    tasks = parse_all(text)
    indices = [resolve_index(tasks, number) for number in dict.fromkeys(numbers)]

    for index in indices:
        text = toggle_at_index(text, index)
    service.save(text)

    updated = parse_all(text)
    for index in indices:
        task = updated[index]
        verb = "Completed" if task.completed else "Reopened"
        format_success(f"{verb}: {task.raw}")
    for task in updated[len(tasks) :]:
        console.print(f"[dim]Next occurrence:[/dim] {task.raw}")


@command_wrapper
def edit_command(
    number: Annotated[int, typer.Argument(help="Task number as shown by list")],
    file: FileOption = None,
    description: Annotated[str | None, typer.Option("--description", "-m", help="New text")] = None,
    priority: Annotated[
        str | None, typer.Option("--priority", "-p", help="Priority A-Z, '' to clear")
    ] = None,
    due: Annotated[str | None, typer.Option("--due", "-d", help="Due date, '' to remove")] = None,
    threshold: Annotated[
        str | None, typer.Option("--threshold", "-t", help="Start date, '' to remove")
    ] = None,
) -> None:
    """Edit a task. Only the given options change."""
    updates: dict[str, Any] = {}
    if description is not None:
        if not description.strip():
            raise AppError("Description is required", ERROR_INVALID_ARGS)
        updates["description"] = expand_placeholders(description)
    if priority is not None:
        updates["priority"] = check_priority(priority)
    if due is not None:
        updates["due_date"] = check_date(due, "due date")
    if threshold is not None:
        updates["threshold_date"] = check_date(threshold, "threshold date")
    if not updates:
        raise AppError("Nothing to change", ERROR_INVALID_ARGS)

    service = get_file_service(file)
    text = service.load()
    index = resolve_index(parse_all(text), number)
    updated = edit_and_update_task(text, index, updates)
    service.save(updated)
    format_success(f"Updated: {parse_all(updated)[index].raw}")


@command_wrapper
def rm_command(
    number: Annotated[int, typer.Argument(help="Task number as shown by list")],
    file: FileOption = None,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
) -> None:
    """Delete a task."""
    service = get_file_service(file)
    text = service.load()
    tasks = parse_all(text)
    index = resolve_index(tasks, number)
    if not yes and not typer.confirm(f"Delete '{tasks[index].raw}'?"):
        console.print("[yellow]Cancelled[/yellow]")
        return
    service.save(delete_and_remove_task(text, index))
    format_success(f"Deleted: {tasks[index].raw}")


@command_wrapper
def focus_command(file: FileOption = None, output: OutputOption = "pretty") -> None:
    """Show incomplete tasks that are due, overdue or past their start date."""
    today = get_today()
    tasks = parse_all(get_file_service(file).load())
    focused = sort_focus_todos(filter_focus_todos(tasks, today))
    format_tasks({"": _numbered(tasks, focused)}, today, output, title="Focus")


@command_wrapper
def projects_command(file: FileOption = None, output: OutputOption = "pretty") -> None:
    """List project names used in the file."""
    names = extract_projects(parse_all(get_file_service(file).load()))
    format_output([f"+{name}" for name in names] if output == "pretty" else names, output)


@command_wrapper
def contexts_command(file: FileOption = None, output: OutputOption = "pretty") -> None:
    """List context names used in the file."""
    names = extract_contexts(parse_all(get_file_service(file).load()))
    format_output([f"@{name}" for name in names] if output == "pretty" else names, output)
