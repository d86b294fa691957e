"""Output formatters for different formats."""

from __future__ import annotations

import json
from datetime import date
from typing import Any

import yaml
from rich.console import Console
from rich.table import Table
from rich.text import Text

from todotxt_cli.core.due import get_task_due_status
from todotxt_cli.core.links import MARKDOWN_LINK_RE, extract_internal_links
from todotxt_cli.core.priority import get_priority_color
from todotxt_cli.core.recurrence import (
    RECURRENCE_TAG,
    describe_recurrence,
    parse_recurrence_tag,
)
from todotxt_cli.core.threshold import THRESHOLD_TAG, get_task_threshold_status
from todotxt_cli.models.task import Task

console = Console()

OUTPUT_FORMATS = ("pretty", "table", "json", "yaml", "quiet")

STATUS_ICONS = {
    "open": "⬜",
    "completed": "☑️",
    "recurring": "🔄",
}

DUE_STYLES = {
    "overdue": "bold red",
    "today": "bold yellow",
    "future": "cyan",
}


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {message}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    console.print(f"[bold blue]Info:[/bold blue] {message}")


def task_to_dict(index: int, task: Task, today: date) -> dict[str, Any]:
    """Machine readable view of a task, used by json/yaml output."""
    return {
        "index": index,
        "completed": task.completed,
        "priority": task.priority,
        "completion_date": task.completion_date,
        "creation_date": task.creation_date,
        "description": task.description,
        "projects": list(task.projects),
        "contexts": list(task.contexts),
        "tags": dict(task.tags),
        "due_status": get_task_due_status(task, today),
        "threshold_status": get_task_threshold_status(task, today),
        "line": task.raw,
    }


def format_output(data: Any, output_format: str = "pretty") -> None:
    """Print plain data (dicts and lists) as json, yaml or key/value pairs."""
    if output_format == "json":
        print(json.dumps(data, indent=2, ensure_ascii=False, default=str))
    elif output_format == "yaml":
        print(yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True))
    elif isinstance(data, dict):
        format_single_item(data)
    elif isinstance(data, list):
        for item in data:
            console.print(item)
    else:
        console.print(data)


def format_single_item(item: dict) -> None:
    """Format a single item as key-value pairs."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")
    for key, value in item.items():
        if isinstance(value, (dict, list)):
            value = json.dumps(value, ensure_ascii=False)
        elif value is None:
            value = "-"
        table.add_row(str(key), str(value))
    console.print(table)


# ============================================================================
# Task lists
# ============================================================================


def render_description(description: str) -> Text:
    """Description text with Markdown links made clickable."""
    text = Text()
    pos = 0
    for match in MARKDOWN_LINK_RE.finditer(description):
        text.append(description[pos : match.start()])
        text.append(match.group(1), style=f"link {match.group(2)} underline")
        pos = match.end()
    text.append(description[pos:])
    return text


def _status_icon(task: Task) -> str:
    if task.completed:
        return STATUS_ICONS["completed"]
    if parse_recurrence_tag(task.tags.get(RECURRENCE_TAG)):
        return STATUS_ICONS["recurring"]
    return STATUS_ICONS["open"]


def _metadata(task: Task, today: date) -> list[tuple[str, str]]:
    meta: list[tuple[str, str]] = []
    due_status = get_task_due_status(task, today)
    if due_status is not None:
        style = "dim" if task.completed else DUE_STYLES[due_status]
        meta.append((f"due {task.tags['due']} ({due_status})", style))
    if get_task_threshold_status(task, today) == "not_ready":
        meta.append((f"starts {task.tags[THRESHOLD_TAG]}", "dim"))
    pattern = parse_recurrence_tag(task.tags.get(RECURRENCE_TAG))
    if pattern is not None:
        meta.append((describe_recurrence(pattern), "magenta"))
    links = extract_internal_links(task.description)
    if links:
        meta.append((f"note: {links[0].alias or links[0].link}", "blue"))
    if task.completed and task.completion_date:
        meta.append((f"done {task.completion_date}", "dim green"))
    return meta


def format_task_item(index: int, task: Task, today: date, indent: str = "") -> None:
    """Print one task line plus a dimmed metadata line."""
    line = Text(f"{indent}{index:>3} {_status_icon(task)} ")
    if task.priority:
        line.append(f"({task.priority}) ", style=f"bold {get_priority_color(task.priority)}")
    description = render_description(task.description)
    if task.completed:
        description.stylize("dim strike")
    line.append_text(description)
    console.print(line)

    meta = _metadata(task, today)
    if meta:
        meta_line = Text()
        meta_line.append(f"{indent}      └─ ", style="dim")
        for i, (text, style) in enumerate(meta):
            if i > 0:
                meta_line.append(" • ", style="dim")
            meta_line.append(text, style=style)
        console.print(meta_line)


def format_tasks_pretty(
    groups: dict[str, list[tuple[int, Task]]], today: date, title: str = "Tasks"
) -> None:
    """Print grouped tasks. A single group keyed ``""`` prints without a header."""
    entries = [entry for group in groups.values() for entry in group]
    if not entries:
        console.print("[yellow]No tasks found[/yellow]")
        return

    active = sum(1 for _, task in entries if not task.completed)
    header = Text()
    header.append(f"📋 {title} ", style="bold cyan")
    header.append(f"({active} active, {len(entries) - active} completed)", style="dim")
    console.print(header)
    console.print()

    for name, group in groups.items():
        indent = ""
        if name:
            console.print(f"{name} ({len(group)})", style="bold")
            indent = "  "
        for index, task in group:
            format_task_item(index, task, today, indent=indent)
        console.print()


def format_tasks_table(entries: list[tuple[int, Task]], today: date) -> None:
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("#", justify="right")
    table.add_column("Done")
    table.add_column("Pri")
    table.add_column("Description")
    table.add_column("Due")
    for index, task in entries:
        due = task.tags.get("due", "-")
        due_status = get_task_due_status(task, today)
        due_style = DUE_STYLES[due_status] if due_status and not task.completed else ""
        table.add_row(
            str(index),
            "✓" if task.completed else "✗",
            Text(task.priority or "-", style=get_priority_color(task.priority)),
            render_description(task.description),
            Text(due, style=due_style),
        )
    console.print(table)


def format_tasks(
    groups: dict[str, list[tuple[int, Task]]],
    today: date,
    output_format: str = "pretty",
    title: str = "Tasks",
) -> None:
    """Display (index, task) groups in *output_format*."""
    entries = [entry for group in groups.values() for entry in group]
    if output_format in ("json", "yaml"):
        data: Any
        if list(groups) == [""]:
            data = [task_to_dict(i, t, today) for i, t in entries]
        else:
            data = {
                name: [task_to_dict(i, t, today) for i, t in group]
                for name, group in groups.items()
            }
        format_output(data, output_format)
    elif output_format == "table":
        format_tasks_table(entries, today)
    elif output_format == "quiet":
        for _, task in entries:
            print(task.raw)
    else:
        format_tasks_pretty(groups, today, title=title)
