"""Helpers shared by the task commands."""

from pathlib import Path
from typing import Annotated

import typer

from todotxt_cli.core.archive import should_open_as_todotxt
from todotxt_cli.core.dates import is_valid_date_string
from todotxt_cli.core.priority import is_priority_valid
from todotxt_cli.models.task import Task
from todotxt_cli.services.config_service import get_config_service
from todotxt_cli.services.todo_file_service import TodoFileService
from todotxt_cli.utils.exit_codes import ERROR_INVALID_ARGS, ERROR_NOT_FOUND
from todotxt_cli.utils.ui.formatters import format_warning

from .decorators import AppError

FileOption = Annotated[
    Path | None,
    typer.Option(
        "--file",
        "-f",
        envvar="TODOTXT_FILE",
        help="todo.txt file (default: configured todo_file)",
    ),
]
OutputOption = Annotated[
    str,
    typer.Option("--output", "-o", help="Output format: pretty, table, json, yaml, quiet"),
]


def get_file_service(file: Path | None = None) -> TodoFileService:
    """TodoFileService for *file* or the configured todo.txt."""
    config_service = get_config_service()
    config = config_service.config
    if file is not None and not should_open_as_todotxt(str(file), config.todo_paths):
        format_warning(
            f"{file} does not look like a todo.txt file "
            "(add it to todo_paths to silence this)"
        )
    return TodoFileService(
        config_service.get_todo_path(file),
        config_service.data_dir,
        history_size=config.history.max_size,
    )


def resolve_index(tasks: list[Task], number: int) -> int:
    """Convert a 1-based task number as shown by ``list`` to a list index."""
    if not 1 <= number <= len(tasks):
        raise AppError(f"No task number {number} (have {len(tasks)})", ERROR_NOT_FOUND)
    return number - 1


def check_priority(priority: str | None) -> str | None:
    """Uppercase and validate a priority option; "" means no priority."""
    if not priority:
        return None
    priority = priority.upper()
    if not is_priority_valid(priority):
        raise AppError(f"Invalid priority '{priority}' (expected A-Z)", ERROR_INVALID_ARGS)
    return priority


def check_date(value: str | None, name: str) -> str | None:
    if value is None or value == "":
        return value
    if not is_valid_date_string(value):
        raise AppError(f"Invalid {name} '{value}' (expected YYYY-MM-DD)", ERROR_INVALID_ARGS)
    return value
