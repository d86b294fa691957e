"""AI assisted task commands (OpenRouter)."""

from typing import Annotated

import typer

from todotxt_cli.core.dates import get_today_string
from todotxt_cli.core.parser import append_task, parse_all, parse_line, update_at_index
from todotxt_cli.models.config_models import AIConfig
from todotxt_cli.services.ai.openrouter import OpenRouterService
from todotxt_cli.services.ai.prompts import create_subtasks_from_decomposition
from todotxt_cli.services.config_service import get_config_service
from todotxt_cli.utils.exit_codes import ERROR_INVALID_ARGS, ERROR_NETWORK
from todotxt_cli.utils.ui.console import get_console
from todotxt_cli.utils.ui.formatters import format_success

from .decorators import AppError, command_wrapper
from .utils import FileOption, get_file_service, resolve_index

app = typer.Typer(help="AI assisted task entry")
console = get_console()

YesOption = Annotated[bool, typer.Option("--yes", "-y", help="Write without asking")]


def _ai_config() -> AIConfig:
    config = get_config_service().config.ai
    if not config.api_key:
        raise AppError(
            "AI API key is not set. Run: todotxt config set ai.api_key <key>",
            ERROR_INVALID_ARGS,
        )
    return config


def _confirm(lines: list[str], yes: bool) -> bool:
    for line in lines:
        console.print(f"  [cyan]{line}[/cyan]")
    return yes or typer.confirm("Write these lines?", default=True)


@app.command("add")
@command_wrapper
async def ai_add(
    text: Annotated[list[str], typer.Argument(help="What needs doing, in your own words")],
    file: FileOption = None,
    yes: YesOption = False,
) -> None:
    """Turn free text into todo.txt tasks and append them."""
    async with OpenRouterService(_ai_config()) as ai:
        result = await ai.convert_to_todotxt(" ".join(text), get_today_string())
    if not result.success:
        raise AppError(result.error or "AI request failed", ERROR_NETWORK)
    if not result.lines:
        raise AppError("The AI returned no tasks", ERROR_NETWORK)
    if not _confirm(result.lines, yes):
        console.print("[yellow]Cancelled[/yellow]")
        return

    service = get_file_service(file)
    updated = service.load()
    for line in result.lines:
        updated = append_task(updated, parse_line(line))
    service.save(updated)
    format_success(f"Added {len(result.lines)} task(s)")


@app.command("edit")
@command_wrapper
async def ai_edit(
    numbers: Annotated[list[int], typer.Argument(help="Task number(s) as shown by list")],
    instruction: Annotated[
        str, typer.Option("--instruction", "-i", help="What to change, e.g. 'due next friday'")
    ],
    file: FileOption = None,
    yes: YesOption = False,
) -> None:
    """Rewrite one or more tasks following an instruction."""
    service = get_file_service(file)
    text = service.load()
    tasks = parse_all(text)
    indices = [resolve_index(tasks, number) for number in dict.fromkeys(numbers)]
    selected = [tasks[index] for index in indices]

    async with OpenRouterService(_ai_config()) as ai:
        if len(selected) == 1:
            single = await ai.edit_todo(selected[0], instruction, get_today_string())
            success, error = single.success, single.error
            lines = [single.line] if single.line else []
        else:
            bulk = await ai.bulk_edit_todos(selected, instruction, get_today_string())
            success, error, lines = bulk.success, bulk.error, bulk.lines
    if not success or not lines:
        raise AppError(error or "AI request failed", ERROR_NETWORK)
    if not _confirm(lines, yes):
        console.print("[yellow]Cancelled[/yellow]")
        return

    for index, line in zip(indices, lines):
        text = update_at_index(text, index, parse_line(line))
    service.save(text)
    format_success(f"Updated {len(lines)} task(s)")


@app.command("decompose")
@command_wrapper
async def ai_decompose(
    number: Annotated[int, typer.Argument(help="Task number as shown by list")],
    instruction: Annotated[
        str | None, typer.Option("--instruction", "-i", help="Extra guidance for the split")
    ] = None,
    file: FileOption = None,
    yes: YesOption = False,
) -> None:
    """Split a task into subtasks that inherit its projects and contexts."""
    service = get_file_service(file)
    text = service.load()
    tasks = parse_all(text)
    parent = tasks[resolve_index(tasks, number)]
    today = get_today_string()

    async with OpenRouterService(_ai_config()) as ai:
        result = await ai.decompose_task(parent, today, instruction)
    if not result.success:
        raise AppError(result.error or "AI request failed", ERROR_NETWORK)

    subtasks = create_subtasks_from_decomposition(result.lines, parent, today)
    if not subtasks:
        raise AppError("The AI returned no subtasks", ERROR_NETWORK)
    if not _confirm([task.raw for task in subtasks], yes):
        console.print("[yellow]Cancelled[/yellow]")
        return

    for subtask in subtasks:
        text = append_task(text, subtask)
    service.save(text)
    format_success(f"Added {len(subtasks)} subtask(s)")
