"""Filter preset commands."""

from typing import Annotated

import typer

from todotxt_cli.core.presets import create_preset, delete_preset, get_preset_by_id
from todotxt_cli.models.filter import FilterPreset
from todotxt_cli.services.config_service import get_config_service
from todotxt_cli.utils.exit_codes import ERROR_NOT_FOUND
from todotxt_cli.utils.ui.formatters import format_output, format_success

from .decorators import AppError, command_wrapper
from .tasks import build_filter_state
from .utils import OutputOption

app = typer.Typer(help="Saved list filters")


def _find(presets: list[FilterPreset], name_or_id: str) -> FilterPreset:
    preset = get_preset_by_id(presets, name_or_id) or next(
        (p for p in presets if p.name == name_or_id), None
    )
    if preset is None:
        raise AppError(f"Preset '{name_or_id}' not found", ERROR_NOT_FOUND)
    return preset


@app.command("save")
@command_wrapper
def save_preset(
    name: Annotated[str, typer.Argument(help="Preset name")],
    status: Annotated[str | None, typer.Option("--status", "-s")] = None,
    priority: Annotated[str | None, typer.Option("--priority", "-p")] = None,
    search: Annotated[str | None, typer.Option("--search", "-q")] = None,
    group: Annotated[str | None, typer.Option("--group", "-g")] = None,
    sort: Annotated[str | None, typer.Option("--sort")] = None,
) -> None:
    """Save list options under NAME."""
    service = get_config_service()
    state = build_filter_state(status, priority, search, group, sort, preset=None)
    change = create_preset(service.config.filter_presets, name, state)
    service.save_presets(change.presets)
    format_success(f"Saved preset '{name}' ({change.preset_id})")


@app.command("list")
@command_wrapper
def list_presets(output: OutputOption = "pretty") -> None:
    """List saved presets."""
    presets = get_config_service().config.filter_presets
    if output in ("json", "yaml"):
        format_output([p.model_dump() for p in presets], output)
        return
    if not presets:
        format_output("[yellow]No presets saved[/yellow]")
        return
    for preset in presets:
        state = preset.filter_state
        format_output(
            f"[cyan]{preset.name}[/cyan] [dim]{preset.id}[/dim] "
            f"status={state.status} priority={state.priority} group={state.group} "
            f"sort={state.sort} search={state.search!r}"
        )


@app.command("show")
@command_wrapper
def show_preset(
    name: Annotated[str, typer.Argument(help="Preset name or id")],
    output: OutputOption = "pretty",
) -> None:
    """Show one preset."""
    preset = _find(get_config_service().config.filter_presets, name)
    format_output(preset.model_dump(), output)


@app.command("delete")
@command_wrapper
def delete_preset_command(
    name: Annotated[str, typer.Argument(help="Preset name or id")],
) -> None:
    """Delete a preset."""
    service = get_config_service()
    preset = _find(service.config.filter_presets, name)
    change = delete_preset(service.config.filter_presets, preset.id)
    service.save_presets(change.presets)
    format_success(f"Deleted preset '{preset.name}'")
