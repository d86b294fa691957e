"""Configuration management commands."""

import json
from typing import Annotated, Any

import typer
from pydantic import ValidationError

from todotxt_cli.services.config_service import get_config_service
from todotxt_cli.utils.exit_codes import ERROR_INVALID_ARGS, ERROR_NOT_FOUND
from todotxt_cli.utils.ui.console import get_console
from todotxt_cli.utils.ui.formatters import format_output, format_success

from .decorators import AppError, command_wrapper
from .utils import OutputOption

app = typer.Typer(help="Configuration management commands")
console = get_console()

SECRET_KEYS = ("ai.api_key",)


def _mask(data: dict) -> dict:
    api_key = data.get("ai", {}).get("api_key")
    if api_key:
        data["ai"]["api_key"] = api_key[:4] + "…" if len(api_key) > 4 else "…"
    return data


def parse_value(value: str) -> Any:
    """Interpret a command line value: booleans, integers, JSON objects/lists, else text."""
    if value.lower() in ("true", "false"):
        return value.lower() == "true"
    if value.isdigit():
        return int(value)
    if value[:1] in ("{", "["):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            return value
    return value


@app.command("show")
@command_wrapper
def show_config(output: OutputOption = "yaml") -> None:
    """Show the current configuration (API key masked)."""
    service = get_config_service()
    data = _mask(service.config.model_dump(exclude={"filter_presets"}))
    format_output(data, output)
    console.print(f"[dim]{service.config_path}[/dim]")


@app.command("get")
@command_wrapper
def get_config(
    key: Annotated[str, typer.Argument(help="Configuration key (e.g. ai.model)")],
) -> None:
    """Get a configuration value."""
    try:
        value = get_config_service().get(key)
    except KeyError as e:
        raise AppError(f"Configuration key '{key}' not found", ERROR_NOT_FOUND) from e
    if hasattr(value, "model_dump"):
        value = value.model_dump()
    if key in SECRET_KEYS and value:
        value = _mask({"ai": {"api_key": value}})["ai"]["api_key"]
    format_output(value, "json" if isinstance(value, (dict, list)) else "pretty")


@app.command("set")
@command_wrapper
def set_config(
    key: Annotated[str, typer.Argument(help="Configuration key (e.g. ai.model)")],
    value: Annotated[str, typer.Argument(help="Configuration value")],
) -> None:
    """Set a configuration value."""
    parsed = parse_value(value)
    try:
        get_config_service().set(key, parsed)
    except KeyError as e:
        raise AppError(f"Configuration key '{key}' not found", ERROR_NOT_FOUND) from e
    except ValidationError as e:
        raise AppError(f"Invalid value for '{key}': {e.errors()[0]['msg']}", ERROR_INVALID_ARGS) from e
    shown = "****" if key in SECRET_KEYS else parsed
    format_success(f"Configuration '{key}' set to '{shown}'")


@app.command("reset")
@command_wrapper
def reset_config(
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
) -> None:
    """Reset configuration to defaults (presets are removed too)."""
    if not yes and not typer.confirm("Reset all configuration?"):
        console.print("[yellow]Cancelled[/yellow]")
        return
    get_config_service().reset_config()
    format_success("Configuration reset")
