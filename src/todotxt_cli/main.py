"""Main entry point for todotxt-cli."""

import typer

from todotxt_cli import __version__
from todotxt_cli.commands import ai, archive_command, config, history, presets, tasks
from todotxt_cli.utils.typer_helpers import SuggestingGroup
from todotxt_cli.utils.ui.console import get_console

app = typer.Typer(
    name="todotxt",
    cls=SuggestingGroup,
    help="Manage a todo.txt file from the command line",
    no_args_is_help=True,
)

console = get_console()

app.command("list")(tasks.list_command)
app.command("add")(tasks.add_command)
app.command("done")(tasks.done_command)
app.command("edit")(tasks.edit_command)
app.command("rm")(tasks.rm_command)
app.command("focus")(tasks.focus_command)
app.command("projects")(tasks.projects_command)
app.command("contexts")(tasks.contexts_command)
app.command("archive")(archive_command.archive_command)
app.command("undo")(history.undo_command)
app.command("redo")(history.redo_command)

app.add_typer(presets.app, name="presets", help="Saved list filters")
app.add_typer(ai.app, name="ai", help="AI assisted task entry (OpenRouter)")
app.add_typer(config.app, name="config", help="Configuration management")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]todotxt-cli[/bold] version [cyan]{__version__}[/cyan]")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
