"""Commands 'undo' and 'redo' of todotxt-cli"""

from todotxt_cli.utils.exit_codes import ERROR_NOT_FOUND
from todotxt_cli.utils.ui.formatters import format_success

from .decorators import AppError, command_wrapper
from .utils import FileOption, get_file_service


@command_wrapper
def undo_command(file: FileOption = None) -> None:
    """Undo the last change made through todotxt."""
    if get_file_service(file).undo() is None:
        raise AppError("Nothing to undo", ERROR_NOT_FOUND)
    format_success("Undone")


@command_wrapper
def redo_command(file: FileOption = None) -> None:
    """Redo the last undone change."""
    if get_file_service(file).redo() is None:
        raise AppError("Nothing to redo", ERROR_NOT_FOUND)
    format_success("Redone")
