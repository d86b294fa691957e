"""Command 'archive' of todotxt-cli"""

from todotxt_cli.utils.ui.formatters import format_info, format_success

from .decorators import command_wrapper
from .utils import FileOption, get_file_service


@command_wrapper
def archive_command(file: FileOption = None) -> None:
    """Move completed tasks to done.txt next to the todo file."""
    service = get_file_service(file)
    result = service.archive()
    if not result.completed_tasks:
        format_info("No completed tasks to archive")
        return
    format_success(
        f"Archived {len(result.completed_tasks)} task(s) to {service.archive_path}"
    )
