"""todo.txt engine: parsing, mutation, filtering and derived task state.

Nothing in this package performs I/O. Functions take text or Task models and
return new ones.
"""

from .archive import (
    ArchiveResult,
    append_to_archive_file,
    archive_completed_tasks,
    get_archive_file_path,
    should_open_as_todotxt,
)
from .due import get_due_date, get_due_date_status, get_task_due_status
from .filters import (
    apply_filter_state,
    filter_by_advanced_search,
    filter_by_priority,
    filter_by_search,
    filter_by_status,
)
from .focus import filter_focus_todos, sort_focus_todos
from .grouping import (
    get_unclassified_label,
    group_by_context,
    group_by_priority,
    group_by_project,
    group_todos,
)
from .history import UndoRedoHistory, create_snapshot
from .parser import (
    append_task,
    delete_at_index,
    parse_all,
    parse_line,
    serialize_task,
    update_at_index,
    update_todo_in_list,
)
from .recurrence import (
    RecurrencePattern,
    calculate_next_due_date,
    create_recurring_task,
    parse_recurrence_tag,
)
from .sorting import sort_todos
from .tasks import (
    ToggleResult,
    create_and_append_task,
    create_task,
    delete_and_remove_task,
    delete_task,
    edit_and_update_task,
    edit_task,
    remove_from_list,
    toggle_at_index,
    toggle_completion,
)
from .threshold import (
    get_threshold_date,
    get_threshold_date_status,
    is_threshold_ready,
)

__all__ = [
    # Parsing
    "parse_line",
    "parse_all",
    "serialize_task",
    "update_at_index",
    "append_task",
    "delete_at_index",
    "update_todo_in_list",
    # Dates
    "get_due_date",
    "get_due_date_status",
    "get_task_due_status",
    "get_threshold_date",
    "get_threshold_date_status",
    "is_threshold_ready",
    # Recurrence
    "RecurrencePattern",
    "parse_recurrence_tag",
    "calculate_next_due_date",
    "create_recurring_task",
    # Mutations
    "ToggleResult",
    "toggle_completion",
    "create_task",
    "edit_task",
    "remove_from_list",
    "delete_task",
    "toggle_at_index",
    "create_and_append_task",
    "edit_and_update_task",
    "delete_and_remove_task",
    # Views
    "filter_by_priority",
    "filter_by_status",
    "filter_by_search",
    "filter_by_advanced_search",
    "apply_filter_state",
    "sort_todos",
    "group_by_project",
    "group_by_context",
    "group_by_priority",
    "group_todos",
    "get_unclassified_label",
    "filter_focus_todos",
    "sort_focus_todos",
    # History
    "UndoRedoHistory",
    "create_snapshot",
    # Archive
    "ArchiveResult",
    "archive_completed_tasks",
    "append_to_archive_file",
    "get_archive_file_path",
    "should_open_as_todotxt",
]
