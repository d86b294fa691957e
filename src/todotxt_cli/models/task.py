"""Task data models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

PRIORITY_PATTERN = r"^[A-Z]$"
DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"


class Task(BaseModel):
    """A single todo.txt task line.

    Tasks are immutable values. Every mutation in ``todotxt_cli.core`` returns
    a new instance instead of touching the one it was given.

    Attributes:
        completed: Whether the line starts with the ``x `` completion marker
        priority: Single uppercase letter A-Z, or None
        completion_date: Completion date (YYYY-MM-DD)
        creation_date: Creation date (YYYY-MM-DD)
        description: Text after marker, priority and dates. Still contains the
            literal ``+project``, ``@context`` and ``key:value`` tokens
        projects: Project names in order of appearance (duplicates kept)
        contexts: Context names in order of appearance (duplicates kept)
        tags: ``key:value`` tags, last duplicate key wins
        raw: The original source line, empty for synthesized tasks
    """

    model_config = ConfigDict(frozen=True)

    completed: bool = False
    priority: str | None = Field(default=None, pattern=PRIORITY_PATTERN)
    completion_date: str | None = Field(default=None, pattern=DATE_PATTERN)
    creation_date: str | None = Field(default=None, pattern=DATE_PATTERN)
    description: str = ""
    projects: list[str] = Field(default_factory=list)
    contexts: list[str] = Field(default_factory=list)
    tags: dict[str, str] = Field(default_factory=dict)
    raw: str = ""


class TaskUpdate(BaseModel):
    """Partial update for an existing task.

    Only fields that were explicitly passed are applied. Passing a field as
    ``None`` is different from not passing it: ``TaskUpdate(priority=None)``
    clears the priority, ``TaskUpdate()`` leaves it alone. A falsy
    ``due_date``/``threshold_date`` removes the corresponding tag.

    Attributes:
        description: New description text
        priority: New priority letter, or None to clear
        due_date: New ``due:`` date, or None/"" to remove it
        threshold_date: New ``t:`` date, or None/"" to remove it
    """

    description: str | None = None
    priority: str | None = None
    due_date: str | None = None
    threshold_date: str | None = None

    def provided(self, name: str) -> bool:
        """Return True if *name* was explicitly passed to the update."""
        return name in self.model_fields_set
