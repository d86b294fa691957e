"""Filter view models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

GroupMode = Literal["none", "project", "context", "priority"]
SortMode = Literal["default", "completion"]
StatusMode = Literal["all", "active", "completed"]


class FilterState(BaseModel):
    """Filter configuration of a task list view.

    Attributes:
        priority: "all", "none" (tasks without priority) or a letter A-Z
        search: Advanced search query
        group: Grouping mode
        sort: "default" keeps file order, "completion" uses sort_todos
        status: Completion status filter
        selection_mode: Whether multi-select is active in the view
        selected_ids: Selected task indices when selection_mode is on
    """

    priority: str = Field(default="all")
    search: str = Field(default="")
    group: GroupMode = Field(default="none")
    sort: SortMode = Field(default="default")
    status: StatusMode = Field(default="all")
    selection_mode: bool | None = None
    selected_ids: list[int] | None = None


class FilterPreset(BaseModel):
    """A named, saved FilterState.

    Attributes:
        id: Unique identifier ("preset-<timestamp>-<random>")
        name: User-facing preset name
        filter_state: The saved filter state
        created_at: Creation time in epoch milliseconds
        updated_at: Last update time in epoch milliseconds
    """

    id: str
    name: str
    filter_state: FilterState
    created_at: int
    updated_at: int
