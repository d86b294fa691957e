"""todotxt-cli domain models.

This package contains the Pydantic models shared by the parsing engine, the
services and the command line front end.
"""

from .config_models import AIConfig, AppConfig, HistoryConfig, RetryConfig, UIConfig
from .filter import FilterPreset, FilterState
from .task import Task, TaskUpdate

__all__ = [
    # Task models
    "Task",
    "TaskUpdate",
    # Filter models
    "FilterState",
    "FilterPreset",
    # Config models
    "AppConfig",
    "AIConfig",
    "HistoryConfig",
    "RetryConfig",
    "UIConfig",
]
