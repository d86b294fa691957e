"""Configuration models.

The whole configuration is stored as a single ``config.json`` document and
validated into an ``AppConfig`` on load.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from .filter import FilterPreset, GroupMode, SortMode, StatusMode


class UIConfig(BaseModel):
    """List view configuration."""

    language: str = Field(default="en")
    default_sort: SortMode = Field(default="completion")
    default_group: GroupMode = Field(default="none")
    default_status: StatusMode = Field(default="all")


class HistoryConfig(BaseModel):
    """Undo/redo configuration."""

    max_size: int = Field(default=20, ge=1)


class RetryConfig(BaseModel):
    """Retry policy for AI requests."""

    enabled: bool = Field(default=True)
    max_retries: int = Field(default=3, ge=0)
    initial_delay_ms: int = Field(default=1000, ge=0)


class AIConfig(BaseModel):
    """OpenRouter configuration."""

    api_key: str = Field(default="")
    model: str = Field(default="anthropic/claude-3.5-haiku")
    endpoint: str = Field(default="https://openrouter.ai/api/v1")
    timeout: int = Field(default=30)
    custom_contexts: dict[str, str] = Field(default_factory=dict)
    retry: RetryConfig = Field(default_factory=RetryConfig)

    @field_validator("endpoint")
    @classmethod
    def validate_endpoint(cls, v: str) -> str:
        """Strip trailing slashes so paths can be joined safely."""
        if not v or not v.strip():
            raise ValueError("endpoint cannot be empty")
        return v.strip().rstrip("/")


class AppConfig(BaseModel):
    """Main todotxt-cli configuration"""

    todo_file: str | None = Field(
        default=None, description="Default todo.txt file (None = data dir)"
    )
    todo_paths: list[str] = Field(
        default_factory=list, description="Files always treated as todo.txt"
    )

    ui: UIConfig = Field(default_factory=UIConfig)
    history: HistoryConfig = Field(default_factory=HistoryConfig)
    ai: AIConfig = Field(default_factory=AIConfig)

    filter_presets: list[FilterPreset] = Field(default_factory=list)
