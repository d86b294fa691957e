"""Task form validation."""

from __future__ import annotations

from pydantic import BaseModel, Field

from .dates import is_valid_date_string
from .priority import is_priority_valid

DESCRIPTION_REQUIRED = "Description is required"
INVALID_DATE_FORMAT = "Invalid date (expected YYYY-MM-DD)"
INVALID_PRIORITY = "Priority must be a single letter A-Z"


class TaskForm(BaseModel):
    """User input for creating or editing a task.

    Validation is deliberately left to ``validate_task_form`` so that invalid
    input can still be represented and reported field by field.
    """

    description: str = ""
    priority: str | None = None
    creation_date: str | None = None
    due: str | None = None
    threshold: str | None = None
    projects: list[str] = Field(default_factory=list)
    contexts: list[str] = Field(default_factory=list)
    tags: dict[str, str] = Field(default_factory=dict)


class ValidationResult(BaseModel):
    """Outcome of validate_task_form."""

    valid: bool
    errors: dict[str, str] = Field(default_factory=dict)


def validate_task_form(form: TaskForm) -> ValidationResult:
    """Check that a description is present and every given date is real."""
    errors: dict[str, str] = {}

    if not form.description.strip():
        errors["description"] = DESCRIPTION_REQUIRED

    if not is_priority_valid(form.priority or None):
        errors["priority"] = INVALID_PRIORITY

    for field in ("creation_date", "due", "threshold"):
        value = getattr(form, field)
        if value and not is_valid_date_string(value):
            errors[field] = INVALID_DATE_FORMAT

    return ValidationResult(valid=not errors, errors=errors)
