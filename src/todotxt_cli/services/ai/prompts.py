"""Prompt construction and response parsing for AI task entry."""

from __future__ import annotations

import re

from todotxt_cli.core.parser import parse_line, with_serialized_raw
from todotxt_cli.models.task import Task

DEFAULT_CONTEXTS = {
    "pc": "pc",
    "phone": "phone",
    "home": "home",
    "office": "office",
    "email": "email",
}

TODOTXT_RULES = """## todo.txt format
1. Completed: line starts with "x "
2. Priority: (A) to (Z), uppercase, at the start of the line
3. Creation date: YYYY-MM-DD
4. Project: +ProjectName
5. Context: @context
6. Due date: due:YYYY-MM-DD
7. Threshold date: t:YYYY-MM-DD"""

_LIST_MARKER_RE = re.compile(r"^(?:\d+[.)]|[-*])\s*")


def _context_mappings(custom_contexts: dict[str, str], separator: str) -> str:
    contexts = {**DEFAULT_CONTEXTS, **custom_contexts}
    return separator.join(f"#{key} → @{value}" for key, value in contexts.items())


def build_system_prompt(current_date: str, custom_contexts: dict[str, str]) -> str:
    """System prompt for turning free text into todo.txt lines."""
    sections = [
        "You are a task management expert. Convert the user's natural language "
        "input into todo.txt lines.",
        f"""## Conversion rules
1. One task per line
2. Start each line with the creation date {current_date} (YYYY-MM-DD)
3. Projects use +ProjectName
4. Contexts use @context
5. Due dates use due:YYYY-MM-DD""",
        """## Projects
When the input opens with "About X", "Regarding X" or "X related", add +X to
the tasks that follow.""",
        "## Contexts\nConvert a trailing #keyword using these rules:\n"
        + _context_mappings(custom_contexts, "\n"),
        """## Priority
- "urgent", "top priority", "right away" → (A)
- "important", "priority" → (B)
- "soon" → (C)
- otherwise no priority""",
        f"## Due dates\nConvert relative dates to absolute dates (today: {current_date})",
        "## Output\nOutput only todo.txt lines, one task per line, no explanations",
    ]
    return "\n\n".join(sections)


def build_edit_prompt(
    task: Task, instruction: str, current_date: str, custom_contexts: dict[str, str]
) -> str:
    """Prompt for rewriting one existing task line."""
    sections = [
        "You are a task management expert. Edit the existing todo.txt task "
        "according to the instruction.",
        f"## Current task\n{task.raw or task.description}",
        f"## Instruction\n{instruction}",
        TODOTXT_RULES,
        f"""## Editing rules
- Keep existing elements and apply only the requested change
- Convert relative dates (tomorrow, next week) to absolute dates (today: {current_date})
- Use the uppercase parenthesised form when changing priority
- Context mappings: {_context_mappings(custom_contexts, ", ")}""",
        "## Output\nOutput only the edited task as a single todo.txt line, no explanations",
    ]
    return "\n\n".join(sections)


def build_bulk_edit_prompt(
    tasks: list[Task], instruction: str, current_date: str, custom_contexts: dict[str, str]
) -> str:
    """Prompt for applying one instruction to several tasks at once."""
    task_list = "\n".join(f"{i}. {task.raw}" for i, task in enumerate(tasks, start=1))
    mappings = _context_mappings(custom_contexts, ", ")
    return f"""You are a todo.txt format expert. Edit the following tasks according to the instruction.

Current date: {current_date}
Context mappings: {mappings}

## Tasks to edit:
{task_list}

## Instruction:
{instruction}

## Rules:
- Output EXACTLY {len(tasks)} lines, one for each input task
- Each line must be a valid todo.txt format task
- Apply the instruction to ALL tasks
- Preserve existing tags/contexts unless explicitly modified
- Output ONLY the edited tasks, no explanations or numbering"""


def build_decompose_prompt(
    description: str,
    current_date: str,
    custom_instruction: str | None = None,
    projects: list[str] | None = None,
    contexts: list[str] | None = None,
) -> str:
    """Prompt for splitting one task into 3 to 7 subtasks."""
    sections = [
        "You are a task management expert. Break the following task down into "
        "actionable subtasks.",
        f"## Task\n{description}",
        """## Rules
1. Produce between 3 and 7 subtasks
2. Each subtask is concrete and actionable
3. Order subtasks logically
4. Write each subtask as a todo.txt line""",
        f"""## todo.txt format
- Creation date: {current_date} (YYYY-MM-DD) at the start of the line
- Project: +ProjectName
- Context: @context
- Due date: due:YYYY-MM-DD""",
    ]
    if projects:
        tags = " ".join(f"+{project}" for project in projects)
        sections.append(f"## Inherited projects\nAdd these project tags to every subtask: {tags}")
    if contexts:
        tags = " ".join(f"@{context}" for context in contexts)
        sections.append(f"## Inherited contexts\nAdd these context tags to every subtask: {tags}")
    if custom_instruction:
        sections.append(f"## Additional instructions\n{custom_instruction}")
    sections.append("## Output\nOutput only the subtasks as todo.txt lines, one per line")
    return "\n\n".join(sections)


def split_response_lines(content: str) -> list[str]:
    """Non-empty, stripped lines of a model response."""
    return [line.strip() for line in content.split("\n") if line.strip()]


def parse_decompose_response(content: str) -> list[str]:
    """Extract subtask lines, dropping list markers such as ``1.``, ``2)``, ``-`` and ``*``."""
    lines = (_LIST_MARKER_RE.sub("", line, count=1).strip() for line in split_response_lines(content))
    return [line for line in lines if line]


def create_subtasks_from_decomposition(
    subtask_lines: list[str], parent: Task, current_date: str
) -> list[Task]:
    """Build incomplete subtasks that carry the parent's projects and contexts."""
    subtasks = []
    for line in subtask_lines:
        for project in parent.projects:
            if f"+{project}" not in line:
                line += f" +{project}"
        for context in parent.contexts:
            if f"@{context}" not in line:
                line += f" @{context}"
        task = parse_line(line.strip())
        update: dict = {"completed": False, "completion_date": None}
        if task.creation_date is None:
            update["creation_date"] = current_date
        subtasks.append(with_serialized_raw(task.model_copy(update=update)))
    return subtasks
