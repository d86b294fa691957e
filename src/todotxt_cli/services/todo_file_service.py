"""File access for todo.txt documents, their archive and undo history.

Each CLI invocation is a separate process, so the undo/redo history of a
todo file is kept as JSON in the data directory, keyed by the file's path.
"""

from __future__ import annotations

import hashlib
import json
from pathlib import Path

from todotxt_cli.core.archive import (
    ArchiveResult,
    append_to_archive_file,
    archive_completed_tasks,
    get_archive_file_path,
)
from todotxt_cli.core.history import UndoRedoHistory, create_snapshot
from todotxt_cli.utils.logger import get_logger


class TodoFileService:
    """Read and write one todo.txt file with undo history."""

    def __init__(self, todo_path: Path, data_dir: Path, history_size: int = 20):
        self.todo_path = Path(todo_path)
        self.history_dir = Path(data_dir) / "history"
        self.history_size = history_size

    # ------------------------------------------------------------------
    # Plain file access
    # ------------------------------------------------------------------

    @staticmethod
    def exists(path: Path) -> bool:
        return Path(path).is_file()

    @staticmethod
    def read(path: Path) -> str:
        """Return the file contents, or ``""`` when the file does not exist."""
        path = Path(path)
        if not path.exists():
            return ""
        return path.read_text(encoding="utf-8")

    @staticmethod
    def write(path: Path, text: str) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")

    # ------------------------------------------------------------------
    # Todo document
    # ------------------------------------------------------------------

    @property
    def archive_path(self) -> Path:
        return Path(get_archive_file_path(str(self.todo_path)))

    def load(self) -> str:
        return self.read(self.todo_path)

    def save(self, text: str) -> None:
        """Write *text* to the todo file and record it in the undo history.

        The state before the change is recorded first when the history does
        not end with it (first change, or the file was edited elsewhere), so
        the change can always be undone.
        """
        history = self.load_history()
        before = self.load()
        if history.current() != before:
            create_snapshot(history, before)
        self.write(self.todo_path, text)
        create_snapshot(history, text)
        self.save_history(history)
        get_logger().debug("saved %s (%d bytes)", self.todo_path, len(text))

    def archive(self) -> ArchiveResult:
        """Move completed tasks into ``done.txt`` next to the todo file."""
        result = archive_completed_tasks(self.load())
        if not result.completed_tasks:
            return result
        archived = append_to_archive_file(self.read(self.archive_path), result.completed_tasks)
        self.write(self.archive_path, archived)
        self.save(result.remaining_content)
        get_logger().info(
            "archived %d tasks to %s", len(result.completed_tasks), self.archive_path
        )
        return result

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    @property
    def history_path(self) -> Path:
        key = hashlib.sha1(str(self.todo_path.resolve()).encode("utf-8")).hexdigest()
        return self.history_dir / f"{key}.json"

    def load_history(self) -> UndoRedoHistory[str]:
        if not self.history_path.exists():
            return UndoRedoHistory(self.history_size)
        try:
            data = json.loads(self.history_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            get_logger().warning("discarding unreadable history %s", self.history_path)
            return UndoRedoHistory(self.history_size)
        return UndoRedoHistory.from_dict(data, max_size=self.history_size)

    def save_history(self, history: UndoRedoHistory[str]) -> None:
        self.write(self.history_path, json.dumps(history.to_dict(), ensure_ascii=False))

    def undo(self) -> str | None:
        """Restore the previous state of the file; None when nothing to undo."""
        history = self.load_history()
        state = history.undo()
        if state is None:
            return None
        self.write(self.todo_path, state)
        self.save_history(history)
        return state

    def redo(self) -> str | None:
        history = self.load_history()
        state = history.redo()
        if state is None:
            return None
        self.write(self.todo_path, state)
        self.save_history(history)
        return state
