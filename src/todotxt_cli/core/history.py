"""Bounded undo/redo history.

The current state is the top of the undo stack, so a history needs at least
two entries before anything can be undone.
"""

from __future__ import annotations

from collections import deque
from typing import Any, Generic, TypeVar

T = TypeVar("T")

DEFAULT_MAX_SIZE = 20


class UndoRedoHistory(Generic[T]):
    """Two-stack history with FIFO eviction of the oldest state."""

    def __init__(self, max_size: int = DEFAULT_MAX_SIZE):
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self.max_size = max_size
        self._undo: deque[T] = deque(maxlen=max_size)
        self._redo: list[T] = []

    def push(self, state: T) -> None:
        """Record *state* as current and drop everything redoable."""
        self._undo.append(state)
        self._redo.clear()

    def undo(self) -> T | None:
        """Step back and return the now current state, or None."""
        if not self.can_undo():
            return None
        self._redo.append(self._undo.pop())
        return self._undo[-1]

    def redo(self) -> T | None:
        """Step forward and return the restored state, or None."""
        if not self._redo:
            return None
        state = self._redo.pop()
        self._undo.append(state)
        return state

    def current(self) -> T | None:
        """The latest recorded state, or None for an empty history."""
        return self._undo[-1] if self._undo else None

    def can_undo(self) -> bool:
        return len(self._undo) >= 2

    def can_redo(self) -> bool:
        return bool(self._redo)

    def clear(self) -> None:
        self._undo.clear()
        self._redo.clear()

    def history_length(self) -> int:
        return len(self._undo)

    def to_dict(self) -> dict[str, Any]:
        return {
            "max_size": self.max_size,
            "undo": list(self._undo),
            "redo": list(self._redo),
        }

    @classmethod
    def from_dict(
        cls, data: dict[str, Any], max_size: int | None = None
    ) -> UndoRedoHistory[Any]:
        """Rebuild a history saved with ``to_dict``.

        *max_size* overrides the stored size; the oldest states are dropped
        when the saved stack is larger.
        """
        history: UndoRedoHistory[Any] = cls(max_size or data.get("max_size", DEFAULT_MAX_SIZE))
        history._undo.extend(data.get("undo", []))
        history._redo.extend(data.get("redo", []))
        return history


def create_snapshot(history: UndoRedoHistory[str], text: str) -> None:
    """Push document *text* onto *history*."""
    history.push(text)
