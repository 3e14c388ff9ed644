"""Linear undo/redo history over whole-state snapshots."""

from __future__ import annotations

from typing import Generic, List, TypeVar

T = TypeVar("T")

DEFAULT_HISTORY_LIMIT = 50


class UndoRedoManager(Generic[T]):
    """
    Bounded undo stack plus redo stack over opaque state snapshots.

    Every ``add_change`` is one undo step and discards any redo history.
    Only ``add_change`` enforces ``limit``; a redo may push the undo stack
    one past it until the next change trims it again.
    """

    def __init__(self, initial_state: T, limit: int = DEFAULT_HISTORY_LIMIT):
        """
        Initialize history.

        Args:
            initial_state: Starting state (not itself undoable)
            limit: Maximum undo stack size; oldest entries are evicted first
        """
        self.limit = limit or DEFAULT_HISTORY_LIMIT
        self._undo_stack: List[T] = []
        self._redo_stack: List[T] = []
        self._current_state = initial_state

    def add_change(self, new_state: T) -> None:
        """Record ``new_state`` as the current state."""
        self._undo_stack.append(self._current_state)
        while len(self._undo_stack) > self.limit:
            self._undo_stack.pop(0)
        self._redo_stack = []
        self._current_state = new_state

    def undo(self) -> T:
        """Step back one change; returns the current state unchanged if there is nothing to undo."""
        if not self.can_undo():
            return self._current_state
        self._redo_stack.append(self._current_state)
        self._current_state = self._undo_stack.pop()
        return self._current_state

    def redo(self) -> T:
        """Re-apply the last undone change; returns the current state unchanged if there is nothing to redo."""
        if not self.can_redo():
            return self._current_state
        self._undo_stack.append(self._current_state)
        self._current_state = self._redo_stack.pop()
        return self._current_state

    def can_undo(self) -> bool:
        return len(self._undo_stack) > 0

    def can_redo(self) -> bool:
        return len(self._redo_stack) > 0

    def clear(self) -> None:
        """Drop all history, keeping the current state."""
        self._undo_stack = []
        self._redo_stack = []

    def get_current_state(self) -> T:
        return self._current_state

    def get_undo_stack_size(self) -> int:
        return len(self._undo_stack)

    def get_redo_stack_size(self) -> int:
        return len(self._redo_stack)
