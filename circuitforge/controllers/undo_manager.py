"""
UndoManager - Bounded history of circuit snapshots.

Stores whole CircuitSnapshot objects rather than a command log. Snapshots
are immutable, so keeping one per edit costs only the tuples that changed.
"""

from typing import Optional

from circuitforge.models.circuit import CircuitSnapshot

DEFAULT_MAX_DEPTH = 50


class UndoManager:
    """
    Manages undo/redo over a ring of snapshots.

    The history is a list with a cursor. Pushing after an undo drops the
    redo tail; once more than ``max_depth`` snapshots are held, the oldest
    are discarded.
    """

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH):
        """
        Initialize the undo manager.

        Args:
            max_depth: Maximum number of snapshots to keep (default 50)
        """
        if max_depth < 1:
            raise ValueError("max_depth must be at least 1")
        self.max_depth = max_depth
        self._history: list[CircuitSnapshot] = []
        self._index = -1

    def push(self, snapshot: CircuitSnapshot) -> None:
        """
        Record a new snapshot as the current state.

        Clears any redo history since a new edit invalidates it.
        """
        del self._history[self._index + 1:]
        self._history.append(snapshot)

        # Enforce max depth
        overflow = len(self._history) - self.max_depth
        if overflow > 0:
            del self._history[:overflow]

        self._index = len(self._history) - 1

    def undo(self) -> Optional[CircuitSnapshot]:
        """
        Step back one snapshot.

        Returns:
            The snapshot to restore, or None if there is nothing to undo
        """
        if not self.can_undo():
            return None
        self._index -= 1
        return self._history[self._index]

    def redo(self) -> Optional[CircuitSnapshot]:
        """
        Step forward one snapshot.

        Returns:
            The snapshot to restore, or None if there is nothing to redo
        """
        if not self.can_redo():
            return None
        self._index += 1
        return self._history[self._index]

    def current(self) -> Optional[CircuitSnapshot]:
        if self._index < 0:
            return None
        return self._history[self._index]

    def can_undo(self) -> bool:
        """Return whether there is an older snapshot to go back to."""
        return self._index > 0

    def can_redo(self) -> bool:
        """Return whether there is a newer snapshot to go forward to."""
        return self._index < len(self._history) - 1

    def clear(self) -> None:
        """Forget all history."""
        self._history.clear()
        self._index = -1

    def get_undo_count(self) -> int:
        """Return the number of steps that can be undone."""
        return max(self._index, 0)

    def get_redo_count(self) -> int:
        """Return the number of steps that can be redone."""
        return len(self._history) - 1 - self._index

    def __len__(self) -> int:
        return len(self._history)
