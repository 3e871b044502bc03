"""History management for undo/redo functionality."""

import logging
from typing import Any, List, Optional

logger = logging.getLogger(__name__)

# Maximum number of states to keep in history
MAX_HISTORY_SIZE = 50


class History:
    """Bounded stack of document states with a movable cursor.

    States are stored as given. Snapshots of the normalized store are never
    mutated, so they can be kept without copying.
    """

    def __init__(self, max_size: int = MAX_HISTORY_SIZE):
        self.max_size = max_size
        self._states: List[Any] = []
        self._index = -1

    def __len__(self) -> int:
        return len(self._states)

    @property
    def index(self) -> int:
        return self._index

    @property
    def current(self) -> Optional[Any]:
        if self._index < 0:
            return None
        return self._states[self._index]

    def push(self, state: Any) -> None:
        """Record a new state, discarding anything that was undone."""
        if self._index < len(self._states) - 1:
            self._states = self._states[:self._index + 1]

        self._states.append(state)

        # Limit history size to prevent memory issues
        if len(self._states) > self.max_size:
            self._states = self._states[-self.max_size:]

        self._index = len(self._states) - 1

    def clear(self) -> None:
        self._states = []
        self._index = -1

    def can_undo(self) -> bool:
        """Check if undo is possible."""
        return self._index > 0

    def can_redo(self) -> bool:
        """Check if redo is possible."""
        return self._index < len(self._states) - 1

    def undo(self) -> Optional[Any]:
        """Step back and return the previous state, or None if there is none."""
        if not self.can_undo():
            return None
        self._index -= 1
        logger.debug(f"Undo to history index {self._index}")
        return self._states[self._index]

    def redo(self) -> Optional[Any]:
        """Step forward and return the next state, or None if there is none."""
        if not self.can_redo():
            return None
        self._index += 1
        logger.debug(f"Redo to history index {self._index}")
        return self._states[self._index]
