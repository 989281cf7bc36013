"""Bounded undo/redo stacks of buffer snapshots."""

from __future__ import annotations

from collections import deque
from typing import Deque, Optional

from line_editor.config import UNDO_LIMIT

from .state import BufferState


class History:
    """Linear undo/redo history.

    Both stacks are capped at ``limit`` entries; pushing past the cap drops
    the oldest snapshot. Recording a new edit clears the redo stack, so redo
    is only available directly after one or more undos.
    """

    def __init__(self, limit: int = UNDO_LIMIT) -> None:
        if limit < 1:
            raise ValueError("History limit must be at least 1")
        self.limit = limit
        self._undo: Deque[BufferState] = deque(maxlen=limit)
        self._redo: Deque[BufferState] = deque(maxlen=limit)

    def record(self, state: BufferState) -> None:
        """Push the pre-edit snapshot of a new mutation."""

        self._undo.append(state)
        self._redo.clear()

    def can_undo(self) -> bool:
        return bool(self._undo)

    def can_redo(self) -> bool:
        return bool(self._redo)

    def undo(self, current: BufferState) -> Optional[BufferState]:
        """Swap ``current`` onto the redo stack and return the state to restore."""

        if not self._undo:
            return None
        self._redo.append(current)
        return self._undo.pop()

    def redo(self, current: BufferState) -> Optional[BufferState]:
        if not self._redo:
            return None
        self._undo.append(current)
        return self._redo.pop()

    @property
    def undo_depth(self) -> int:
        return len(self._undo)

    @property
    def redo_depth(self) -> int:
        return len(self._redo)

    def peek_undo(self) -> Optional[BufferState]:
        return self._undo[-1] if self._undo else None

    def peek_redo(self) -> Optional[BufferState]:
        return self._redo[-1] if self._redo else None
