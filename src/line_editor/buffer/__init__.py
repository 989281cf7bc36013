"""Line buffer engine, snapshots, and undo/redo history."""

from .buffer import BufferDelta, BufferView, LineBuffer, Transaction
from .document import LineDocument
from .state import NOT_FOUND, BufferState, Cursor, Operation
from .undo import History
from .validation import (
    BufferValidationError,
    CapacityExceededError,
    InvalidLineNumberError,
    ensure_insertable,
    ensure_line,
)

__all__ = [
    "BufferDelta",
    "BufferState",
    "BufferValidationError",
    "BufferView",
    "CapacityExceededError",
    "Cursor",
    "History",
    "InvalidLineNumberError",
    "LineBuffer",
    "LineDocument",
    "NOT_FOUND",
    "Operation",
    "Transaction",
    "ensure_insertable",
    "ensure_line",
]
