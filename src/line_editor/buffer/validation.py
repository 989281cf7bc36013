"""Error types and range checks shared by buffer operations."""

from __future__ import annotations

from .document import LineDocument


class BufferValidationError(RuntimeError):
    """Raised when an edit is rejected before touching the buffer."""


class CapacityExceededError(BufferValidationError):
    """Raised when an insert would grow the buffer past its line limit."""

    def __init__(self, capacity: int) -> None:
        super().__init__(
            f"Cannot insert line: buffer is full (maximum {capacity} lines)"
        )
        self.capacity = capacity


class InvalidLineNumberError(BufferValidationError):
    """Raised when a line index falls outside the buffer."""

    def __init__(self, line_number: int, message: str = "Invalid line number") -> None:
        super().__init__(message)
        self.line_number = line_number


def ensure_line(document: LineDocument, line_number: int) -> int:
    if not document.contains(line_number):
        raise InvalidLineNumberError(line_number)
    return line_number


def ensure_insertable(document: LineDocument, position: int) -> int:
    if document.is_full:
        raise CapacityExceededError(document.capacity)
    if position < 0:
        raise InvalidLineNumberError(position)
    # Padding up to ``position`` plus the new line must still fit.
    if position >= document.capacity:
        raise CapacityExceededError(document.capacity)
    return position
