"""Capacity-bounded line storage backing ``LineBuffer``."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Tuple

from line_editor.config import MAX_LINES


@dataclass(slots=True)
class LineDocument:
    """Mutable list-of-lines model with a hard line limit.

    The document performs no range checking of its own; ``LineBuffer``
    validates every index before calling in, so these primitives can stay
    plain list operations.
    """

    _lines: List[str] = field(default_factory=list)
    capacity: int = MAX_LINES

    def snapshot(self) -> Tuple[str, ...]:
        """Return the current lines as a tuple detached from the live list."""

        return tuple(self._lines)

    def restore(self, lines: Iterable[str]) -> None:
        self._lines = list(lines)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    @property
    def is_full(self) -> bool:
        return len(self._lines) >= self.capacity

    def get_line(self, index: int) -> str:
        return self._lines[index]

    def contains(self, index: int) -> bool:
        return 0 <= index < len(self._lines)

    def pad_to(self, count: int) -> None:
        """Append empty lines until the document holds ``count`` lines."""

        missing = count - len(self._lines)
        if missing > 0:
            self._lines.extend([""] * missing)

    def insert(self, index: int, text: str) -> None:
        self._lines.insert(index, text)

    def replace(self, index: int, text: str) -> None:
        self._lines[index] = text

    def delete(self, index: int) -> str:
        return self._lines.pop(index)
