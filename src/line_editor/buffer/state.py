"""Cursor positions and history snapshots for line buffers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


@dataclass(frozen=True, slots=True)
class Cursor:
    """``(line, position)`` pair; ``(-1, -1)`` means not found / unset."""

    line: int = -1
    position: int = -1

    @property
    def found(self) -> bool:
        return self.line >= 0 and self.position >= 0


NOT_FOUND = Cursor()


class Operation(str, Enum):
    """Kind of mutation that produced a snapshot."""

    INSERT = "I"
    DELETE = "D"
    UPDATE = "U"


@dataclass(frozen=True, slots=True)
class BufferState:
    """Immutable copy of every line, taken before a mutation."""

    lines: Tuple[str, ...]
    operation: Operation
