"""Line buffer engine combining the document, snapshots, and history."""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import Callable, ContextManager, Optional, Tuple

from line_editor.config import EditorConfig
from line_editor.runtime import telemetry

from .document import LineDocument
from .state import NOT_FOUND, BufferState, Cursor, Operation
from .undo import History
from .validation import BufferValidationError, ensure_insertable, ensure_line


@dataclass(frozen=True, slots=True)
class BufferView:
    lines: Tuple[str, ...]
    line_count: int
    capacity: int
    undo_depth: int
    redo_depth: int

    @property
    def is_empty(self) -> bool:
        return self.line_count == 0


@dataclass(frozen=True, slots=True)
class BufferDelta:
    """Outcome of a recorded edit or of an undo/redo step."""

    label: str
    operation: Operation
    lines: Tuple[str, ...]
    line_count: int
    changed: bool


class LineBuffer:
    """Bounded list of lines with line/word edits and undo/redo.

    Line numbers are 0-based. Line-level edits raise
    ``BufferValidationError`` subclasses when their target is out of range;
    word-level edits given a cursor outside the buffer return ``None`` and
    leave both the lines and the history untouched.
    """

    def __init__(
        self,
        *,
        name: str = "default",
        config: Optional[EditorConfig] = None,
        document: Optional[LineDocument] = None,
        history: Optional[History] = None,
    ) -> None:
        settings = config or EditorConfig()
        self.name = name
        self.document = document or LineDocument(capacity=settings.max_lines)
        self.history = history or History(settings.undo_limit)

    @property
    def lines(self) -> Tuple[str, ...]:
        return self.document.snapshot()

    @property
    def line_count(self) -> int:
        return self.document.line_count

    @property
    def capacity(self) -> int:
        return self.document.capacity

    @property
    def can_undo(self) -> bool:
        return self.history.can_undo()

    @property
    def can_redo(self) -> bool:
        return self.history.can_redo()

    def get_line(self, index: int) -> str:
        return self.document.get_line(ensure_line(self.document, index))

    def view(self) -> BufferView:
        return BufferView(
            lines=self.document.snapshot(),
            line_count=self.document.line_count,
            capacity=self.document.capacity,
            undo_depth=self.history.undo_depth,
            redo_depth=self.history.redo_depth,
        )

    # line-level edits

    def insert_line(self, position: int, text: str) -> BufferDelta:
        """Insert ``text`` at ``position``, padding with empty lines if needed."""

        self._validate("insert_line", ensure_insertable, position)
        with Transaction(self, "insert_line", Operation.INSERT) as tx:
            self.document.pad_to(position)
            self.document.insert(position, text)
        return tx.delta

    def update_line(self, line_number: int, start: int, new_text: str) -> BufferDelta:
        """Replace everything from ``start`` onwards with ``new_text``.

        A ``start`` outside ``[0, len(line)]`` leaves the text alone, but the
        snapshot is still recorded.
        """

        self._validate("update_line", ensure_line, line_number)
        with Transaction(self, "update_line", Operation.UPDATE) as tx:
            line = self.document.get_line(line_number)
            if 0 <= start <= len(line):
                self.document.replace(line_number, line[:start] + new_text)
        return tx.delta

    def delete_line(self, line_number: int) -> BufferDelta:
        self._validate("delete_line", ensure_line, line_number)
        with Transaction(self, "delete_line", Operation.DELETE) as tx:
            self.document.delete(line_number)
        return tx.delta

    # word-level edits

    def insert_word(self, cursor: Cursor, word: str) -> Optional[BufferDelta]:
        """Splice ``word`` into the cursor line; past-the-end appends."""

        if not self.document.contains(cursor.line):
            return self._skip("insert_word", cursor)
        with Transaction(self, "insert_word", Operation.UPDATE) as tx:
            line = self.document.get_line(cursor.line)
            offset = min(max(cursor.position, 0), len(line))
            self.document.replace(cursor.line, line[:offset] + word + line[offset:])
        return tx.delta

    def update_word(
        self, cursor: Cursor, old_word: str, new_word: str
    ) -> Optional[BufferDelta]:
        """Replace the first ``old_word`` at or after the cursor on its line.

        The snapshot is recorded even when ``old_word`` does not occur.
        """

        if not self.document.contains(cursor.line):
            return self._skip("update_word", cursor)
        with Transaction(self, "update_word", Operation.UPDATE) as tx:
            self._splice(cursor, old_word, new_word)
        return tx.delta

    def delete_word(self, cursor: Cursor, word: str) -> Optional[BufferDelta]:
        if not self.document.contains(cursor.line):
            return self._skip("delete_word", cursor)
        with Transaction(self, "delete_word", Operation.DELETE) as tx:
            self._splice(cursor, word, "")
        return tx.delta

    def search_word(self, word: str) -> Cursor:
        """Return the first match in line-major, leftmost order."""

        with telemetry.span(
            "buffer::search_word",
            component="buffer",
            metadata={"buffer": self.name},
        ) as handle:
            for index, line in enumerate(self.document.snapshot()):
                position = line.find(word)
                if position != -1:
                    handle.add_metadata("line", index)
                    return Cursor(index, position)
            handle.add_metadata("line", "none")
        return NOT_FOUND

    # history

    def undo(self) -> Optional[BufferDelta]:
        """Restore the most recent snapshot, or return ``None`` if there is none."""

        return self._step("undo", self.history.undo)

    def redo(self) -> Optional[BufferDelta]:
        return self._step("redo", self.history.redo)

    def _step(
        self,
        label: str,
        move: Callable[[BufferState], Optional[BufferState]],
    ) -> Optional[BufferDelta]:
        before = self.document.snapshot()
        restored = move(BufferState(before, Operation.UPDATE))
        if restored is None:
            telemetry.record_event(
                "history.empty",
                data={"buffer": self.name, "direction": label},
            )
            return None
        with telemetry.span(
            f"buffer::{label}",
            component="history",
            metadata={"buffer": self.name, "restored": restored.operation.name},
        ):
            self.document.restore(restored.lines)
        telemetry.record_event(
            f"history.{label}",
            data={
                "buffer": self.name,
                "lines": self.document.line_count,
                "undo_depth": self.history.undo_depth,
                "redo_depth": self.history.redo_depth,
            },
        )
        after = self.document.snapshot()
        return BufferDelta(
            label=label,
            operation=restored.operation,
            lines=after,
            line_count=len(after),
            changed=before != after,
        )

    # helpers

    def _splice(self, cursor: Cursor, target: str, replacement: str) -> None:
        line = self.document.get_line(cursor.line)
        found = line.find(target, max(cursor.position, 0))
        if found != -1:
            updated = line[:found] + replacement + line[found + len(target) :]
            self.document.replace(cursor.line, updated)

    def _validate(
        self, label: str, check: Callable[[LineDocument, int], int], index: int
    ) -> None:
        try:
            check(self.document, index)
        except BufferValidationError as exc:
            telemetry.record_event(
                "buffer.rejected",
                level="info",
                data={
                    "buffer": self.name,
                    "operation": label,
                    "index": index,
                    "reason": str(exc),
                },
            )
            raise

    def _skip(self, label: str, cursor: Cursor) -> None:
        telemetry.record_event(
            "buffer.skipped",
            level="debug",
            data={"buffer": self.name, "operation": label, "cursor": cursor},
        )
        return None


class Transaction(AbstractContextManager["Transaction"]):
    """Records the pre-edit snapshot and wraps the edit in a telemetry span."""

    def __init__(self, buffer: LineBuffer, label: str, operation: Operation) -> None:
        self.buffer = buffer
        self.label = label
        self.operation = operation
        self._span_cm: Optional[ContextManager[object]] = None
        self._before: Tuple[str, ...] = ()
        self._delta: Optional[BufferDelta] = None

    @property
    def delta(self) -> BufferDelta:
        if self._delta is None:
            raise RuntimeError(f"Transaction '{self.label}' has not completed")
        return self._delta

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component="buffer",
            metadata={"buffer": self.buffer.name, "operation": self.operation.name},
        )
        self._span_cm.__enter__()
        self._before = self.buffer.document.snapshot()
        self.buffer.history.record(BufferState(self._before, self.operation))
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is None:
            after = self.buffer.document.snapshot()
            self._delta = BufferDelta(
                label=self.label,
                operation=self.operation,
                lines=after,
                line_count=len(after),
                changed=after != self._before,
            )
            telemetry.record_event(
                "buffer.edit",
                level="debug",
                data={
                    "buffer": self.buffer.name,
                    "operation": self.label,
                    "lines": len(after),
                    "changed": self._delta.changed,
                },
            )
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False
