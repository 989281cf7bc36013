"""Text rendering of buffer contents for terminal front ends."""

from __future__ import annotations

from typing import Tuple

from line_editor.buffer import BufferView

EMPTY_LINE = "(empty)"
EMPTY_BUFFER = "Buffer is empty"


def render_line(index: int, text: str) -> str:
    return f"Line No{index + 1}: {text or EMPTY_LINE}"


def render_buffer(view: BufferView) -> Tuple[str, ...]:
    if view.is_empty:
        return (EMPTY_BUFFER,)
    header = f"Buffer contents ({view.line_count}/{view.capacity} lines):"
    return (header, *(render_line(i, text) for i, text in enumerate(view.lines)))


def buffer_size(view: BufferView) -> str:
    return f"Buffer size: {view.line_count}/{view.capacity}"
