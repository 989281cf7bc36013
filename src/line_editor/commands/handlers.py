"""Command table and dispatch for the line editor shell.

User-facing line numbers are 1-based; handlers translate them before
calling into ``LineBuffer``.
"""

from __future__ import annotations

from typing import Dict, Mapping, Optional

from line_editor.buffer import BufferDelta, BufferValidationError, Cursor
from line_editor.runtime import telemetry

from .base import (
    CommandArgumentError,
    CommandContext,
    CommandResult,
    CommandSpec,
    Parameter,
)
from .display import buffer_size, render_buffer
from .parsing import coerce_arguments

Args = Mapping[str, object]

LINE = Parameter(
    "line", "Enter line number (1-{max_lines}): ", kind=int, within_capacity=True
)
TEXT = Parameter("text", "Enter text: ", rest=True)


def _size_message(context: CommandContext, prefix: str) -> str:
    return f"{prefix}. {buffer_size(context.buffer.view())}"


def _notify(context: CommandContext, delta: Optional[BufferDelta]) -> None:
    if delta is not None:
        context.bus.emit("buffer.changed", delta)


def _handle_insert(context: CommandContext, args: Args) -> CommandResult:
    line = int(args["line"])
    delta = context.buffer.insert_line(line - 1, str(args["text"]))
    _notify(context, delta)
    return CommandResult(message=_size_message(context, "Line inserted successfully"))


def _handle_search(context: CommandContext, args: Args) -> CommandResult:
    cursor = context.buffer.search_word(str(args["word"]))
    if not cursor.found:
        return CommandResult(status="noop", message="Word not found")
    return CommandResult(
        message=f"Found at line {cursor.line + 1}, position {cursor.position}"
    )


def _handle_display(context: CommandContext, args: Args) -> CommandResult:
    del args
    return CommandResult(lines=render_buffer(context.buffer.view()))


def _handle_update(context: CommandContext, args: Args) -> CommandResult:
    line, start = int(args["line"]), int(args["start"])
    delta = context.buffer.update_line(line - 1, start, str(args["text"]))
    _notify(context, delta)
    if not delta.changed:
        length = len(delta.lines[line - 1])
        reason = (
            f"start position must be between 0 and {length}"
            if not 0 <= start <= length
            else "text is identical"
        )
        return CommandResult(status="noop", message=f"Line {line} unchanged: {reason}")
    return CommandResult(message=f"Line {line} updated successfully")


def _handle_delete(context: CommandContext, args: Args) -> CommandResult:
    delta = context.buffer.delete_line(int(args["line"]) - 1)
    _notify(context, delta)
    return CommandResult(message=_size_message(context, "Line deleted successfully"))


def _handle_insert_word(context: CommandContext, args: Args) -> CommandResult:
    line = int(args["line"])
    cursor = Cursor(line - 1, int(args["position"]))
    delta = context.buffer.insert_word(cursor, str(args["word"]))
    if delta is None:
        return CommandResult(status="noop", message=f"No line {line}; nothing inserted")
    _notify(context, delta)
    return CommandResult(message=f"Word inserted on line {line}")


def _handle_replace(context: CommandContext, args: Args) -> CommandResult:
    old, new = str(args["old"]), str(args["new"])
    cursor = context.buffer.search_word(old)
    if not cursor.found:
        return CommandResult(status="noop", message="Word not found")
    delta = context.buffer.update_word(cursor, old, new)
    _notify(context, delta)
    return CommandResult(
        message=f"Replaced '{old}' with '{new}' on line {cursor.line + 1}"
    )


def _handle_erase(context: CommandContext, args: Args) -> CommandResult:
    word = str(args["word"])
    cursor = context.buffer.search_word(word)
    if not cursor.found:
        return CommandResult(status="noop", message="Word not found")
    delta = context.buffer.delete_word(cursor, word)
    _notify(context, delta)
    return CommandResult(message=f"Deleted '{word}' from line {cursor.line + 1}")


def _handle_undo(context: CommandContext, args: Args) -> CommandResult:
    del args
    delta = context.buffer.undo()
    if delta is None:
        return CommandResult(status="noop", message="Nothing to undo")
    _notify(context, delta)
    return CommandResult(message=_size_message(context, "Undo performed"))


def _handle_redo(context: CommandContext, args: Args) -> CommandResult:
    del args
    delta = context.buffer.redo()
    if delta is None:
        return CommandResult(status="noop", message="Nothing to redo")
    _notify(context, delta)
    return CommandResult(message=_size_message(context, "Redo performed"))


def _handle_help(context: CommandContext, args: Args) -> CommandResult:
    del context, args
    width = max(len(spec.usage) for spec in _SPECS)
    return CommandResult(
        lines=tuple(f"{spec.usage.ljust(width)}  {spec.summary}" for spec in _SPECS)
    )


def _handle_exit(context: CommandContext, args: Args) -> CommandResult:
    del context, args
    return CommandResult(status="exit")


_SPECS = (
    CommandSpec(
        "insert",
        "insert a line, padding with empty lines",
        _handle_insert,
        (LINE, TEXT),
    ),
    CommandSpec(
        "search",
        "find the first occurrence of a word",
        _handle_search,
        (Parameter("word", "Enter word to search: "),),
    ),
    CommandSpec("display", "show the whole buffer", _handle_display),
    CommandSpec(
        "update",
        "replace a line from a position onwards",
        _handle_update,
        (
            Parameter("line", "Enter line number to update: ", kind=int),
            Parameter("start", "Enter starting position: ", kind=int),
            Parameter("text", "Enter new text: ", rest=True),
        ),
    ),
    CommandSpec(
        "delete",
        "delete a line",
        _handle_delete,
        (Parameter("line", "Enter line number to delete: ", kind=int),),
    ),
    CommandSpec(
        "insertword",
        "insert a word at a position on a line",
        _handle_insert_word,
        (
            Parameter("line", "Enter line number: ", kind=int),
            Parameter("position", "Enter position: ", kind=int),
            Parameter("word", "Enter word to insert: "),
        ),
    ),
    CommandSpec(
        "replace",
        "replace the first occurrence of a word",
        _handle_replace,
        (
            Parameter("old", "Enter word to replace: "),
            Parameter("new", "Enter replacement word: "),
        ),
    ),
    CommandSpec(
        "erase",
        "delete the first occurrence of a word",
        _handle_erase,
        (Parameter("word", "Enter word to delete: "),),
    ),
    CommandSpec("undo", "undo the last change", _handle_undo),
    CommandSpec("redo", "redo the last undone change", _handle_redo),
    CommandSpec("help", "list commands", _handle_help, aliases=("?",)),
    CommandSpec("exit", "leave the editor", _handle_exit, aliases=("quit", "q")),
)

COMMANDS: Dict[str, CommandSpec] = {}
for _spec in _SPECS:
    for _name in (_spec.name, *_spec.aliases):
        COMMANDS[_name] = _spec
del _spec, _name

COMMAND_NAMES = tuple(spec.name for spec in _SPECS)


def lookup(name: str) -> Optional[CommandSpec]:
    return COMMANDS.get(name.lower())


def execute(
    context: CommandContext, name: str, raw_args: Mapping[str, object]
) -> CommandResult:
    """Run one command and turn any rejected edit into an error result."""

    spec = lookup(name)
    if spec is None:
        context.bus.emit("command.error", name)
        return CommandResult(status="error", message="Invalid command")

    with telemetry.span(
        f"command::{spec.name}",
        component="commands",
        metadata={"buffer": context.buffer.name},
    ):
        try:
            values = coerce_arguments(spec, raw_args, context.buffer.capacity)
            result = spec.handler(context, values)
        except (BufferValidationError, CommandArgumentError) as exc:
            result = CommandResult(status="error", message=f"Error: {exc}")

    telemetry.record_event(
        "command.dispatch",
        level="info" if result.failed else "debug",
        data={"command": spec.name, "status": result.status},
    )
    context.bus.emit("command.result", (spec.name, result))
    return result


__all__ = ["COMMANDS", "COMMAND_NAMES", "execute", "lookup"]
