"""Interactive terminal shell for the line editor."""

from __future__ import annotations

import argparse
import sys
from typing import Callable, Dict, Optional, Sequence, TextIO

from line_editor.commands import (
    COMMAND_NAMES,
    CommandArgumentError,
    CommandContext,
    CommandResult,
    bind_arguments,
    execute,
    lookup,
    parse_command_line,
)
from line_editor.config import EditorConfig
from line_editor.runtime import telemetry

BANNER = "Line Editor Started (In-Memory Mode)"
COMMAND_PROMPT = "Enter command: "

ReadLine = Callable[[str], str]


def _menu() -> str:
    return "\nCommands: " + ", ".join(COMMAND_NAMES)


def _read_command(
    context: CommandContext, raw: str, read_line: ReadLine
) -> CommandResult:
    name, remainder = parse_command_line(raw)
    spec = lookup(name)
    if spec is None:
        return execute(context, name, {})

    capacity = context.buffer.capacity
    try:
        args: Dict[str, object] = dict(bind_arguments(spec, remainder))
        for param in spec.parameters:
            if param.name in args:
                continue
            answer = param.read_answer(read_line(param.prompt_for(capacity)))
            # Reject a bad answer before prompting for the next argument.
            param.coerce(answer, capacity)
            args[param.name] = answer
    except CommandArgumentError as exc:
        return CommandResult(status="error", message=f"Error: {exc}")
    return execute(context, spec.name, args)


def run_repl(
    context: CommandContext,
    *,
    read_line: ReadLine = input,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
) -> int:
    """Prompt for commands until ``exit`` or end of input."""

    out = stdout or sys.stdout
    err = stderr or sys.stderr
    print(BANNER, file=out)
    print(f"Maximum buffer size: {context.buffer.capacity} lines", file=out)

    while True:
        print(_menu(), file=out)
        try:
            raw = read_line(COMMAND_PROMPT)
            if not raw.strip():
                continue
            result = _read_command(context, raw, read_line)
        except (EOFError, KeyboardInterrupt):
            print(file=out)
            return 0

        text = result.render()
        if text:
            print(text, file=err if result.failed else out)
        if result.exit:
            return 0


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="line-editor",
        description="In-memory line editor with bounded undo/redo.",
    )
    parser.add_argument(
        "--max-lines",
        type=int,
        default=None,
        help="Maximum number of lines (default: $LINE_EDITOR_MAX_LINES or 25)",
    )
    parser.add_argument(
        "--undo-limit",
        type=int,
        default=None,
        help="Undo history depth (default: $LINE_EDITOR_UNDO_LIMIT or 3)",
    )
    parser.add_argument(
        "--log-preset",
        choices=telemetry.PRESETS,
        default=None,
        help="Telemetry preset to apply before starting",
    )
    parser.add_argument(
        "--tui",
        action="store_true",
        help="Run the Textual interface instead of the prompt loop",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)
    try:
        config = EditorConfig.from_env().with_overrides(
            max_lines=args.max_lines, undo_limit=args.undo_limit
        )
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    if args.tui:
        from line_editor.adapters.textual.app import LineEditorApp

        LineEditorApp(config=config).run()
        return 0
    return run_repl(CommandContext.create(config))


if __name__ == "__main__":  # pragma: no cover - manual entry point
    sys.exit(main())
