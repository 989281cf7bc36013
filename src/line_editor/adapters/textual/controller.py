"""Textual-facing adapter that turns submitted command lines into UI updates."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict

from line_editor.buffer import BufferView
from line_editor.commands import (
    CommandArgumentError,
    CommandContext,
    CommandResult,
    bind_arguments,
    execute,
    lookup,
    parse_command_line,
)


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[BufferView], None]
    update_status: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    request_exit: Callable[[], None] = _noop
    log: Callable[[str], None] = _noop


class TextualLineEditorAdapter:
    """Bridges the command layer and its bus events to a Textual surface.

    Unlike the prompt loop, the Textual front end has a single input line,
    so every argument must be supplied inline (``insert 2 some text``).
    """

    def __init__(self, context: CommandContext, hooks: TextualUIHooks) -> None:
        self.context = context
        self.hooks = hooks
        self._subscribe_events()
        self._refresh_buffer()

    def submit(self, text: str) -> CommandResult:
        """Execute one inline command line and push the outcome to the hooks."""

        self._log_state("submit ->", text=text)
        name, remainder = parse_command_line(text)
        if not name:
            result = CommandResult(status="noop")
        else:
            result = self._dispatch(name, remainder)

        self._after_result(result)
        self._log_state("result <-", status=result.status, message=result.message)
        return result

    def _dispatch(self, name: str, remainder: str) -> CommandResult:
        spec = lookup(name)
        if spec is None:
            return execute(self.context, name, {})
        try:
            args = bind_arguments(spec, remainder)
        except CommandArgumentError as exc:
            return CommandResult(status="error", message=f"Error: {exc}")
        return execute(self.context, spec.name, args)

    def _after_result(self, result: CommandResult) -> None:
        status = result.render()
        if status:
            self.hooks.update_status(status)
        self._refresh_buffer()
        if result.exit:
            self.hooks.request_exit()

    def _subscribe_events(self) -> None:
        bus = self.context.bus
        for event in ("buffer.changed", "command.result", "command.error"):
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)

    def _refresh_buffer(self) -> None:
        self.hooks.update_buffer(self.context.buffer.view())

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        view = self.context.buffer.view()
        return {
            "buffer": self.context.buffer.name,
            "lines": view.line_count,
            "undo": view.undo_depth,
            "redo": view.redo_depth,
        }


__all__ = ["TextualLineEditorAdapter", "TextualUIHooks"]
