"""Executable Textual app hosting the line editor."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

try:  # pragma: no cover - imported only when the TUI is launched
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Input, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use line_editor.adapters.textual.app"
    ) from exc

from line_editor.buffer import BufferView
from line_editor.commands import CommandContext, render_buffer
from line_editor.config import EditorConfig
from line_editor.runtime import telemetry

from .controller import TextualLineEditorAdapter, TextualUIHooks


@dataclass
class UIState:
    buffer_text: str = ""
    status_text: str = ""


class LineEditorApp(App[None]):
    """Buffer pane, status line, and a command input."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		border: round $accent;
		padding: 1 1;
		content-align: left top;
		overflow: auto;
	}

	#status-line {
		height: auto;
		max-height: 8;
		background: $surface-darken-1;
		padding: 0 1;
	}

	#command-line {
		dock: bottom;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, *, config: Optional[EditorConfig] = None) -> None:
        super().__init__()
        self._config = config
        self._state = UIState()
        self.adapter: TextualLineEditorAdapter | None = None
        self._buffer_widget: Static | None = None
        self._status_widget: Static | None = None
        self._logger = telemetry.get_logger("line_editor.tui")

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="buffer-area"):
            self._buffer_widget = Static("", id="buffer-view", markup=False)
            yield self._buffer_widget
        self._status_widget = Static(
            "Type a command, e.g. 'insert 1 hello' or 'help'",
            id="status-line",
            markup=False,
        )
        yield self._status_widget
        yield Input(placeholder="command", id="command-line")
        yield Footer()

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
            handle_event=self._handle_event,
            request_exit=self.exit,
            log=self._log_line,
        )
        self.adapter = TextualLineEditorAdapter(
            CommandContext.create(self._config), hooks
        )
        self.query_one("#command-line", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if not self.adapter:
            return
        value = event.value
        event.input.value = ""
        self.adapter.submit(value)

    def _update_buffer(self, view: BufferView) -> None:
        self._state.buffer_text = "\n".join(render_buffer(view))
        if self._buffer_widget:
            self._buffer_widget.update(self._state.buffer_text)

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)

    def _handle_event(self, name: str, payload: Any | None) -> None:
        if name == "buffer.changed":
            self.sub_title = f"{getattr(payload, 'label', '')}"

    def _log_line(self, line: str) -> None:
        self._logger.debug(line)
