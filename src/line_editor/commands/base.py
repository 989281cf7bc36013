"""Shared types for the command shell layered over ``LineBuffer``."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Mapping, Optional, Tuple

from line_editor.buffer import LineBuffer
from line_editor.config import EditorConfig


class CommandArgumentError(ValueError):
    """Raised when a command argument is missing or cannot be converted."""

    def __init__(self, message: str, *, parameter: str | None = None) -> None:
        super().__init__(message)
        self.parameter = parameter


@dataclass(slots=True)
class CommandResult:
    """Rendered outcome of one shell command."""

    status: str = "ok"
    message: Optional[str] = None
    lines: Tuple[str, ...] = ()

    @property
    def exit(self) -> bool:
        return self.status == "exit"

    @property
    def failed(self) -> bool:
        return self.status == "error"

    def render(self) -> str:
        parts = [self.message] if self.message else []
        parts.extend(self.lines)
        return "\n".join(parts)


class CommandBus:
    """Minimal event bus letting front ends observe dispatched commands."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


@dataclass(slots=True)
class CommandContext:
    """Services every command handler can reach."""

    buffer: LineBuffer
    bus: CommandBus = field(default_factory=CommandBus)

    @classmethod
    def create(
        cls, config: Optional[EditorConfig] = None, *, name: str = "default"
    ) -> "CommandContext":
        return cls(buffer=LineBuffer(name=name, config=config))


@dataclass(frozen=True, slots=True)
class Parameter:
    """One positional command argument.

    ``rest`` parameters take the remainder of an inline command line
    verbatim, spaces included, and must come last. ``within_capacity``
    restricts an integer to the 1-based line range ``[1, capacity]``.
    """

    name: str
    prompt: str
    kind: type = str
    rest: bool = False
    within_capacity: bool = False

    def prompt_for(self, capacity: int) -> str:
        return self.prompt.format(max_lines=capacity)

    def read_answer(self, answer: str) -> str:
        """Reduce a prompted answer to what this parameter consumes.

        Only ``rest`` parameters keep the whole line; the others take the
        first whitespace-separated token.
        """

        if self.rest:
            return answer
        tokens = answer.split(maxsplit=1)
        return tokens[0] if tokens else ""

    def coerce(self, raw: object, capacity: int) -> object:
        if self.kind is not int:
            return str(raw)
        try:
            value = int(str(raw).strip())
        except ValueError as exc:
            raise CommandArgumentError(
                f"{self.name.replace('_', ' ')} must be a whole number",
                parameter=self.name,
            ) from exc
        if self.within_capacity and not 1 <= value <= capacity:
            raise CommandArgumentError(
                f"Line number must be between 1 and {capacity}",
                parameter=self.name,
            )
        return value


CommandHandler = Callable[[CommandContext, Mapping[str, object]], CommandResult]


@dataclass(frozen=True, slots=True)
class CommandSpec:
    name: str
    summary: str
    handler: CommandHandler
    parameters: Tuple[Parameter, ...] = ()
    aliases: Tuple[str, ...] = ()

    @property
    def usage(self) -> str:
        names = [
            f"<{param.name}...>" if param.rest else f"<{param.name}>"
            for param in self.parameters
        ]
        return " ".join([self.name, *names])


__all__ = [
    "CommandArgumentError",
    "CommandBus",
    "CommandContext",
    "CommandHandler",
    "CommandResult",
    "CommandSpec",
    "Parameter",
]
