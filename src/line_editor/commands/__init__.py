"""Command shell: argument binding, dispatch, and text rendering."""

from .base import (
    CommandArgumentError,
    CommandBus,
    CommandContext,
    CommandResult,
    CommandSpec,
    Parameter,
)
from .display import render_buffer, render_line
from .handlers import COMMAND_NAMES, COMMANDS, execute, lookup
from .parsing import bind_arguments, coerce_arguments, parse_command_line

__all__ = [
    "COMMANDS",
    "COMMAND_NAMES",
    "CommandArgumentError",
    "CommandBus",
    "CommandContext",
    "CommandResult",
    "CommandSpec",
    "Parameter",
    "bind_arguments",
    "coerce_arguments",
    "execute",
    "lookup",
    "parse_command_line",
    "render_buffer",
    "render_line",
]
