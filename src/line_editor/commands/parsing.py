"""Splitting inline command lines into named raw arguments."""

from __future__ import annotations

from typing import Dict, Mapping, Tuple

from .base import CommandArgumentError, CommandSpec


def parse_command_line(text: str) -> Tuple[str, str]:
    """Return ``(command, remainder)`` with the command name lower-cased."""

    stripped = text.strip()
    if not stripped:
        return "", ""
    head, _, tail = stripped.partition(" ")
    return head.lower(), tail.strip()


def bind_arguments(spec: CommandSpec, remainder: str) -> Dict[str, str]:
    """Assign whitespace-separated tokens to ``spec``'s parameters in order.

    Parameters without a token are left out of the mapping so that an
    interactive caller can prompt for them.
    """

    params = spec.parameters
    if not remainder:
        return {}
    if not params:
        raise CommandArgumentError(f"'{spec.name}' takes no arguments")

    if params[-1].rest:
        tokens = remainder.split(maxsplit=len(params) - 1)
    else:
        tokens = remainder.split()
        if len(tokens) > len(params):
            raise CommandArgumentError(
                f"'{spec.name}' takes at most {len(params)} argument(s)"
            )
    return {param.name: token for param, token in zip(params, tokens)}


def coerce_arguments(
    spec: CommandSpec, raw: Mapping[str, object], capacity: int
) -> Dict[str, object]:
    values: Dict[str, object] = {}
    for param in spec.parameters:
        if param.name not in raw:
            raise CommandArgumentError(
                f"Missing argument '{param.name}' (usage: {spec.usage})",
                parameter=param.name,
            )
        values[param.name] = param.coerce(raw[param.name], capacity)
    return values


__all__ = ["bind_arguments", "coerce_arguments", "parse_command_line"]
