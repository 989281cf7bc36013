"""Editor limits and their environment overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

ENV_PREFIX = "LINE_EDITOR_"

MAX_LINES = 25
UNDO_LIMIT = 3


def _env_int(env: Mapping[str, str], key: str, fallback: int) -> int:
    value = env.get(f"{ENV_PREFIX}{key}")
    if value is None:
        return fallback
    try:
        parsed = int(value)
    except ValueError:
        return fallback
    return parsed if parsed > 0 else fallback


@dataclass(frozen=True, slots=True)
class EditorConfig:
    """Capacity and history depth for one editing session."""

    max_lines: int = MAX_LINES
    undo_limit: int = UNDO_LIMIT

    def __post_init__(self) -> None:
        if self.max_lines < 1:
            raise ValueError("max_lines must be at least 1")
        if self.undo_limit < 1:
            raise ValueError("undo_limit must be at least 1")

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "EditorConfig":
        source = os.environ if env is None else env
        return cls(
            max_lines=_env_int(source, "MAX_LINES", MAX_LINES),
            undo_limit=_env_int(source, "UNDO_LIMIT", UNDO_LIMIT),
        )

    def with_overrides(
        self, *, max_lines: Optional[int] = None, undo_limit: Optional[int] = None
    ) -> "EditorConfig":
        return EditorConfig(
            max_lines=self.max_lines if max_lines is None else max_lines,
            undo_limit=self.undo_limit if undo_limit is None else undo_limit,
        )


__all__ = ["EditorConfig", "MAX_LINES", "UNDO_LIMIT"]
