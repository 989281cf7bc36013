"""Bounded in-memory line editor with undo/redo history."""

__all__ = [
    "adapters",
    "buffer",
    "commands",
    "config",
    "runtime",
]

__version__ = "0.1.0"
