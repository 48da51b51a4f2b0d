"""UI-agnostic editing core: highlighting, diagnostics and undo history."""

__all__ = [
    "adapters",
    "catalog",
    "config",
    "diagnostics",
    "highlight",
    "history",
    "languages",
    "runtime",
    "session",
]

__version__ = "0.1.0"
