"""Modal key handling for text editors: modes, repeatable changes, incremental search."""

__all__ = [
    "actions",
    "adapters",
    "buffer",
    "keymaps",
    "modes",
    "presentation",
    "repeat",
    "runtime",
    "search",
    "session",
    "store",
]

__version__ = "0.1.0"
