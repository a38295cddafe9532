"""Board view support: configuration, history, search, hull geometry, annotations, key bindings and measurement data."""

__version__ = "0.1.0"

__all__ = [
    "annotations",
    "cli",
    "confparse",
    "docfile",
    "history",
    "keybindings",
    "obdata",
    "searcher",
    "spell",
    "userdirs",
    "utils",
    "vectorhulls",
]