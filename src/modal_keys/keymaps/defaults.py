"""Built-in key bindings that give every mode a usable starting point."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from .models import Binding
from .parsing import bindings_from_mapping
from .registry import KeymapRegistry

_SEARCH_FORWARD = {"command": "modalkeys.search", "args": {"wrapAround": True}}
_SEARCH_BACKWARD = {
    "command": "modalkeys.search",
    "args": {"backwards": True, "wrapAround": True},
}

DEFAULT_KEYBINDINGS: Mapping[str, Mapping[str, Any]] = {
    "normal": {
        "i": "modalkeys.enterInsert",
        "a": ["cursorRight", "modalkeys.enterInsert"],
        "h": "cursorLeft",
        "l": "cursorRight",
        "w": "cursorWordRight",
        "b": "cursorWordLeft",
        "W": {"command": "modalkeys.typeKeys", "args": {"keys": "ww"}},
        "x": "deleteRight",
        "dw": {"commands": "deleteWordRight", "help": "delete word"},
        "u": ["modalkeys.untouchDocument", "undo"],
        "U": ["modalkeys.untouchDocument", "redo"],
        "p": {"command": "modalkeys.insertSnippet", "args": {"snippet": 0}},
        "m0": {"command": "modalkeys.defineBookmark", "args": {"bookmark": "0"}},
        "'0": {"command": "modalkeys.goToBookmark", "args": {"bookmark": "0"}},
        "<Esc>": "modalkeys.cancelMultipleSelections",
    },
    "visual": {
        "h": "cursorLeftSelect",
        "l": "cursorRightSelect",
        "w": "cursorWordRightSelect",
        "b": "cursorWordLeftSelect",
        "d": "deleteLeft",
        "c": ["deleteLeft", "modalkeys.enterInsert"],
        "y": [
            {"command": "modalkeys.fillSnippetFromSelection", "args": {"snippet": 0}},
            "modalkeys.cancelMultipleSelections",
        ],
        "'0": {
            "command": "modalkeys.goToBookmark",
            "args": {"bookmark": "0", "select": True},
        },
        "<Esc>": "modalkeys.cancelSelection",
    },
    "normal|visual": {
        "v": "modalkeys.toggleSelection",
        ".": "modalkeys.repeatLastChange",
        ",": "modalkeys.repeatLastUsedSelection",
        "/": _SEARCH_FORWARD,
        "?": _SEARCH_BACKWARD,
        "f": {
            "command": "modalkeys.search",
            "args": {"acceptAfter": 1, "offset": "start"},
        },
        "F": {
            "command": "modalkeys.search",
            "args": {"acceptAfter": 1, "backwards": True, "offset": "start"},
        },
        "t": {
            "command": "modalkeys.search",
            "args": {"acceptAfter": 1, "offset": "exclusive"},
        },
        "n": "modalkeys.nextMatch",
        "N": "modalkeys.previousMatch",
    },
}


def default_bindings() -> list[Binding]:
    return bindings_from_mapping(DEFAULT_KEYBINDINGS, source="defaults")


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
) -> None:
    """Register the built-in bindings; every command they use must be registered."""

    for binding in default_bindings():
        registry.register_binding(binding, replace=replace)
    for binding in extra_bindings or ():
        registry.register_binding(binding, replace=replace)


__all__ = ["DEFAULT_KEYBINDINGS", "default_bindings", "load_default_keymaps"]
