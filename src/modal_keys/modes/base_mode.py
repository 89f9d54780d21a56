"""Mode names, the event bus and the shared context every component reads."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from modal_keys.buffer import EditorSurface
from modal_keys.runtime.config import Settings

NORMAL = "normal"
INSERT = "insert"
SEARCH = "search"
VISUAL = "visual"

BUILTIN_MODES = (NORMAL, INSERT, SEARCH, VISUAL)

ModeHook = Callable[[str, str], None]


class ModeBus:
    """Minimal event bus letting components publish structured signals."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, List[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in list(self._subscribers.get(event, [])):
            callback(payload)


@dataclass(slots=True)
class ModeContext:
    """Services shared by the mode controller, recorder and search engine.

    ``editor`` is the surface that currently has focus; it is ``None`` when
    no editor is open.
    """

    bus: ModeBus = field(default_factory=ModeBus)
    settings: Settings = field(default_factory=Settings)
    editor: Optional[EditorSurface] = None
    extras: Dict[str, object] = field(default_factory=dict)

    def notify(self, level: str, message: str, detail: str | None = None) -> None:
        self.bus.emit(f"notify.{level}", {"message": message, "detail": detail})


@dataclass(slots=True)
class ModeHooks:
    """Callbacks run as a mode is entered or left, called with ``(new, old)``."""

    enter: List[ModeHook] = field(default_factory=list)
    exit: List[ModeHook] = field(default_factory=list)


__all__ = [
    "NORMAL",
    "INSERT",
    "SEARCH",
    "VISUAL",
    "BUILTIN_MODES",
    "ModeBus",
    "ModeContext",
    "ModeHook",
    "ModeHooks",
]
