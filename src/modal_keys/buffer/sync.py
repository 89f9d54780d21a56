"""Boundary between the modal core and whatever editor hosts it."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Protocol, Sequence, Tuple

from modal_keys.runtime.config import DecorationStyle

from .document import TextDocument
from .state import Selection

Range = Tuple[int, int]


@dataclass(slots=True)
class BufferMirror:
    """Host-friendly snapshot of a surface for rendering."""

    uri: str
    text: str
    selections: Tuple[Selection, ...]
    decorations: Dict[str, Tuple[Range, ...]] = field(default_factory=dict)


class EditorSurface(Protocol):
    """What the core needs from an editor.

    The core reads the document and selections, assigns selections, paints
    decorations, and asks for ranges to be revealed. Text mutation belongs
    to the editor's own commands.
    """

    @property
    def document(self) -> TextDocument: ...

    @property
    def selections(self) -> List[Selection]: ...

    @selections.setter
    def selections(self, value: Sequence[Selection]) -> None: ...

    @property
    def visible_ranges(self) -> List[Range]: ...

    def set_decorations(
        self,
        kind: str,
        ranges: Sequence[Range],
        style: Optional[DecorationStyle] = None,
    ) -> None: ...

    def reveal(self, selection: Selection) -> None: ...

    def on_text_changed(self, callback: Callable[[TextDocument], None]) -> None: ...

    def on_selection_changed(
        self, callback: Callable[[List[Selection]], None]
    ) -> None: ...

    def mirror(self) -> BufferMirror: ...


class SurfaceValidationError(RuntimeError):
    """Raised when an offset falls outside the document."""

    def __init__(self, message: str, *, offset: int | None = None) -> None:
        super().__init__(message)
        self.offset = offset


__all__ = ["BufferMirror", "EditorSurface", "Range", "SurfaceValidationError"]
