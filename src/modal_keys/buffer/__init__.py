"""Editor surface boundary and the in-memory reference surface."""

from .buffer import EditorBuffer, Transaction
from .document import Position, TextDocument
from .state import Selection, any_selected
from .sync import BufferMirror, EditorSurface, Range, SurfaceValidationError
from .undo import UndoEntry, UndoTimeline
from .validation import clamp_selection, ensure_offset

__all__ = [
    "EditorBuffer",
    "Transaction",
    "TextDocument",
    "Position",
    "Selection",
    "any_selected",
    "BufferMirror",
    "EditorSurface",
    "Range",
    "SurfaceValidationError",
    "UndoEntry",
    "UndoTimeline",
    "clamp_selection",
    "ensure_offset",
]
