"""Offset checks shared by surface operations."""

from __future__ import annotations

from .document import TextDocument
from .state import Selection
from .sync import SurfaceValidationError


def ensure_offset(document: TextDocument, offset: int) -> int:
    if offset < 0 or offset > document.length:
        raise SurfaceValidationError("Offset out of range", offset=offset)
    return offset


def clamp_selection(document: TextDocument, selection: Selection) -> Selection:
    def clamp(value: int) -> int:
        return max(0, min(value, document.length))

    return Selection(clamp(selection.anchor), clamp(selection.active))
