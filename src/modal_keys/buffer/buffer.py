"""In-memory editor surface used by tests, the Textual demo, and headless hosts."""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Callable, ContextManager, Dict, List, Optional, Sequence, Tuple

from modal_keys.runtime import telemetry
from modal_keys.runtime.config import DecorationStyle

from .document import TextDocument
from .state import Selection
from .sync import BufferMirror, Range
from .undo import UndoEntry, UndoTimeline
from .validation import clamp_selection, ensure_offset

Edit = Tuple[int, int, str]


class EditorBuffer:
    """A single editor: one document, a list of cursors, decorations, a viewport.

    The first selection is the primary one. Assigning selections drops exact
    duplicates, so cursors that land on the same range merge into one.
    """

    def __init__(
        self,
        text: str = "",
        *,
        uri: str = "untitled:1",
        selections: Optional[Sequence[Selection]] = None,
        visible_ranges: Optional[Sequence[Range]] = None,
    ) -> None:
        self._document = TextDocument(uri=uri, text=text)
        self._selections: List[Selection] = list(selections or [Selection.cursor(0)])
        self._visible: Optional[List[Range]] = (
            list(visible_ranges) if visible_ranges is not None else None
        )
        self.decorations: Dict[str, Tuple[Tuple[Range, ...], Optional[DecorationStyle]]] = {}
        self.revealed: List[Selection] = []
        self.undo_history = UndoTimeline()
        self._text_listeners: List[Callable[[TextDocument], None]] = []
        self._selection_listeners: List[Callable[[List[Selection]], None]] = []

    @property
    def document(self) -> TextDocument:
        return self._document

    @property
    def text(self) -> str:
        return self._document.text

    @property
    def selections(self) -> List[Selection]:
        return list(self._selections)

    @selections.setter
    def selections(self, value: Sequence[Selection]) -> None:
        updated: List[Selection] = []
        for selection in value:
            selection = clamp_selection(self._document, selection)
            if selection not in updated:
                updated.append(selection)
        if not updated:
            updated = [Selection.cursor(0)]
        if updated == self._selections:
            return
        self._selections = updated
        for callback in list(self._selection_listeners):
            callback(list(updated))

    @property
    def selection(self) -> Selection:
        return self._selections[0]

    @property
    def visible_ranges(self) -> List[Range]:
        if self._visible is None:
            return [(0, self._document.length)]
        return [
            (max(0, start), min(end, self._document.length))
            for start, end in self._visible
        ]

    def set_visible_ranges(self, ranges: Optional[Sequence[Range]]) -> None:
        self._visible = list(ranges) if ranges is not None else None

    def set_decorations(
        self,
        kind: str,
        ranges: Sequence[Range],
        style: Optional[DecorationStyle] = None,
    ) -> None:
        if not ranges:
            self.decorations.pop(kind, None)
            return
        self.decorations[kind] = (tuple(ranges), style)

    def decoration_ranges(self, kind: str) -> Tuple[Range, ...]:
        entry = self.decorations.get(kind)
        return entry[0] if entry else ()

    def reveal(self, selection: Selection) -> None:
        self.revealed.append(selection)

    def on_text_changed(self, callback: Callable[[TextDocument], None]) -> None:
        self._text_listeners.append(callback)

    def on_selection_changed(
        self, callback: Callable[[List[Selection]], None]
    ) -> None:
        self._selection_listeners.append(callback)

    def apply_edits(self, edits: Sequence[Edit], *, label: str) -> List[int]:
        """Apply non-overlapping edits and return the offset after each one.

        Offsets are returned in the order the edits were given, expressed in
        the coordinates of the edited document.
        """

        if not edits:
            return []
        for start, end, _ in edits:
            ensure_offset(self._document, start)
            ensure_offset(self._document, end)

        with Transaction(self, label) as tx:
            document = self._document
            for start, end, text in sorted(edits, key=lambda e: e[0], reverse=True):
                document = document.replaced(start, end, text)

            landed: List[int] = []
            for start, end, text in edits:
                shift = sum(
                    len(other_text) - (other_end - other_start)
                    for other_start, other_end, other_text in edits
                    if other_start < start
                )
                landed.append(start + shift + len(text))
            tx.commit(document, [Selection.cursor(offset) for offset in landed])
        return landed

    def replace_range(self, start: int, end: int, text: str, *, label: str) -> int:
        return self.apply_edits([(start, end, text)], label=label)[0]

    def insert_text(self, text: str) -> List[int]:
        edits = [(sel.start, sel.end, text) for sel in self._selections]
        return self.apply_edits(edits, label="insert_text")

    def undo(self) -> bool:
        entry = self.undo_history.undo()
        if entry is None:
            return False
        self._restore(entry.before_text, entry.selections_before)
        return True

    def redo(self) -> bool:
        entry = self.undo_history.redo()
        if entry is None:
            return False
        self._restore(entry.after_text, entry.selections_after)
        return True

    def _restore(self, text: str, selections: Sequence[Selection]) -> None:
        self._set_document(
            TextDocument(
                uri=self._document.uri, text=text, version=self._document.version + 1
            )
        )
        self.selections = selections

    def _set_document(self, document: TextDocument) -> None:
        self._document = document
        for callback in list(self._text_listeners):
            callback(document)

    def mirror(self) -> BufferMirror:
        return BufferMirror(
            uri=self._document.uri,
            text=self._document.text,
            selections=tuple(self._selections),
            decorations={
                kind: ranges for kind, (ranges, _style) in self.decorations.items()
            },
        )


class Transaction(AbstractContextManager["Transaction"]):
    """Wraps one edit in a telemetry span and records it for undo."""

    def __init__(self, buffer: EditorBuffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component=True,
            metadata={"document": self.buffer.document.uri},
        )
        self._span_cm.__enter__()
        return self

    def commit(self, document: TextDocument, selections: List[Selection]) -> None:
        buffer = self.buffer
        entry = UndoEntry(
            label=self.label,
            before_text=buffer.document.text,
            after_text=document.text,
            selections_before=tuple(buffer.selections),
            selections_after=tuple(selections),
        )
        buffer.undo_history.push(entry)
        buffer._set_document(document)
        buffer.selections = selections

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False


__all__ = ["EditorBuffer", "Transaction", "Edit"]
