"""Linear undo history for the in-memory surface."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from .state import Selection


@dataclass(slots=True)
class UndoEntry:
    label: str
    before_text: str
    after_text: str
    selections_before: Tuple[Selection, ...]
    selections_after: Tuple[Selection, ...]


class UndoTimeline:
    def __init__(self) -> None:
        self._entries: List[UndoEntry] = []
        self._index = -1

    def push(self, entry: UndoEntry) -> None:
        del self._entries[self._index + 1 :]
        self._entries.append(entry)
        self._index = len(self._entries) - 1

    def can_undo(self) -> bool:
        return self._index >= 0

    def can_redo(self) -> bool:
        return self._index < len(self._entries) - 1

    def undo(self) -> Optional[UndoEntry]:
        if not self.can_undo():
            return None
        entry = self._entries[self._index]
        self._index -= 1
        return entry

    def redo(self) -> Optional[UndoEntry]:
        if not self.can_redo():
            return None
        self._index += 1
        return self._entries[self._index]
