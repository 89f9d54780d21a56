"""Quick snippets: a short indexable list of text fragments."""

from __future__ import annotations

from typing import List, Optional


class QuickSnippets:
    def __init__(self) -> None:
        self._items: List[str] = []

    def store(self, index: int, text: str) -> None:
        if index < 0:
            raise IndexError(f"Snippet index {index} is negative")
        if index >= len(self._items):
            self._items.extend([""] * (index + 1 - len(self._items)))
        self._items[index] = text

    def get(self, index: int) -> Optional[str]:
        if 0 <= index < len(self._items) and self._items[index]:
            return self._items[index]
        return None

    def __len__(self) -> int:
        return len(self._items)
