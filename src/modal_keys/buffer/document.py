"""Plain-text document model addressed by character offsets."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

Position = Tuple[int, int]  # (row, column)


@dataclass(slots=True)
class TextDocument:
    """Text plus identity.

    ``uri`` is the identity used for per-document mode memory and bookmarks.
    Every edit bumps ``version``.
    """

    uri: str
    text: str = ""
    version: int = 0
    _line_starts: List[int] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        self._index()

    def _index(self) -> None:
        starts = [0]
        for index, char in enumerate(self.text):
            if char == "\n":
                starts.append(index + 1)
        self._line_starts = starts

    @property
    def length(self) -> int:
        return len(self.text)

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    def lines(self) -> Sequence[str]:
        return tuple(self.text.split("\n"))

    def line_at(self, row: int) -> str:
        start = self._line_starts[row]
        end = self.text.find("\n", start)
        return self.text[start:] if end < 0 else self.text[start:end]

    def line_start(self, row: int) -> int:
        return self._line_starts[row]

    def position_at(self, offset: int) -> Position:
        offset = max(0, min(offset, self.length))
        row = 0
        for index, start in enumerate(self._line_starts):
            if start > offset:
                break
            row = index
        return (row, offset - self._line_starts[row])

    def offset_at(self, position: Position) -> int:
        row, col = position
        row = max(0, min(row, self.line_count - 1))
        col = max(0, min(col, len(self.line_at(row))))
        return self._line_starts[row] + col

    def get_text(self, start: int = 0, end: int | None = None) -> str:
        return self.text[start:end]

    def replaced(self, start: int, end: int, text: str) -> "TextDocument":
        return TextDocument(
            uri=self.uri,
            text=self.text[:start] + text + self.text[end:],
            version=self.version + 1,
        )


__all__ = ["TextDocument", "Position"]
