"""Named cursor positions, grouped, across documents."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional

from modal_keys.buffer import TextDocument

DEFAULT_GROUP = "default"


@dataclass(frozen=True, slots=True)
class Bookmark:
    label: str
    uri: str
    offset: int
    description: str

    @classmethod
    def at(cls, label: str, document: TextDocument, offset: int) -> "Bookmark":
        row, col = document.position_at(offset)
        text = document.line_at(row)
        return cls(
            label=label,
            uri=document.uri,
            offset=offset,
            description=f"Ln {row}, Col {col}: {text}",
        )


class BookmarkSet:
    def __init__(self) -> None:
        self._groups: Dict[str, Dict[str, Bookmark]] = {}

    def define(
        self,
        label: str,
        document: TextDocument,
        offset: int,
        *,
        group: str = DEFAULT_GROUP,
    ) -> Bookmark:
        bookmark = Bookmark.at(label, document, offset)
        self._groups.setdefault(group, {})[label] = bookmark
        return bookmark

    def get(self, label: str, *, group: str = DEFAULT_GROUP) -> Optional[Bookmark]:
        return self._groups.get(group, {}).get(label)

    def remove(self, label: str, *, group: str = DEFAULT_GROUP) -> Optional[Bookmark]:
        bucket = self._groups.get(group)
        if not bucket:
            return None
        removed = bucket.pop(label, None)
        if not bucket:
            self._groups.pop(group, None)
        return removed

    def clear(self, group: Optional[str] = None) -> None:
        if group is None:
            self._groups.clear()
        else:
            self._groups.pop(group, None)

    def groups(self) -> List[str]:
        return sorted(self._groups)

    def for_document(self, uri: str) -> List[Bookmark]:
        return [bookmark for bookmark in self if bookmark.uri == uri]

    def __iter__(self) -> Iterator[Bookmark]:
        for bucket in self._groups.values():
            yield from bucket.values()

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in self._groups.values())


__all__ = ["Bookmark", "BookmarkSet", "DEFAULT_GROUP"]
