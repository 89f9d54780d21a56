"""Selection value type shared by the surface, search engine and commands."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True, slots=True)
class Selection:
    """Anchor/active pair of document offsets.

    ``active`` is where the cursor sits; ``anchor`` is the fixed end. A
    selection is empty when both ends coincide.
    """

    anchor: int
    active: int

    @classmethod
    def cursor(cls, offset: int) -> "Selection":
        return cls(offset, offset)

    @property
    def start(self) -> int:
        return min(self.anchor, self.active)

    @property
    def end(self) -> int:
        return max(self.anchor, self.active)

    @property
    def is_empty(self) -> bool:
        return self.anchor == self.active

    @property
    def is_reversed(self) -> bool:
        return self.active < self.anchor

    def collapse(self) -> "Selection":
        return Selection(self.active, self.active)

    def moved_to(self, offset: int, *, keep_anchor: bool = False) -> "Selection":
        return Selection(self.anchor if keep_anchor else offset, offset)


def any_selected(selections: Sequence[Selection]) -> bool:
    return any(not sel.is_empty for sel in selections)


__all__ = ["Selection", "any_selected"]
