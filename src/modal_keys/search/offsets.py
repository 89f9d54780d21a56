"""Where the cursor lands relative to a match once a search settles."""

from __future__ import annotations

from typing import List, Optional, Tuple

from modal_keys.buffer import Selection

from .models import END, EXCLUSIVE, INCLUSIVE, START


class UnknownOffsetPolicy(ValueError):
    def __init__(self, policy: str) -> None:
        super().__init__(f'Unexpected search offset "{policy}"')
        self.policy = policy


def offset_shift(policy: str, length: int, forward: bool) -> Tuple[int, bool]:
    """Return ``(shift, cursor_at_start)`` for a match of ``length``.

    ``forward`` is the direction actually travelled. After matching, the
    cursor sits at the match end going forward and at the match start going
    backward.
    """

    if policy == INCLUSIVE:
        return 0, not forward
    if policy == EXCLUSIVE:
        return (-length if forward else length), forward
    if policy == START:
        return (-length if forward else 0), True
    if policy == END:
        return (0 if forward else length), False
    raise UnknownOffsetPolicy(policy)


def unposition_shift(at_start: bool, length: int, forward: bool) -> int:
    """Shift that undoes the last positioning before searching ``forward`` again."""

    if at_start != forward:
        return 0
    return length if forward else -length


def shift_selections(
    selections: List[Selection],
    shift: int,
    *,
    keep_anchor: bool,
    limit: Optional[int] = None,
) -> List[Selection]:
    moved = []
    for selection in selections:
        target = selection.active + shift
        if limit is not None:
            target = max(0, min(target, limit))
        moved.append(selection.moved_to(target, keep_anchor=keep_anchor))
    return moved


__all__ = [
    "UnknownOffsetPolicy",
    "offset_shift",
    "unposition_shift",
    "shift_selections",
]
