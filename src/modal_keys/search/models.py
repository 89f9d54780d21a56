"""Search parameters and the state of one search session."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional

from modal_keys.buffer import Selection

INCLUSIVE = "inclusive"
EXCLUSIVE = "exclusive"
START = "start"
END = "end"

OFFSET_POLICIES = (INCLUSIVE, EXCLUSIVE, START, END)


@dataclass(slots=True)
class SearchParams:
    """Arguments of the search command.

    ``accept_after`` is the pattern length at which the search accepts by
    itself; ``math.inf`` means only an explicit newline accepts. ``offset``
    is not validated here: an unknown policy is reported when the cursor is
    positioned.
    """

    backwards: bool = False
    case_sensitive: bool = False
    wrap_around: bool = False
    accept_after: float = math.inf
    select_till_match: bool = False
    offset: str = INCLUSIVE

    @classmethod
    def from_args(cls, args: Optional[Mapping[str, Any]]) -> "SearchParams":
        args = args or {}
        return cls(
            backwards=bool(args.get("backwards", False)),
            case_sensitive=bool(args.get("caseSensitive", False)),
            wrap_around=bool(args.get("wrapAround", False)),
            accept_after=args.get("acceptAfter") or math.inf,
            select_till_match=bool(args.get("selectTillMatch", False)),
            offset=args.get("offset") or INCLUSIVE,
        )


@dataclass(slots=True)
class SearchSession:
    params: SearchParams
    start_selections: List[Selection]
    previous_mode: str
    pattern: str = ""
    match_length: int = 0
    at_start: bool = False
    info: Optional[str] = None
    primary_ranges: List[tuple[int, int]] = field(default_factory=list)
    secondary_ranges: List[tuple[int, int]] = field(default_factory=list)

    @property
    def forward(self) -> bool:
        return not self.params.backwards

    def status_label(self) -> str:
        direction = "B" if self.params.backwards else "F"
        sensitivity = "S" if self.params.case_sensitive else ""
        return f"[{direction}{sensitivity}]: {self.pattern}"


__all__ = [
    "INCLUSIVE",
    "EXCLUSIVE",
    "START",
    "END",
    "OFFSET_POLICIES",
    "SearchParams",
    "SearchSession",
]
