"""Incremental search: parameters, offset policies and the search engine."""

from .models import (
    END,
    EXCLUSIVE,
    INCLUSIVE,
    OFFSET_POLICIES,
    START,
    SearchParams,
    SearchSession,
)
from .offsets import UnknownOffsetPolicy, offset_shift, shift_selections, unposition_shift
from .engine import (
    NOT_FOUND,
    PRIMARY_DECORATION,
    SECONDARY_DECORATION,
    SearchEngine,
    find_from,
    fold_case,
)

__all__ = [
    "END",
    "EXCLUSIVE",
    "INCLUSIVE",
    "OFFSET_POLICIES",
    "START",
    "SearchParams",
    "SearchSession",
    "UnknownOffsetPolicy",
    "offset_shift",
    "shift_selections",
    "unposition_shift",
    "NOT_FOUND",
    "PRIMARY_DECORATION",
    "SECONDARY_DECORATION",
    "SearchEngine",
    "find_from",
    "fold_case",
]
