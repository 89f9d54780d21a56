from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

import pytest

from modal_keys.buffer import EditorBuffer, Range, Selection
from modal_keys.modes import NORMAL, SEARCH, ModeContext, ModeController
from modal_keys.search import (
    NOT_FOUND,
    PRIMARY_DECORATION,
    SECONDARY_DECORATION,
    SearchEngine,
    SearchParams,
    UnknownOffsetPolicy,
    find_from,
    fold_case,
    offset_shift,
)


def make_engine(
    text: str,
    selections: Optional[Sequence[Selection]] = None,
    visible_ranges: Optional[Sequence[Range]] = None,
) -> Tuple[SearchEngine, EditorBuffer, ModeController]:
    buffer = EditorBuffer(text, selections=selections, visible_ranges=visible_ranges)
    modes = ModeController(ModeContext(editor=buffer))
    return SearchEngine(modes), buffer, modes


def type_pattern(engine: SearchEngine, pattern: str) -> None:
    for char in pattern:
        engine.search(char)


def test_case_insensitive_search_matches_at_cursor() -> None:
    engine, buffer, modes = make_engine("Foo bar foo baz")

    engine.search({})
    type_pattern(engine, "foo")

    assert modes.mode == SEARCH
    assert buffer.selections == [Selection(0, 3)]
    assert buffer.decoration_ranges(PRIMARY_DECORATION) == ((0, 3),)
    assert buffer.decoration_ranges(SECONDARY_DECORATION) == ((8, 11),)


def test_case_sensitive_search_skips_other_case() -> None:
    engine, buffer, _modes = make_engine("Foo bar foo baz")

    engine.search({"caseSensitive": True})
    type_pattern(engine, "foo")

    assert buffer.selections == [Selection(8, 11)]


def test_cancel_restores_start_selections() -> None:
    start = [Selection(1, 2), Selection.cursor(5)]
    engine, buffer, modes = make_engine("abc abc", selections=start)

    engine.search({})
    type_pattern(engine, "c")
    assert buffer.selections == [Selection(2, 3), Selection(6, 7)]

    engine.cancel()

    assert buffer.selections == start
    assert modes.mode == NORMAL
    assert buffer.decorations == {}
    assert buffer.revealed[-1] == start[0]


def test_cancel_outside_search_is_a_no_op() -> None:
    engine, buffer, modes = make_engine("abc", selections=[Selection.cursor(1)])

    engine.cancel()
    engine.cancel()

    assert modes.mode == NORMAL
    assert buffer.selections == [Selection.cursor(1)]


def test_missing_pattern_leaves_cursor_and_reports() -> None:
    engine, buffer, _modes = make_engine("abc", selections=[Selection.cursor(2)])

    engine.search({})
    type_pattern(engine, "a")

    assert buffer.selections == [Selection.cursor(2)]
    assert engine.info == NOT_FOUND


def test_wraparound_continues_from_top() -> None:
    engine, buffer, _modes = make_engine("abc", selections=[Selection.cursor(2)])

    engine.search({"wrapAround": True})
    type_pattern(engine, "a")

    assert buffer.selections == [Selection(0, 1)]
    assert engine.info == "Search hit BOTTOM continuing at TOP"


def test_backward_wraparound_flips_selection() -> None:
    engine, buffer, _modes = make_engine("abc", selections=[Selection.cursor(0)])

    engine.search({"backwards": True, "wrapAround": True})
    type_pattern(engine, "c")

    assert buffer.selections == [Selection(3, 2)]
    assert engine.info == "Search hit TOP continuing at BOTTOM"


def test_backward_search_finds_previous_occurrence() -> None:
    engine, buffer, _modes = make_engine("ab ab ab", selections=[Selection.cursor(4)])

    engine.search({"backwards": True})
    type_pattern(engine, "ab")

    assert buffer.selections == [Selection(5, 3)]


def test_accept_after_threshold_accepts_without_newline() -> None:
    engine, buffer, modes = make_engine("xx abc abc")

    engine.search({"acceptAfter": 3})
    type_pattern(engine, "ab")
    assert modes.mode == SEARCH

    engine.search("c")

    assert modes.mode == NORMAL
    assert engine.session is None
    assert engine.last is not None
    assert engine.last.match_length == 3
    assert buffer.selections == [Selection(3, 6)]


def test_newline_accepts_one_short_of_pattern_length() -> None:
    engine, buffer, modes = make_engine("ab foo cd")

    engine.search({"offset": "exclusive"})
    type_pattern(engine, "foo")
    engine.search("\n")

    assert modes.mode == NORMAL
    assert engine.last is not None
    assert engine.last.match_length == 2
    assert buffer.selections == [Selection.cursor(4)]


@pytest.mark.parametrize(
    ("offset", "expected"),
    [
        ("inclusive", Selection(3, 6)),
        ("exclusive", Selection.cursor(3)),
        ("start", Selection.cursor(3)),
        ("end", Selection(3, 6)),
    ],
)
def test_offset_policies_forward(offset: str, expected: Selection) -> None:
    engine, buffer, _modes = make_engine("xx foo yy")

    engine.search({"offset": offset, "acceptAfter": 3})
    type_pattern(engine, "foo")

    assert buffer.selections == [expected]


def test_offset_policies_backward() -> None:
    engine, buffer, _modes = make_engine("xx foo yy", selections=[Selection.cursor(9)])

    engine.search({"backwards": True, "offset": "exclusive", "acceptAfter": 3})
    type_pattern(engine, "foo")

    assert buffer.selections == [Selection.cursor(6)]


def test_unposition_then_position_is_identity() -> None:
    engine, buffer, _modes = make_engine("xx foo yy")
    engine.search({"offset": "start"})
    type_pattern(engine, "foo")
    engine.search("\n")
    session = engine.last
    assert session is not None
    placed = buffer.selections

    engine.unposition(session, session.forward)
    assert buffer.selections == [Selection.cursor(6)]
    engine.position(session, session.match_length, session.forward)

    assert buffer.selections == placed


def test_next_then_previous_returns_to_start() -> None:
    engine, buffer, _modes = make_engine("foo x foo")
    engine.search({"offset": "start", "acceptAfter": 3})
    type_pattern(engine, "foo")
    before = buffer.selections[0].active
    assert before == 0

    engine.next_match()
    assert buffer.selections == [Selection.cursor(6)]
    assert buffer.decoration_ranges(PRIMARY_DECORATION) == ((6, 9),)

    engine.previous_match()
    assert buffer.selections[0].active == before
    assert engine.last is not None
    assert engine.last.params.backwards is False


def test_match_at_start_of_visible_range_is_highlighted() -> None:
    engine, buffer, _modes = make_engine("foo bar foo", visible_ranges=[(8, 11)])

    engine.search({})
    type_pattern(engine, "foo")

    assert buffer.decoration_ranges(PRIMARY_DECORATION) == ((0, 3),)
    assert buffer.decoration_ranges(SECONDARY_DECORATION) == ((8, 11),)


def test_unknown_offset_is_reported_and_leaves_cursor() -> None:
    engine, buffer, modes = make_engine("xx foo yy")
    errors: List[object] = []
    modes.context.bus.subscribe("notify.error", errors.append)

    engine.search({"offset": "middle"})
    type_pattern(engine, "foo")
    engine.search("\n")

    assert buffer.selections == [Selection(3, 6)]
    assert errors == [{"message": 'Unexpected search offset "middle"', "detail": None}]


def test_select_till_match_extends_from_anchor() -> None:
    engine, buffer, _modes = make_engine("ab cd", selections=[Selection.cursor(1)])

    engine.search({"selectTillMatch": True})
    type_pattern(engine, "d")

    assert buffer.selections == [Selection(1, 5)]


def test_deleting_whole_pattern_restores_selections() -> None:
    engine, buffer, modes = make_engine("abc abc", selections=[Selection.cursor(1)])

    engine.search({})
    type_pattern(engine, "bc")
    engine.delete_char()
    assert engine.session is not None
    assert engine.session.pattern == "b"
    engine.delete_char()

    assert buffer.selections == [Selection.cursor(1)]
    assert buffer.decorations == {}
    assert modes.mode == SEARCH


def test_find_from_semantics() -> None:
    assert find_from("foo foo", "foo", 0, backwards=False) == 0
    assert find_from("foo foo", "foo", 1, backwards=False) == 4
    assert find_from("foo foo", "foo", 4, backwards=True) == 0
    assert find_from("foo foo", "foo", 0, backwards=True) == -1


def test_offset_shift_rejects_unknown_policy() -> None:
    with pytest.raises(UnknownOffsetPolicy):
        offset_shift("sideways", 3, True)


def test_search_params_defaults() -> None:
    params = SearchParams.from_args(None)

    assert params.backwards is False
    assert params.case_sensitive is False
    assert params.wrap_around is False
    assert params.accept_after == float("inf")
    assert params.select_till_match is False
    assert params.offset == "inclusive"


def test_case_folding_keeps_offsets_after_wide_lowercase() -> None:
    engine, buffer, _modes = make_engine("İx foo FOO")

    engine.search({})
    type_pattern(engine, "foo")

    assert buffer.selections == [Selection(3, 6)]
    assert buffer.decoration_ranges(SECONDARY_DECORATION) == ((7, 10),)


def test_fold_case_preserves_length() -> None:
    assert fold_case("İAb") == "İab"
    assert len(fold_case("İİ")) == 2
