from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

import pytest

from modal_keys.actions.bookmarks import BOOKMARK_DECORATION
from modal_keys.buffer import EditorBuffer, Selection, TextDocument
from modal_keys.session import ModalSession
from modal_keys.store import BookmarkSet, QuickSnippets


def make_session(
    text: str = "", selections: Optional[Sequence[Selection]] = None
) -> Tuple[ModalSession, EditorBuffer]:
    session = ModalSession().activate()
    buffer = EditorBuffer(text, uri="file:///notes.txt", selections=selections)
    session.open_editor(buffer)
    return session, buffer


def test_bookmark_description_names_line_and_column() -> None:
    bookmarks = BookmarkSet()
    document = TextDocument(uri="file:///a.txt", text="line one\nline two")

    bookmark = bookmarks.define("k", document, 12)

    assert bookmark.description == "Ln 1, Col 3: line two"
    assert bookmarks.get("k") is bookmark
    assert len(bookmarks) == 1


def test_bookmark_groups_are_independent() -> None:
    bookmarks = BookmarkSet()
    document = TextDocument(uri="file:///a.txt", text="abc")
    bookmarks.define("x", document, 1, group="left")
    bookmarks.define("x", document, 2, group="right")

    bookmarks.clear("left")

    assert bookmarks.get("x", group="left") is None
    assert bookmarks.get("x", group="right") is not None
    assert bookmarks.groups() == ["right"]


def test_define_bookmark_paints_the_line() -> None:
    session, buffer = make_session("line one\nline two", selections=[Selection.cursor(12)])

    session.execute_command("modalkeys.defineBookmark", {"bookmark": "k"})

    assert session.bookmarks.get("k") is not None
    ranges = buffer.decoration_ranges(BOOKMARK_DECORATION)
    assert ranges == ((9, 17),)
    _ranges, style = buffer.decorations[BOOKMARK_DECORATION]
    assert style is not None
    assert style.background == "rgba(0,0,150,0.5)"
    assert style.whole_line is True


def test_go_to_bookmark_switches_document() -> None:
    session, first = make_session("line one\nline two", selections=[Selection.cursor(12)])
    session.execute_command("modalkeys.defineBookmark", {"bookmark": "k"})
    second = EditorBuffer("elsewhere", uri="file:///other.txt")
    session.open_editor(second)

    session.execute_command("modalkeys.goToBookmark", {"bookmark": "k"})

    assert session.editor is first
    assert first.selections == [Selection.cursor(12)]


def test_go_to_bookmark_can_extend_selection() -> None:
    session, buffer = make_session("abcdef", selections=[Selection.cursor(4)])
    for key in "m0":
        session.handle_key(key)
    buffer.selections = [Selection.cursor(1)]

    session.execute_command(
        "modalkeys.goToBookmark", {"bookmark": "0", "select": True}
    )

    assert buffer.selections == [Selection(1, 4)]


def test_missing_bookmark_warns() -> None:
    session, buffer = make_session("abc")
    warnings: List[object] = []
    session.bus.subscribe("notify.warning", warnings.append)

    session.execute_command("modalkeys.goToBookmark", {"bookmark": "nope"})

    assert warnings
    assert buffer.selections == [Selection.cursor(0)]


def test_remove_and_clear_bookmarks_repaint() -> None:
    session, buffer = make_session("abc\ndef", selections=[Selection.cursor(5)])
    session.execute_command("modalkeys.defineBookmark", {"bookmark": "a"})
    session.execute_command("modalkeys.defineBookmark")
    assert len(session.bookmarks) == 2

    session.execute_command("modalkeys.removeBookmark", {"bookmark": "a"})
    assert session.bookmarks.get("a") is None
    assert buffer.decoration_ranges(BOOKMARK_DECORATION) == ((4, 7),)

    session.execute_command("modalkeys.clearBookmarks")
    assert len(session.bookmarks) == 0
    assert buffer.decoration_ranges(BOOKMARK_DECORATION) == ()


def test_yank_and_paste_quick_snippet() -> None:
    session, buffer = make_session("abc")

    for key in "vlly":
        session.handle_key(key)
    assert session.snippets.get(0) == "ab"
    assert buffer.selections == [Selection.cursor(2)]
    assert session.modes.visual_flag is False

    session.handle_key("p")
    assert buffer.text == "ababc"


def test_empty_snippet_warns_instead_of_inserting() -> None:
    session, buffer = make_session("abc")
    warnings: List[object] = []
    session.bus.subscribe("notify.warning", warnings.append)

    session.execute_command("modalkeys.insertSnippet", {"snippet": 3})

    assert buffer.text == "abc"
    assert warnings == [{"message": "Snippet 3 is empty.", "detail": None}]


def test_quick_snippets_pad_and_reject_negative_index() -> None:
    snippets = QuickSnippets()
    snippets.store(2, "x")

    assert len(snippets) == 3
    assert snippets.get(0) is None
    assert snippets.get(2) == "x"
    with pytest.raises(IndexError):
        snippets.store(-1, "y")
