from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from modal_keys.buffer import EditorBuffer, Selection
from modal_keys.modes import INSERT, NORMAL, SEARCH
from modal_keys.search import PRIMARY_DECORATION
from modal_keys.session import EventQueue, ModalSession


def make_session(
    text: str = "", selections: Optional[Sequence[Selection]] = None
) -> Tuple[ModalSession, EditorBuffer]:
    session = ModalSession().activate()
    buffer = EditorBuffer(text, uri="file:///main.txt", selections=selections)
    session.open_editor(buffer)
    return session, buffer


def type_keys(session: ModalSession, keys: Sequence[str]) -> None:
    for key in keys:
        session.handle_key(key)


def test_event_queue_defers_events_posted_while_running() -> None:
    queue = EventQueue()
    order: List[str] = []

    def outer() -> None:
        order.append("outer:start")
        queue.post(order.append, "inner")
        order.append("outer:end")

    queue.post(outer)

    assert order == ["outer:start", "outer:end", "inner"]
    assert len(queue) == 0
    assert queue.busy is False


def test_insert_mode_types_text_and_escape_returns_to_normal() -> None:
    session, buffer = make_session("")

    type_keys(session, ["i", "h", "i", "ESC"])

    assert buffer.text == "hi"
    assert session.modes.mode == NORMAL
    assert session.modes.capturing is True


def test_backspace_in_insert_mode_deletes_left() -> None:
    session, buffer = make_session("ab", selections=[Selection.cursor(2)])

    type_keys(session, ["i", "BACKSPACE"])

    assert buffer.text == "a"
    assert session.modes.mode == INSERT


def test_search_keys_are_captured_and_accepted() -> None:
    session, buffer = make_session("a foo b foo")

    type_keys(session, ["/", "f", "o"])
    assert session.modes.mode == SEARCH
    assert session.status.main_text == "SEARCH [F]: fo"

    type_keys(session, ["o", "\n"])
    assert session.modes.mode == NORMAL
    assert buffer.selections == [Selection(2, 5)]

    type_keys(session, ["n"])
    assert buffer.selections == [Selection(8, 11)]
    assert buffer.decoration_ranges(PRIMARY_DECORATION) == ((8, 11),)

    type_keys(session, ["h"])
    assert buffer.decoration_ranges(PRIMARY_DECORATION) == ()


def test_escape_cancels_search() -> None:
    session, buffer = make_session("abc abc", selections=[Selection.cursor(1)])

    type_keys(session, ["/", "c", "ESC"])

    assert session.modes.mode == NORMAL
    assert buffer.selections == [Selection.cursor(1)]


def test_backspace_shortens_search_pattern() -> None:
    session, _buffer = make_session("abc")

    type_keys(session, ["/", "a", "b", "BACKSPACE"])

    assert session.search.session is not None
    assert session.search.session.pattern == "a"


def test_find_character_accepts_after_one_key() -> None:
    session, buffer = make_session("hello world")

    type_keys(session, ["f", "w"])

    assert session.modes.mode == NORMAL
    assert buffer.selections == [Selection.cursor(6)]


def test_not_found_message_shown_in_secondary_status() -> None:
    session, _buffer = make_session("abc")

    type_keys(session, ["/", "z"])

    assert session.status.secondary_text == "Pattern not found"


def test_status_reflects_mode_styles() -> None:
    session, _buffer = make_session("abc")
    assert session.status.main_text == "-- NORMAL --"
    assert session.status.cursor_style == "block"

    type_keys(session, ["v"])
    assert session.status.main_text == "-- VISUAL --"

    type_keys(session, ["v", "i"])
    assert session.status.main_text == "-- INSERT --"
    assert session.status.cursor_style == "line"


def test_toggle_turns_capture_off_and_on() -> None:
    session, buffer = make_session("")

    session.execute_command("modalkeys.toggle")
    type_keys(session, ["d", "w"])
    assert buffer.text == "dw"
    assert session.status.visible is False

    session.execute_command("modalkeys.toggle")
    type_keys(session, ["h"])
    assert buffer.text == "dw"
    assert session.status.visible is True


def test_focus_restores_per_document_mode() -> None:
    session, first = make_session("first")
    second = EditorBuffer("second", uri="file:///second.txt")

    type_keys(session, ["v"])
    session.open_editor(second)
    assert session.editor is second
    assert session.modes.visual_flag is False

    session.focus(first.document.uri)
    assert session.modes.visual_flag is True

    session.close_editor(first.document.uri)
    assert session.modes.document_mode(first.document.uri) is None
    assert session.editor is None


def test_enter_mode_command_accepts_string_or_object() -> None:
    session, _buffer = make_session("abc")

    session.execute_command("modalkeys.enterMode", "custom")
    assert session.modes.mode == "custom"
    assert session.status.main_text == "CUSTOM"

    session.execute_command("modalkeys.enterMode", {"mode": NORMAL})
    assert session.modes.mode == NORMAL


def test_deactivate_clears_decorations_and_editors() -> None:
    session, buffer = make_session("abc abc")
    type_keys(session, ["/", "b"])

    session.deactivate()

    assert buffer.decorations == {}
    assert session.editors == {}
    assert session.active is False
