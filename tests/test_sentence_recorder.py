from __future__ import annotations

from typing import Optional, Sequence, Tuple

import pytest

from modal_keys.buffer import EditorBuffer, Selection
from modal_keys.modes import NORMAL, VISUAL
from modal_keys.repeat import (
    COLLAPSE_SELECTIONS,
    CommandArgumentError,
    KeyWord,
    ResolvedCommand,
    WordFinalizedError,
)
from modal_keys.session import ModalSession


def make_session(
    text: str = "", selections: Optional[Sequence[Selection]] = None
) -> Tuple[ModalSession, EditorBuffer]:
    session = ModalSession().activate()
    buffer = EditorBuffer(text, selections=selections)
    session.open_editor(buffer)
    return session, buffer


def type_keys(session: ModalSession, keys: str) -> None:
    for key in keys:
        session.handle_key(key)


def test_repeat_last_change_replays_deletion() -> None:
    session, buffer = make_session("one two three")

    type_keys(session, "dw")
    assert buffer.text == " two three"

    type_keys(session, ".")
    assert buffer.text == " three"
    verb = session.recorder.last_sentence.verb
    assert verb is not None
    assert verb.text() == "dw"
    assert verb.mode == NORMAL


def test_repeat_is_not_recorded_as_a_change() -> None:
    session, buffer = make_session("one two three")

    type_keys(session, "dw..")

    assert buffer.text == ""
    verb = session.recorder.last_sentence.verb
    assert verb is not None
    assert verb.text() == "dw"


def test_untouched_undo_does_not_become_last_change() -> None:
    session, buffer = make_session("one two three")

    type_keys(session, "dw")
    type_keys(session, "u")
    assert buffer.text == "one two three"

    type_keys(session, ".")
    assert buffer.text == " two three"


def test_selection_word_becomes_noun_of_next_change() -> None:
    session, buffer = make_session("abcdef")

    type_keys(session, "vll")
    assert buffer.selections == [Selection(0, 2)]
    type_keys(session, "d")
    assert buffer.text == "cdef"
    type_keys(session, "h")

    sentence = session.recorder.last_sentence
    assert sentence.noun is not None and sentence.noun.text() == "l"
    assert sentence.verb is not None and sentence.verb.text() == "d"
    pending = session.recorder.pending_sentence.noun
    assert pending is not None
    assert pending.seq == ResolvedCommand(COLLAPSE_SELECTIONS)


def test_pending_sequence_is_not_promoted() -> None:
    session, _buffer = make_session("one two")

    type_keys(session, "d")

    assert session.recorder.current_word.text() == "d"
    assert session.dispatcher.waiting_for_key() is True
    assert session.status.secondary_text == " d    w: delete word"


def test_type_keys_runs_bindings_in_isolation() -> None:
    session, buffer = make_session("one two three")

    type_keys(session, "W")

    assert buffer.selections == [Selection.cursor(7)]
    assert session.modes.mode == NORMAL


def test_type_keys_rejects_non_string_keys() -> None:
    session, _buffer = make_session("abc")

    with pytest.raises(CommandArgumentError):
        session.execute_command("modalkeys.typeKeys", {"keys": 3})
    with pytest.raises(CommandArgumentError):
        session.execute_command("modalkeys.typeKeys", "ww")


def test_resolved_word_refuses_raw_keys() -> None:
    word = KeyWord.command(COLLAPSE_SELECTIONS, mode=NORMAL)

    with pytest.raises(WordFinalizedError):
        word.add_key("x", NORMAL)


def test_first_key_stamps_word_mode() -> None:
    word = KeyWord()

    word.add_key("d", "custom")
    word.add_key("w", NORMAL)

    assert word.mode == "custom"
    assert word.text() == "dw"


def test_visual_bindings_apply_after_entering_visual() -> None:
    session, buffer = make_session("abcdef")

    type_keys(session, "v")
    assert session.modes.mode == NORMAL
    assert session.modes.visual_flag is True

    type_keys(session, "l")
    assert buffer.selections == [Selection(0, 1)]


def test_repeat_last_used_selection_replays_noun() -> None:
    session, buffer = make_session("abcdef")

    type_keys(session, "vl")
    type_keys(session, "d")
    type_keys(session, "v")
    assert session.modes.visual_flag is False

    buffer.selections = [Selection.cursor(0)]
    type_keys(session, "v,")

    assert buffer.selections == [Selection(0, 1)]


def test_type_keys_in_visual_restores_plain_normal() -> None:
    session, buffer = make_session("abcdef")

    session.execute_command("modalkeys.typeKeys", {"keys": "l", "mode": VISUAL})

    assert buffer.selections == [Selection(0, 1)]
    assert session.modes.mode == NORMAL
    assert session.modes.visual_flag is False


def test_type_keys_from_visual_keeps_the_overlay() -> None:
    session, _buffer = make_session("abcdef")
    type_keys(session, "vl")

    session.execute_command("modalkeys.typeKeys", {"keys": "l", "mode": "insert"})

    assert session.modes.mode == NORMAL
    assert session.modes.visual_flag is True


def test_plain_motion_makes_collapse_the_pending_noun() -> None:
    session, buffer = make_session("abcdef")

    type_keys(session, "lh")

    assert buffer.selections == [Selection.cursor(0)]
    noun = session.recorder.pending_sentence.noun
    assert noun is not None
    assert noun.seq == ResolvedCommand(COLLAPSE_SELECTIONS)
    assert noun.mode == NORMAL


def test_key_after_repeat_leaves_sentences_alone() -> None:
    session, buffer = make_session("one two three")
    type_keys(session, "dw.")
    pending = session.recorder.pending_sentence
    last = session.recorder.last_sentence

    type_keys(session, "l")

    assert buffer.text == " three"
    assert session.recorder.pending_sentence is pending
    assert session.recorder.last_sentence is last
    assert session.recorder.text_changed is False
