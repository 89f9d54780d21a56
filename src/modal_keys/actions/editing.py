"""Editor built-ins for the in-memory surface.

Hosts that embed their own editor register replacements for these names
(``cursorLeft``, ``deleteWordRight``, ``type``...) with ``replace=True``.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any, Callable, List, Optional

from modal_keys.buffer import EditorBuffer
from modal_keys.repeat import CommandArgumentError

from .core import mapping_args

if TYPE_CHECKING:
    from modal_keys.session import ModalSession

_WORD = re.compile(r"\w+|[^\w\s]+")

Motion = Callable[[str, int], int]


def word_end_right(text: str, offset: int) -> int:
    for match in _WORD.finditer(text, offset):
        if match.end() > offset:
            return match.end()
    return len(text)


def word_start_left(text: str, offset: int) -> int:
    start = 0
    for match in _WORD.finditer(text, 0, offset):
        start = match.start()
    return start


def _char_left(text: str, offset: int) -> int:
    del text
    return max(0, offset - 1)


def _char_right(text: str, offset: int) -> int:
    return min(len(text), offset + 1)


def _buffer(session: "ModalSession") -> Optional[EditorBuffer]:
    editor = session.editor
    if editor is None:
        return None
    if not isinstance(editor, EditorBuffer):
        raise TypeError(
            f"{type(editor).__name__} has no built-in editing commands registered"
        )
    return editor


def _move(session: "ModalSession", motion: Motion, *, select: bool) -> None:
    buffer = _buffer(session)
    if buffer is None:
        return
    text = buffer.text
    buffer.selections = [
        sel.moved_to(motion(text, sel.active), keep_anchor=select)
        for sel in buffer.selections
    ]


def _delete(session: "ModalSession", motion: Motion, label: str) -> None:
    buffer = _buffer(session)
    if buffer is None:
        return
    text = buffer.text
    edits: List[tuple[int, int, str]] = []
    for sel in buffer.selections:
        if not sel.is_empty:
            edits.append((sel.start, sel.end, ""))
            continue
        target = motion(text, sel.active)
        start, end = min(target, sel.active), max(target, sel.active)
        if start != end:
            edits.append((start, end, ""))
    buffer.apply_edits(edits, label=label)


def cursor_left(session: "ModalSession", args: Any) -> None:
    del args
    _move(session, _char_left, select=False)


def cursor_right(session: "ModalSession", args: Any) -> None:
    del args
    _move(session, _char_right, select=False)


def cursor_word_left(session: "ModalSession", args: Any) -> None:
    del args
    _move(session, word_start_left, select=False)


def cursor_word_right(session: "ModalSession", args: Any) -> None:
    del args
    _move(session, word_end_right, select=False)


def cursor_left_select(session: "ModalSession", args: Any) -> None:
    del args
    _move(session, _char_left, select=True)


def cursor_right_select(session: "ModalSession", args: Any) -> None:
    del args
    _move(session, _char_right, select=True)


def cursor_word_left_select(session: "ModalSession", args: Any) -> None:
    del args
    _move(session, word_start_left, select=True)


def cursor_word_right_select(session: "ModalSession", args: Any) -> None:
    del args
    _move(session, word_end_right, select=True)


def delete_left(session: "ModalSession", args: Any) -> None:
    del args
    _delete(session, _char_left, "delete_left")


def delete_right(session: "ModalSession", args: Any) -> None:
    del args
    _delete(session, _char_right, "delete_right")


def delete_word_right(session: "ModalSession", args: Any) -> None:
    del args
    _delete(session, word_end_right, "delete_word_right")


def type_text(session: "ModalSession", args: Any) -> None:
    text = mapping_args("type", args).get("text")
    if not isinstance(text, str):
        raise CommandArgumentError(f"type: invalid text {text!r}")
    buffer = _buffer(session)
    if buffer is not None and text:
        buffer.insert_text(text)


def undo(session: "ModalSession", args: Any) -> None:
    del args
    buffer = _buffer(session)
    if buffer is not None:
        buffer.undo()


def redo(session: "ModalSession", args: Any) -> None:
    del args
    buffer = _buffer(session)
    if buffer is not None:
        buffer.redo()


__all__ = [
    "word_end_right",
    "word_start_left",
    "cursor_left",
    "cursor_right",
    "cursor_word_left",
    "cursor_word_right",
    "cursor_left_select",
    "cursor_right_select",
    "cursor_word_left_select",
    "cursor_word_right_select",
    "delete_left",
    "delete_right",
    "delete_word_right",
    "type_text",
    "undo",
    "redo",
]
