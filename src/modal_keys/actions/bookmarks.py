"""Bookmark commands and the decoration that marks bookmarked lines."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List

from modal_keys.buffer import EditorSurface, Range, Selection
from modal_keys.runtime import telemetry
from modal_keys.store import DEFAULT_GROUP

from .core import mapping_args

if TYPE_CHECKING:
    from modal_keys.session import ModalSession

BOOKMARK_DECORATION = "bookmarks"
DEFAULT_BOOKMARK = "default"


def _target(name: str, args: Any) -> tuple[str, str]:
    payload = mapping_args(name, args)
    label = str(payload.get("bookmark", DEFAULT_BOOKMARK))
    group = str(payload.get("group", DEFAULT_GROUP))
    return label, group


def paint_bookmarks(session: "ModalSession", editor: EditorSurface) -> None:
    document = editor.document
    ranges: List[Range] = []
    for bookmark in session.bookmarks.for_document(document.uri):
        row, _col = document.position_at(bookmark.offset)
        start = document.line_start(row)
        line = (start, start + len(document.line_at(row)))
        if line not in ranges:
            ranges.append(line)
    editor.set_decorations(
        BOOKMARK_DECORATION, sorted(ranges), session.settings.bookmark_style()
    )


def repaint_all(session: "ModalSession") -> None:
    for editor in session.editors.values():
        paint_bookmarks(session, editor)


def define_bookmark(session: "ModalSession", args: Any) -> None:
    label, group = _target("defineBookmark", args)
    editor = session.editor
    if editor is None:
        return
    bookmark = session.bookmarks.define(
        label, editor.document, editor.selections[0].active, group=group
    )
    telemetry.record_event(
        "bookmark.define",
        data={"label": label, "group": group, "uri": bookmark.uri},
        logger_name="modal_keys.store",
    )
    paint_bookmarks(session, editor)


def go_to_bookmark(session: "ModalSession", args: Any) -> None:
    label, group = _target("goToBookmark", args)
    select = bool(mapping_args("goToBookmark", args).get("select", False))
    bookmark = session.bookmarks.get(label, group=group)
    if bookmark is None:
        session.context.notify("warning", f"Bookmark '{label}' is not defined.")
        return
    editor = session.editor
    if editor is None or editor.document.uri != bookmark.uri:
        if bookmark.uri not in session.editors:
            session.context.notify(
                "warning", f"Document of bookmark '{label}' is not open.", bookmark.uri
            )
            return
        editor = session.focus(bookmark.uri)

    offset = min(bookmark.offset, editor.document.length)
    if select:
        editor.selections = [Selection(editor.selections[0].anchor, offset)]
    else:
        editor.selections = [Selection.cursor(offset)]
    editor.reveal(editor.selections[0])


def remove_bookmark(session: "ModalSession", args: Any) -> None:
    label, group = _target("removeBookmark", args)
    if session.bookmarks.remove(label, group=group) is not None:
        repaint_all(session)


def clear_bookmarks(session: "ModalSession", args: Any) -> None:
    group = mapping_args("clearBookmarks", args).get("group")
    session.bookmarks.clear(None if group is None else str(group))
    repaint_all(session)


__all__ = [
    "BOOKMARK_DECORATION",
    "DEFAULT_BOOKMARK",
    "paint_bookmarks",
    "repaint_all",
    "define_bookmark",
    "go_to_bookmark",
    "remove_bookmark",
    "clear_bookmarks",
]
