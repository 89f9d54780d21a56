"""Quick snippet commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from modal_keys.keymaps import KeyCommand
from modal_keys.repeat import CommandArgumentError

from .core import mapping_args

if TYPE_CHECKING:
    from modal_keys.session import ModalSession


def _index(name: str, args: Any) -> int:
    index = mapping_args(name, args).get("snippet", 0)
    if not isinstance(index, int) or isinstance(index, bool) or index < 0:
        raise CommandArgumentError(f"{name}: invalid snippet index {index!r}")
    return index


def fill_snippet_from_selection(session: "ModalSession", args: Any) -> None:
    index = _index("fillSnippetFromSelection", args)
    editor = session.editor
    if editor is None:
        return
    document = editor.document
    text = "\n".join(
        document.get_text(sel.start, sel.end)
        for sel in editor.selections
        if not sel.is_empty
    )
    session.snippets.store(index, text)


def insert_snippet(session: "ModalSession", args: Any) -> None:
    index = _index("insertSnippet", args)
    text = session.snippets.get(index)
    if text is None:
        session.context.notify("warning", f"Snippet {index} is empty.")
        return
    session.execute(KeyCommand("type", {"text": text}))


__all__ = ["fill_snippet_from_selection", "insert_snippet"]
