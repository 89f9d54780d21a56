"""Command handlers bound by key bindings, called as ``handler(session, args)``."""

from __future__ import annotations

from modal_keys.keymaps import ActionRef, KeymapRegistry

from . import bookmarks as bookmark_actions
from . import core as core_actions
from . import editing as editing_actions
from . import repeat as repeat_actions
from . import search as search_actions
from . import selection as selection_actions
from . import snippets as snippet_actions

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef(
        id="modalkeys.enterMode",
        handler=core_actions.enter_mode,
        description="Switch to the given mode",
    ),
    ActionRef(
        id="modalkeys.enterNormal",
        handler=core_actions.enter_normal,
        description="Return to normal mode",
    ),
    ActionRef(
        id="modalkeys.enterInsert",
        handler=core_actions.enter_insert,
        description="Enter insert mode",
    ),
    ActionRef(
        id="modalkeys.toggle",
        handler=core_actions.toggle,
        description="Turn modal key capture off or on",
    ),
    ActionRef(
        id="modalkeys.importPresets",
        handler=core_actions.import_presets,
        description="Replace key bindings with a preset file",
    ),
    ActionRef(
        id="modalkeys.toggleSelection",
        handler=selection_actions.toggle_selection,
    ),
    ActionRef(
        id="modalkeys.enableSelection",
        handler=selection_actions.enable_selection,
    ),
    ActionRef(
        id="modalkeys.cancelSelection",
        handler=selection_actions.cancel_selection,
        description="Clear the selection and return to normal mode",
    ),
    ActionRef(
        id="modalkeys.cancelMultipleSelections",
        handler=selection_actions.cancel_multiple_selections,
        description="Collapse every selection, keeping all cursors",
    ),
    ActionRef(
        id="modalkeys.search",
        handler=search_actions.search,
        description="Begin, extend or accept an incremental search",
    ),
    ActionRef(id="modalkeys.cancelSearch", handler=search_actions.cancel_search),
    ActionRef(
        id="modalkeys.deleteCharFromSearch",
        handler=search_actions.delete_char_from_search,
    ),
    ActionRef(id="modalkeys.nextMatch", handler=search_actions.next_match),
    ActionRef(id="modalkeys.previousMatch", handler=search_actions.previous_match),
    ActionRef(
        id="modalkeys.typeKeys",
        handler=repeat_actions.type_keys,
        description="Run keys as if typed in a mode",
    ),
    ActionRef(
        id="modalkeys.repeatLastChange",
        handler=repeat_actions.repeat_last_change,
    ),
    ActionRef(
        id="modalkeys.repeatLastUsedSelection",
        handler=repeat_actions.repeat_last_used_selection,
    ),
    ActionRef(id="modalkeys.touchDocument", handler=repeat_actions.touch_document),
    ActionRef(
        id="modalkeys.untouchDocument", handler=repeat_actions.untouch_document
    ),
    ActionRef(
        id="modalkeys.defineBookmark", handler=bookmark_actions.define_bookmark
    ),
    ActionRef(id="modalkeys.goToBookmark", handler=bookmark_actions.go_to_bookmark),
    ActionRef(
        id="modalkeys.removeBookmark", handler=bookmark_actions.remove_bookmark
    ),
    ActionRef(
        id="modalkeys.clearBookmarks", handler=bookmark_actions.clear_bookmarks
    ),
    ActionRef(
        id="modalkeys.fillSnippetFromSelection",
        handler=snippet_actions.fill_snippet_from_selection,
    ),
    ActionRef(
        id="modalkeys.insertSnippet", handler=snippet_actions.insert_snippet
    ),
    ActionRef(id="cursorLeft", handler=editing_actions.cursor_left),
    ActionRef(id="cursorRight", handler=editing_actions.cursor_right),
    ActionRef(id="cursorWordLeft", handler=editing_actions.cursor_word_left),
    ActionRef(id="cursorWordRight", handler=editing_actions.cursor_word_right),
    ActionRef(id="cursorLeftSelect", handler=editing_actions.cursor_left_select),
    ActionRef(id="cursorRightSelect", handler=editing_actions.cursor_right_select),
    ActionRef(
        id="cursorWordLeftSelect", handler=editing_actions.cursor_word_left_select
    ),
    ActionRef(
        id="cursorWordRightSelect", handler=editing_actions.cursor_word_right_select
    ),
    ActionRef(id="deleteLeft", handler=editing_actions.delete_left),
    ActionRef(id="deleteRight", handler=editing_actions.delete_right),
    ActionRef(id="deleteWordRight", handler=editing_actions.delete_word_right),
    ActionRef(id="type", handler=editing_actions.type_text),
    ActionRef(id="undo", handler=editing_actions.undo),
    ActionRef(id="redo", handler=editing_actions.redo),
)


def register_default_actions(
    registry: KeymapRegistry, *, replace: bool = False
) -> None:
    for action in DEFAULT_ACTIONS:
        registry.register_action(action, replace=replace)


__all__ = ["DEFAULT_ACTIONS", "register_default_actions"]
