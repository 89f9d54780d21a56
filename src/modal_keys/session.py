"""The modal session: every piece of state for one editor window, behind one queue."""

from __future__ import annotations

from collections import deque
from pathlib import Path
from typing import Any, Callable, Deque, Dict, List, Mapping, Optional, Tuple

from modal_keys.actions import register_default_actions
from modal_keys.actions.bookmarks import BOOKMARK_DECORATION, paint_bookmarks
from modal_keys.buffer import EditorSurface, Selection
from modal_keys.keymaps import (
    KeyCommand,
    KeyDispatcher,
    KeymapRegistry,
    KeymapResolver,
    bindings_from_mapping,
    load_default_keymaps,
)
from modal_keys.modes import INSERT, NORMAL, SEARCH, ModeBus, ModeContext, ModeController
from modal_keys.presentation import Presenter, StatusView
from modal_keys.repeat import SentenceRecorder
from modal_keys.runtime import telemetry
from modal_keys.runtime.config import Settings
from modal_keys.search import PRIMARY_DECORATION, SECONDARY_DECORATION, SearchEngine
from modal_keys.store import BookmarkSet, QuickSnippets
from modal_keys.store import import_presets as import_preset_file

HOST_BINDINGS: Mapping[Tuple[str, str], str] = {
    (INSERT, "ESC"): "modalkeys.enterNormal",
    (SEARCH, "ESC"): "modalkeys.cancelSearch",
    (SEARCH, "BACKSPACE"): "modalkeys.deleteCharFromSearch",
}

Event = Tuple[Callable[..., object], Tuple[Any, ...]]


class EventQueue:
    """Single-consumer FIFO that runs one event to completion at a time.

    Posting while idle drains immediately. Events posted by a running
    handler (editor notifications fired by an edit, commands issued from a
    hook) wait until that handler returns. If a handler raises, the error
    propagates and the remaining events stay queued for the next drain.
    """

    def __init__(self) -> None:
        self._events: Deque[Event] = deque()
        self._draining = False

    @property
    def busy(self) -> bool:
        return self._draining

    def __len__(self) -> int:
        return len(self._events)

    def post(self, handler: Callable[..., object], *args: Any) -> None:
        self._events.append((handler, args))
        if not self._draining:
            self.drain()

    def drain(self) -> None:
        if self._draining:
            return
        self._draining = True
        try:
            while self._events:
                handler, args = self._events.popleft()
                handler(*args)
        finally:
            self._draining = False


class ModalSession:
    """Owns modes, recorder, search, bookmarks and the open editors.

    Built once per window; ``activate`` publishes the initial mode and
    ``deactivate`` tears the session down. Hosts feed keys through
    ``handle_key`` and external command invocations through
    ``execute_command``; both, along with editor notifications, are
    serialised by ``queue``.
    """

    def __init__(
        self,
        *,
        settings: Optional[Settings] = None,
        bus: Optional[ModeBus] = None,
        host_bindings: Optional[Mapping[Tuple[str, str], str]] = None,
    ) -> None:
        self.bus = bus or ModeBus()
        self.settings = settings or Settings()
        self.context = ModeContext(bus=self.bus, settings=self.settings)
        self.queue = EventQueue()
        self.logger = telemetry.get_logger("modal_keys.session")

        self.registry = KeymapRegistry(logger_name="modal_keys.keymaps")
        register_default_actions(self.registry)
        self.resolver = KeymapResolver(self.registry, logger_name="modal_keys.keymaps")
        self.dispatcher = KeyDispatcher(
            self.resolver,
            self.execute,
            capture_modes={SEARCH: "modalkeys.search"},
        )
        if self.settings.keybindings:
            self.registry.replace_bindings(
                bindings_from_mapping(self.settings.keybindings, source="settings")
            )
        else:
            load_default_keymaps(self.registry)

        self.modes = ModeController(self.context)
        self.recorder = SentenceRecorder(self.modes, self.dispatcher)
        self.search = SearchEngine(self.modes)
        self.bookmarks = BookmarkSet()
        self.snippets = QuickSnippets()
        self.presenter = Presenter(self)
        self.host_bindings: Dict[Tuple[str, str], str] = dict(
            HOST_BINDINGS if host_bindings is None else host_bindings
        )
        self.editors: Dict[str, EditorSurface] = {}
        self.enabled = True
        self.active = False

    @property
    def editor(self) -> Optional[EditorSurface]:
        return self.context.editor

    @property
    def status(self) -> StatusView:
        return self.presenter.view

    def activate(self) -> "ModalSession":
        self.active = True
        self.modes.enter_mode(NORMAL)
        telemetry.record_event("session.activate", logger_name="modal_keys.session")
        return self

    def deactivate(self) -> None:
        if not self.active:
            return
        if self.modes.mode == SEARCH:
            self.search.cancel()
        for editor in self.editors.values():
            self._clear_editor(editor)
        self.editors.clear()
        self.context.editor = None
        self.active = False
        telemetry.record_event("session.deactivate", logger_name="modal_keys.session")
        self.presenter.refresh()

    def open_editor(self, surface: EditorSurface, *, focus: bool = True) -> EditorSurface:
        uri = surface.document.uri
        self.editors[uri] = surface
        surface.on_text_changed(
            lambda document: self.queue.post(self._on_text_changed, surface)
        )
        surface.on_selection_changed(
            lambda selections: self.queue.post(
                self._on_selection_changed, surface, selections
            )
        )
        paint_bookmarks(self, surface)
        if focus or self.editor is None:
            self.focus(uri)
        return surface

    def focus(self, uri: str) -> EditorSurface:
        editor = self.editors[uri]
        if self.editor is editor:
            return editor
        if self.modes.mode == SEARCH:
            self.search.cancel()
        self.context.editor = editor
        self.modes.restore_mode(uri)
        return editor

    def close_editor(self, uri: str) -> None:
        editor = self.editors.pop(uri, None)
        self.modes.forget_document(uri)
        if editor is not None and editor is self.editor:
            if self.modes.mode == SEARCH:
                self.search.cancel()
            self.context.editor = None
            self.presenter.refresh()

    def handle_key(self, key: str) -> None:
        self._require_active()
        self.queue.post(self._on_key, key)

    def execute_command(self, name: str, args: Any = None) -> None:
        self._require_active()
        self.queue.post(self.execute, KeyCommand(name, args))

    def execute(self, command: KeyCommand) -> object:
        action = self.registry.get_action(command.name)
        return action(self, command.args)

    def toggle_capture(self) -> None:
        self.enabled = not self.enabled
        if not self.enabled and self.modes.mode == SEARCH:
            self.search.cancel()
        self.dispatcher.reset()
        self.bus.emit("capture.changed", self.enabled and self.modes.capturing)
        telemetry.record_event(
            "session.toggle",
            data={"enabled": self.enabled},
            logger_name="modal_keys.session",
        )
        self.presenter.refresh()

    def import_presets(self, path: str | Path) -> bool:
        return import_preset_file(Path(path), registry=self.registry, context=self.context)

    def _on_key(self, key: str) -> None:
        if not self.enabled:
            self._type_through(key)
            return
        host_command = self.host_bindings.get((self.modes.mode, key))
        if host_command is not None:
            self.execute(KeyCommand(host_command))
            return
        if not self.modes.capturing:
            self._type_through(key)
            return
        if self.modes.mode != SEARCH:
            # search notices last until the next key outside the search
            self.search.clear_info()
        self.recorder.on_type(key)
        if not self.search.consume_changed():
            self.search.clear_decorations()

    def _type_through(self, key: str) -> None:
        if key == "BACKSPACE":
            self.execute(KeyCommand("deleteLeft"))
        elif len(key) == 1:
            self.execute(KeyCommand("type", {"text": key}))
        else:
            telemetry.record_event(
                "keys.ignored",
                level="debug",
                data={"key": key, "mode": self.modes.mode},
                logger_name="modal_keys.session",
            )

    def _on_text_changed(self, surface: EditorSurface) -> None:
        if surface is not self.editor:
            return
        self.recorder.note_text_changed()
        self.bus.emit("buffer.changed", surface.mirror())

    def _on_selection_changed(
        self, surface: EditorSurface, selections: List[Selection]
    ) -> None:
        if surface is not self.editor:
            return
        self.recorder.note_selection_changed(selections)
        self.bus.emit("buffer.changed", surface.mirror())
        self.presenter.refresh()

    def _clear_editor(self, editor: EditorSurface) -> None:
        for kind in (PRIMARY_DECORATION, SECONDARY_DECORATION, BOOKMARK_DECORATION):
            editor.set_decorations(kind, [])

    def _require_active(self) -> None:
        if not self.active:
            raise RuntimeError("ModalSession is not active; call activate() first")


__all__ = ["EventQueue", "ModalSession", "HOST_BINDINGS"]
