"""Mode controller: the active mode, the visual overlay and per-document memory."""

from __future__ import annotations

from typing import Dict, Optional

from modal_keys.buffer import Selection, any_selected
from modal_keys.runtime import telemetry

from .base_mode import INSERT, NORMAL, VISUAL, ModeContext, ModeHook, ModeHooks


class ModeController:
    """Owns the current mode and drives mode transitions.

    ``visual`` is not a mode of its own: entering it sets ``visual_flag`` and
    keeps the mode at ``normal``. Because the editor can select text on its
    own (mouse drags, multi-cursor commands), ``is_selecting`` also looks at
    the live selections rather than trusting the flag alone.
    """

    def __init__(self, context: ModeContext) -> None:
        self.context = context
        self.mode = NORMAL
        self.visual_flag = False
        self.capturing = True
        self._hooks: Dict[str, ModeHooks] = {}
        self._document_modes: Dict[str, str] = {}
        self.logger = telemetry.get_logger("modal_keys.modes")

    @property
    def effective_mode(self) -> str:
        return VISUAL if self.visual_flag else self.mode

    def add_hooks(
        self,
        mode: str,
        *,
        on_enter: Optional[ModeHook] = None,
        on_exit: Optional[ModeHook] = None,
    ) -> None:
        hooks = self._hooks.setdefault(mode, ModeHooks())
        if on_enter is not None:
            hooks.enter.append(on_enter)
        if on_exit is not None:
            hooks.exit.append(on_exit)

    def enter_mode(self, target: str) -> None:
        new_mode = target
        self._set_capture(new_mode)
        if new_mode == VISUAL:
            new_mode = NORMAL
            self.visual_flag = True
        else:
            self.visual_flag = False

        old_mode = self.mode
        changed = new_mode != old_mode
        if changed:
            self._run_hooks(old_mode, "exit", new_mode, old_mode)

        self.mode = new_mode
        uri = self._active_uri()
        if uri is not None:
            self._document_modes[uri] = self.effective_mode

        if changed:
            self._run_hooks(new_mode, "enter", new_mode, old_mode)
            telemetry.record_event(
                "mode.switch",
                data={"mode": new_mode, "previous": old_mode},
                logger_name="modal_keys.modes",
            )
        self._publish()

    def restore_mode(self, uri: str) -> None:
        """Re-apply the mode last used in the document identified by ``uri``."""

        stored = self._document_modes.get(uri, NORMAL)
        self._set_capture(stored)
        previous = self.mode
        if stored == VISUAL:
            self.mode = NORMAL
            self.visual_flag = True
        else:
            self.mode = stored
            self.visual_flag = False
        self._run_hooks(self.mode, "enter", self.mode, previous)
        self._publish()

    def forget_document(self, uri: str) -> None:
        self._document_modes.pop(uri, None)

    def document_mode(self, uri: str) -> Optional[str]:
        return self._document_modes.get(uri)

    def is_selecting(self) -> bool:
        if self.mode != NORMAL:
            return False
        if self.visual_flag:
            return True
        editor = self.context.editor
        return editor is not None and any_selected(editor.selections)

    def dispatch_mode(self, mode: Optional[str] = None) -> str:
        """Mode whose key map a key typed in ``mode`` resolves against."""

        mode = self.mode if mode is None else mode
        if mode == NORMAL and self.is_selecting():
            return VISUAL
        return mode

    def toggle_selection(self) -> None:
        self.enter_mode(NORMAL if self.is_selecting() else VISUAL)

    def enable_selection(self) -> None:
        self.enter_mode(VISUAL)

    def cancel_selection(self) -> None:
        if not self.is_selecting():
            return
        editor = self.context.editor
        if editor is not None:
            primary = editor.selections[0]
            editor.selections = [Selection.cursor(primary.active)]
        self.enter_mode(NORMAL)

    def cancel_multiple_selections(self) -> None:
        if not self.is_selecting():
            return
        editor = self.context.editor
        if editor is not None:
            editor.selections = [sel.collapse() for sel in editor.selections]
        self.enter_mode(NORMAL)

    def _run_hooks(self, mode: str, kind: str, new_mode: str, old_mode: str) -> None:
        hooks = self._hooks.get(mode)
        if hooks is None:
            return
        for hook in list(getattr(hooks, kind)):
            hook(new_mode, old_mode)

    def _set_capture(self, mode: str) -> None:
        capturing = mode != INSERT
        if capturing != self.capturing:
            self.capturing = capturing
            self.context.bus.emit("capture.changed", capturing)

    def _active_uri(self) -> Optional[str]:
        editor = self.context.editor
        return editor.document.uri if editor is not None else None

    def _publish(self) -> None:
        bus = self.context.bus
        bus.emit("mode.changed", {"mode": self.mode, "visual": self.visual_flag})
        bus.emit("context.set", ("modalkeys.mode", self.mode))


__all__ = ["ModeController"]
