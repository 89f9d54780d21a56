"""Textual adapter that feeds Textual key events into a ModalSession."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Mapping, Optional

from modal_keys.buffer import BufferMirror
from modal_keys.presentation import StatusView
from modal_keys.session import ModalSession

TEXTUAL_KEYS: Mapping[str, str] = {
    "escape": "ESC",
    "enter": "\n",
    "return": "\n",
    "backspace": "BACKSPACE",
    "tab": "\t",
    "space": " ",
}

_RELAYED_EVENTS = (
    "notify.info",
    "notify.warning",
    "notify.error",
    "mode.changed",
    "capture.changed",
    "context.set",
)


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[BufferMirror], None]
    update_status: Callable[[str], None] = _noop
    show_command: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    log: Callable[[str], None] = _noop


def translate_key(
    key: str, *, text: Optional[str] = None, modifiers: Iterable[str] = ()
) -> Optional[str]:
    """Session key for a Textual key event, or ``None`` when it is not ours."""

    if any(str(mod).lower() in {"ctrl", "alt", "meta"} for mod in modifiers):
        return None
    named = TEXTUAL_KEYS.get(key)
    if named is not None:
        return named
    if text and len(text) == 1:
        return text
    return None


class TextualModalAdapter:
    """Bridges session bus events and buffer mirrors to Textual widgets.

    ``update_status`` receives the main status text (mode label or search
    prompt), ``show_command`` the secondary text (keys typed so far, help,
    search info).
    """

    def __init__(self, session: ModalSession, hooks: TextualUIHooks) -> None:
        self.session = session
        self.hooks = hooks
        self._subscribe_events()
        self._refresh_buffer()
        self._show_status(session.presenter.refresh())

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> Optional[str]:
        """Translate and dispatch one Textual key; return the session key sent."""

        translated = translate_key(key, text=text, modifiers=modifiers)
        if translated is None:
            self._log_state("key ignored", key=key)
            return None
        self._log_state("key ->", key=key, translated=translated)
        self.session.handle_key(translated)
        self._refresh_buffer()
        self._show_status(self.session.status)
        return translated

    def _subscribe_events(self) -> None:
        bus = self.session.bus
        for event in _RELAYED_EVENTS:
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )
        bus.subscribe("status.changed", self._on_status)
        bus.subscribe("buffer.changed", self._on_buffer)

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)

    def _on_status(self, payload: object | None) -> None:
        if isinstance(payload, StatusView):
            self._show_status(payload)

    def _on_buffer(self, payload: object | None) -> None:
        if isinstance(payload, BufferMirror):
            self.hooks.update_buffer(payload)

    def _show_status(self, view: StatusView) -> None:
        self.hooks.update_status(view.main_text)
        self.hooks.show_command(view.secondary_text)

    def _refresh_buffer(self) -> None:
        editor = self.session.editor
        if editor is not None:
            self.hooks.update_buffer(editor.mirror())

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        session = self.session
        editor = session.editor
        return {
            "mode": session.modes.effective_mode,
            "document": editor.document.uri if editor is not None else None,
            "selections": len(editor.selections) if editor is not None else 0,
            "pending": "".join(session.dispatcher.pending_keys),
        }


__all__ = ["TextualModalAdapter", "TextualUIHooks", "translate_key", "TEXTUAL_KEYS"]
