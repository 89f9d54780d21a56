"""Executable Textual app that hosts a modal session over an in-memory buffer."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use modal_keys.adapters.textual.app"
    ) from exc

from modal_keys.buffer import BufferMirror, EditorBuffer
from modal_keys.runtime.config import Settings
from modal_keys.search import PRIMARY_DECORATION, SECONDARY_DECORATION
from modal_keys.session import ModalSession

from .controller import TextualModalAdapter, TextualUIHooks

DECORATION_STYLES = {
    PRIMARY_DECORATION: "black on yellow",
    SECONDARY_DECORATION: "underline",
    "bookmarks": "on dark_blue",
}


SEVERITY = {
    "notify.info": "information",
    "notify.warning": "warning",
    "notify.error": "error",
}


def create_session(text: str = "", *, uri: str = "untitled:1") -> ModalSession:
    """Build an active session with one in-memory editor open."""

    session = ModalSession(settings=Settings.from_env()).activate()
    session.open_editor(EditorBuffer(text, uri=uri))
    return session


def render_mirror(mirror: BufferMirror) -> Text:
    body = Text(mirror.text + " ")
    for kind, ranges in mirror.decorations.items():
        style = DECORATION_STYLES.get(kind)
        if style is None:
            continue
        for start, end in ranges:
            body.stylize(style, start, end)
    for selection in mirror.selections:
        if not selection.is_empty:
            body.stylize("reverse", selection.start, selection.end)
        body.stylize("bold reverse", selection.active, selection.active + 1)
    return body


@dataclass
class UIState:
    status_text: str = ""
    secondary_text: str = ""


class ModalKeysApp(App[None]):
    """Minimal Textual UI embedding a modal session."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		border: round $accent;
		padding: 1 1;
		content-align: left top;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}

	#secondary-line {
		height: 1;
		background: $surface-darken-2;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        *,
        text: str = "",
        uri: str = "untitled:1",
        preset: Optional[Path] = None,
    ) -> None:
        super().__init__()
        self._state = UIState()
        self._text = text
        self._uri = uri
        self._preset = preset
        self.session: ModalSession | None = None
        self.adapter: TextualModalAdapter | None = None
        self._buffer_widget: Static | None = None
        self._status_widget: Static | None = None
        self._secondary_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="buffer-area"):
            self._buffer_widget = Static("", id="buffer-view")
            yield self._buffer_widget
        self._status_widget = Static("", id="status-line")
        self._secondary_widget = Static("", id="secondary-line")
        yield self._status_widget
        yield self._secondary_widget
        yield Footer()

    async def on_mount(self) -> None:
        self.session = create_session(self._text, uri=self._uri)
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
            show_command=self._show_secondary,
            handle_event=self._handle_event,
            log=self.log.info,
        )
        self.adapter = TextualModalAdapter(self.session, hooks)
        if self._preset is not None:
            self.session.import_presets(self._preset)

    async def on_key(self, event: events.Key) -> None:
        if not self.adapter or event.key in {"ctrl+c", "ctrl+q"}:
            return
        *modifiers, key = event.key.split("+")
        sent = self.adapter.handle_textual_key(
            key, text=event.character, modifiers=modifiers
        )
        if sent is not None:
            event.stop()

    def _update_buffer(self, mirror: BufferMirror) -> None:
        if self._buffer_widget:
            self._buffer_widget.update(render_mirror(mirror))

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)

    def _show_secondary(self, text: str) -> None:
        self._state.secondary_text = text
        if self._secondary_widget:
            self._secondary_widget.update(text)

    def _handle_event(self, name: str, payload: Any | None) -> None:
        severity = SEVERITY.get(name)
        if severity is None or not isinstance(payload, dict):
            return
        message = str(payload.get("message", ""))
        detail = payload.get("detail")
        self.notify(f"{message} {detail}" if detail else message, severity=severity)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the modal keys Textual demo.")
    parser.add_argument(
        "path",
        nargs="?",
        type=Path,
        help="Text file to load into the demo buffer (not written back)",
    )
    parser.add_argument(
        "--preset",
        type=Path,
        default=None,
        help="Key-binding preset (.json, .jsonc or .toml) to import on start",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    text = ""
    uri = "untitled:1"
    if args.path is not None:
        text = args.path.read_text(encoding="utf-8")
        uri = args.path.resolve().as_uri()
    app = ModalKeysApp(text=text, uri=uri, preset=args.preset)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
