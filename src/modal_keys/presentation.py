"""Status-line and cursor-style view model derived from session state."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from modal_keys.modes import NORMAL, SEARCH, VISUAL
from modal_keys.runtime.config import ModeStyle

if TYPE_CHECKING:
    from modal_keys.session import ModalSession

HELP_SEPARATOR = "    "


@dataclass(frozen=True, slots=True)
class StatusView:
    """What a host shows: the main and secondary status texts plus cursor shape."""

    main_text: str = ""
    secondary_text: str = ""
    cursor_style: str = "block"
    color: Optional[str] = None
    visible: bool = True


HIDDEN = StatusView(visible=False)


class Presenter:
    """Recomputes the status view whenever the session asks for a refresh.

    Publishes the result as ``status.changed``. The search info message is
    only shown while there is nothing else for the secondary text.
    """

    def __init__(self, session: "ModalSession") -> None:
        self.session = session
        self.view = HIDDEN
        bus = session.bus
        bus.subscribe("presentation.refresh", self._on_refresh)
        bus.subscribe("mode.changed", self._on_refresh)

    def _style(self) -> ModeStyle:
        session = self.session
        settings = session.settings
        mode = session.modes.mode
        if mode == NORMAL and session.modes.is_selecting():
            return settings.mode_style(VISUAL)
        return settings.mode_style(mode)

    def compute(self) -> StatusView:
        session = self.session
        if session.editor is None or not session.enabled:
            return HIDDEN

        style = self._style()
        main = style.label
        search = session.search.session
        if session.modes.mode == SEARCH and search is not None:
            main = f"{style.label} {search.status_label()}"

        secondary = " " + session.recorder.current_word.text()
        help_text = session.dispatcher.help()
        if help_text:
            secondary = f"{secondary}{HELP_SEPARATOR}{help_text}"
        info = session.search.info
        if info and secondary.strip() == "":
            secondary = info

        return StatusView(
            main_text=main,
            secondary_text=secondary,
            cursor_style=style.cursor,
            color=style.color,
        )

    def refresh(self) -> StatusView:
        self.view = self.compute()
        self.session.bus.emit("status.changed", self.view)
        return self.view

    def _on_refresh(self, payload: object) -> None:
        del payload
        self.refresh()


__all__ = ["Presenter", "StatusView", "HIDDEN", "HELP_SEPARATOR"]
