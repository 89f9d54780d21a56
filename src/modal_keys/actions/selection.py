"""Selection-mode commands; all of them delegate to the mode controller."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from modal_keys.session import ModalSession


def toggle_selection(session: "ModalSession", args: Any) -> None:
    del args
    session.modes.toggle_selection()


def enable_selection(session: "ModalSession", args: Any) -> None:
    del args
    session.modes.enable_selection()


def cancel_selection(session: "ModalSession", args: Any) -> None:
    del args
    session.modes.cancel_selection()


def cancel_multiple_selections(session: "ModalSession", args: Any) -> None:
    del args
    session.modes.cancel_multiple_selections()


__all__ = [
    "toggle_selection",
    "enable_selection",
    "cancel_selection",
    "cancel_multiple_selections",
]
