"""Repeat commands and the document-touch overrides used by the recorder."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping

from modal_keys.repeat import CommandArgumentError

if TYPE_CHECKING:
    from modal_keys.session import ModalSession


def type_keys(session: "ModalSession", args: Any) -> None:
    if not isinstance(args, Mapping):
        raise CommandArgumentError(f"typeKeys: expected an object, got {args!r}")
    mode = args.get("mode")
    if mode is not None and not isinstance(mode, str):
        raise CommandArgumentError(f"typeKeys: invalid mode {mode!r}")
    session.recorder.type_keys(args.get("keys"), mode)


def repeat_last_change(session: "ModalSession", args: Any) -> None:
    del args
    session.recorder.repeat_last_change()


def repeat_last_used_selection(session: "ModalSession", args: Any) -> None:
    del args
    session.recorder.repeat_last_used_selection()


def touch_document(session: "ModalSession", args: Any) -> None:
    del args
    session.recorder.touch_document()


def untouch_document(session: "ModalSession", args: Any) -> None:
    del args
    session.recorder.untouch_document()


__all__ = [
    "type_keys",
    "repeat_last_change",
    "repeat_last_used_selection",
    "touch_document",
    "untouch_document",
]
