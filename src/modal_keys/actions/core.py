"""Mode commands and argument helpers shared by every action module."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping

from modal_keys.modes import INSERT, NORMAL
from modal_keys.repeat import CommandArgumentError

if TYPE_CHECKING:
    from modal_keys.session import ModalSession


def mapping_args(name: str, args: Any) -> Mapping[str, Any]:
    """Normalise an optional object payload; anything else is a caller error."""

    if args is None:
        return {}
    if not isinstance(args, Mapping):
        raise CommandArgumentError(f"{name}: expected an object, got {args!r}")
    return args


def enter_mode(session: "ModalSession", args: Any) -> None:
    if isinstance(args, Mapping):
        args = args.get("mode")
    if not isinstance(args, str) or not args:
        raise CommandArgumentError(f"enterMode: invalid mode {args!r}")
    session.modes.enter_mode(args)


def enter_normal(session: "ModalSession", args: Any) -> None:
    del args
    session.modes.enter_mode(NORMAL)


def enter_insert(session: "ModalSession", args: Any) -> None:
    del args
    session.modes.enter_mode(INSERT)


def toggle(session: "ModalSession", args: Any) -> None:
    del args
    session.toggle_capture()


def import_presets(session: "ModalSession", args: Any) -> None:
    if isinstance(args, str):
        args = {"path": args}
    path = mapping_args("importPresets", args).get("path")
    if not isinstance(path, str) or not path:
        raise CommandArgumentError(f"importPresets: invalid path {path!r}")
    session.import_presets(path)


__all__ = [
    "mapping_args",
    "enter_mode",
    "enter_normal",
    "enter_insert",
    "toggle",
    "import_presets",
]
