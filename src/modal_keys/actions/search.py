"""Search commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping

from modal_keys.repeat import CommandArgumentError

if TYPE_CHECKING:
    from modal_keys.session import ModalSession


def search(session: "ModalSession", args: Any) -> None:
    if args is not None and not isinstance(args, (str, Mapping)):
        raise CommandArgumentError(f"search: invalid argument {args!r}")
    session.search.search(args)


def cancel_search(session: "ModalSession", args: Any) -> None:
    del args
    session.search.cancel()


def delete_char_from_search(session: "ModalSession", args: Any) -> None:
    del args
    session.search.delete_char()


def next_match(session: "ModalSession", args: Any) -> None:
    del args
    session.search.next_match()


def previous_match(session: "ModalSession", args: Any) -> None:
    del args
    session.search.previous_match()


__all__ = [
    "search",
    "cancel_search",
    "delete_char_from_search",
    "next_match",
    "previous_match",
]
