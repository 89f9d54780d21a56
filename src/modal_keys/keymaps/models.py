"""Dataclasses describing key bindings, commands and command handlers."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Mapping

_NAMED_KEY = re.compile(r"<([A-Za-z][A-Za-z0-9+_-]*)>")

KEY_ALIASES: Mapping[str, str] = MappingProxyType(
    {
        "enter": "\n",
        "return": "\n",
        "cr": "\n",
        "tab": "\t",
        "space": " ",
        "lt": "<",
        "esc": "ESC",
        "escape": "ESC",
        "bs": "BACKSPACE",
        "backspace": "BACKSPACE",
    }
)


def normalize_key(name: str) -> str:
    """Map a named key (without angle brackets) onto its token."""

    return KEY_ALIASES.get(name.lower(), name.upper())


def split_keys(text: str) -> tuple[str, ...]:
    """Split a binding string into key tokens.

    Every character is a key, except ``<name>`` groups which name a special
    key (``<Esc>``, ``<BS>``, ``<Enter>``...).
    """

    tokens: list[str] = []
    index = 0
    while index < len(text):
        named = _NAMED_KEY.match(text, index)
        if named:
            tokens.append(normalize_key(named.group(1)))
            index = named.end()
        else:
            tokens.append(text[index])
            index += 1
    return tuple(tokens)


@dataclass(frozen=True, slots=True)
class KeyCommand:
    """A command name plus the argument payload it is invoked with."""

    name: str
    args: Any = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("command name cannot be empty")


@dataclass(frozen=True, slots=True)
class KeySequence:
    """Immutable run of key tokens."""

    tokens: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.tokens:
            raise ValueError("KeySequence requires at least one key")

    @classmethod
    def parse(cls, text: str) -> "KeySequence":
        return cls(split_keys(text))

    @property
    def signature(self) -> str:
        return " ".join(self.tokens)


@dataclass(frozen=True, slots=True)
class ActionRef:
    """A registered command handler.

    Handlers are called as ``handler(context, args)`` where ``context`` is the
    object that owns the dispatcher (the modal session).
    """

    id: str
    handler: Callable[..., object]
    description: str = ""
    metadata: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ActionRef id cannot be empty")
        if not callable(self.handler):
            raise TypeError("handler must be callable")
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self.handler(*args, **kwargs)


@dataclass(frozen=True, slots=True)
class Binding:
    """Binds a key sequence in one mode to one or more commands."""

    mode: str
    sequence: KeySequence
    commands: tuple[KeyCommand, ...]
    help: str = ""
    source: str | None = None

    def __post_init__(self) -> None:
        if not self.mode:
            raise ValueError("binding mode cannot be empty")
        if not self.commands:
            raise ValueError("binding needs at least one command")

    @property
    def id(self) -> str:
        return f"{self.mode}:{''.join(self.sequence.tokens)}"


__all__ = [
    "ActionRef",
    "Binding",
    "KeyCommand",
    "KeySequence",
    "normalize_key",
    "split_keys",
]
