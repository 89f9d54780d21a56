"""Words and sentences: the grammar used to remember repeatable actions.

A word is either the raw keys of one key sequence or a resolved command that
stands in for a sequence (the implicit "collapse secondary cursors" noun). A
sentence pairs the last selection-establishing word (noun) with the last
mutating word (verb).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional, Union


class WordFinalizedError(RuntimeError):
    """Raised when a key is appended to a word that holds a resolved command."""


@dataclass(slots=True)
class RawSequence:
    keys: List[str] = field(default_factory=list)

    def append(self, key: str) -> None:
        self.keys.append(key)

    def text(self) -> str:
        return "".join(self.keys)

    @property
    def is_empty(self) -> bool:
        return not self.keys


@dataclass(frozen=True, slots=True)
class ResolvedCommand:
    name: str
    args: Any = None

    def append(self, key: str) -> None:
        raise WordFinalizedError(
            f"Expected a key sequence, got command '{self.name}' (key {key!r})"
        )

    def text(self) -> str:
        return ""

    @property
    def is_empty(self) -> bool:
        return False


WordStorage = Union[RawSequence, ResolvedCommand]


@dataclass(slots=True)
class KeyWord:
    seq: WordStorage = field(default_factory=RawSequence)
    mode: str = ""

    @classmethod
    def command(cls, name: str, args: Any = None, *, mode: str = "") -> "KeyWord":
        return cls(seq=ResolvedCommand(name, args), mode=mode)

    def add_key(self, key: str, mode: str) -> None:
        if self.seq.is_empty:
            self.mode = mode
        self.seq.append(key)

    def text(self) -> str:
        return self.seq.text()


@dataclass(slots=True)
class KeySentence:
    noun: Optional[KeyWord] = None
    verb: Optional[KeyWord] = None


__all__ = [
    "KeySentence",
    "KeyWord",
    "RawSequence",
    "ResolvedCommand",
    "WordFinalizedError",
    "WordStorage",
]
