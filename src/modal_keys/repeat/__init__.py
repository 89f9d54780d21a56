"""Repeat grammar (words and sentences) and the recorder that maintains it."""

from .words import (
    KeySentence,
    KeyWord,
    RawSequence,
    ResolvedCommand,
    WordFinalizedError,
    WordStorage,
)
from .recorder import COLLAPSE_SELECTIONS, CommandArgumentError, SentenceRecorder

__all__ = [
    "KeySentence",
    "KeyWord",
    "RawSequence",
    "ResolvedCommand",
    "WordFinalizedError",
    "WordStorage",
    "COLLAPSE_SELECTIONS",
    "CommandArgumentError",
    "SentenceRecorder",
]
