"""Trie-based key sequence resolution."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Literal, Optional, Sequence

from modal_keys.runtime.telemetry import span

from .models import Binding
from .registry import KeymapRegistry


@dataclass(slots=True)
class TrieNode:
    binding: Optional[Binding] = None
    children: Dict[str, "TrieNode"] = field(default_factory=dict)

    def child(self, token: str) -> "TrieNode":
        return self.children.setdefault(token, TrieNode())


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    status: Literal["match", "pending", "miss"]
    binding: Optional[Binding] = None
    consumed: int = 0
    next_expected: tuple[str, ...] = ()
    hints: tuple[str, ...] = ()


class KeymapResolver:
    """Builds one trie per mode, rebuilt whenever the registry changes."""

    def __init__(
        self, registry: KeymapRegistry, *, logger_name: str | None = None
    ) -> None:
        self.registry = registry
        self._logger_name = logger_name
        self._cache: Dict[str, tuple[int, TrieNode]] = {}

    def resolve(self, mode: str, tokens: Sequence[str]) -> ResolutionResult:
        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"mode": mode, "length": len(tokens)},
        ) as handle:
            node = self._trie(mode)
            consumed = 0
            for token in tokens:
                child = node.children.get(token)
                if child is None:
                    handle.add_metadata("status", "miss")
                    return ResolutionResult(status="miss", consumed=consumed)
                node = child
                consumed += 1

            if node.binding is not None:
                handle.add_metadata("status", "match")
                return ResolutionResult(
                    status="match", binding=node.binding, consumed=consumed
                )
            if node.children:
                handle.add_metadata("status", "pending")
                return ResolutionResult(
                    status="pending",
                    consumed=consumed,
                    next_expected=tuple(sorted(node.children)),
                    hints=_hints(node),
                )
            handle.add_metadata("status", "miss")
            return ResolutionResult(status="miss", consumed=consumed)

    def reset(self, mode: Optional[str] = None) -> None:
        if mode is None:
            self._cache.clear()
        else:
            self._cache.pop(mode, None)

    def _trie(self, mode: str) -> TrieNode:
        revision = self.registry.revision()
        cached = self._cache.get(mode)
        if cached and cached[0] == revision:
            return cached[1]

        root = TrieNode()
        for binding in self.registry.iter_bindings(mode):
            node = root
            for token in binding.sequence.tokens:
                node = node.child(token)
            node.binding = binding
        self._cache[mode] = (revision, root)
        return root


def _hints(node: TrieNode) -> tuple[str, ...]:
    hints = []
    for token in sorted(node.children):
        label = "SPC" if token == " " else token
        binding = node.children[token].binding
        if binding is not None and binding.help:
            label = f"{label}: {binding.help}"
        hints.append(label)
    return tuple(hints)


__all__ = ["KeymapResolver", "ResolutionResult", "TrieNode"]
