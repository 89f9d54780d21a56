"""Registry holding command handlers and the key bindings that invoke them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Optional

from modal_keys.runtime.telemetry import span

from .models import ActionRef, Binding


@dataclass(slots=True)
class RegistryStats:
    action_count: int
    binding_count: int
    modes: tuple[str, ...]


class KeymapConflictError(RuntimeError):
    """Raised when a key sequence is already bound in the same mode."""

    def __init__(self, binding: Binding, existing: Binding):
        super().__init__(
            f"Keys '{binding.sequence.signature}' already bound in mode "
            f"'{binding.mode}' ({existing.id})"
        )
        self.binding = binding
        self.existing = existing


class KeymapRegistry:
    def __init__(self, *, logger_name: str | None = None) -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Dict[tuple[str, ...], Binding]] = {}
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def has_action(self, action_id: str) -> bool:
        return action_id in self._actions

    def get_action(self, action_id: str) -> ActionRef:
        try:
            return self._actions[action_id]
        except KeyError as exc:
            raise KeyError(f"Command '{action_id}' is not registered") from exc

    def register_action(self, action: ActionRef, *, replace: bool = False) -> ActionRef:
        if not replace and action.id in self._actions:
            raise ValueError(f"Command '{action.id}' already registered")
        self._actions[action.id] = action
        return action

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id},
        ) as handle:
            self._check_commands(binding)
            bucket = self._bindings.setdefault(binding.mode, {})
            existing = bucket.get(binding.sequence.tokens)
            if existing is not None and not replace:
                handle.add_metadata("conflict", existing.id)
                raise KeymapConflictError(binding, existing)
            bucket[binding.sequence.tokens] = binding
            self._revision += 1
            return binding

    def unregister_binding(self, mode: str, tokens: Iterable[str]) -> Optional[Binding]:
        bucket = self._bindings.get(mode, {})
        removed = bucket.pop(tuple(tokens), None)
        if removed is not None:
            if not bucket:
                self._bindings.pop(mode, None)
            self._revision += 1
        return removed

    def replace_bindings(self, bindings: Iterable[Binding]) -> None:
        """Swap the whole binding table.

        The new table is validated completely before anything is replaced,
        so a bad entry leaves the current bindings untouched.
        """

        table: Dict[str, Dict[tuple[str, ...], Binding]] = {}
        for binding in bindings:
            self._check_commands(binding)
            bucket = table.setdefault(binding.mode, {})
            existing = bucket.get(binding.sequence.tokens)
            if existing is not None:
                raise KeymapConflictError(binding, existing)
            bucket[binding.sequence.tokens] = binding
        self._bindings = table
        self._revision += 1

    def iter_bindings(self, mode: Optional[str] = None) -> Iterator[Binding]:
        if mode is None:
            for bucket in self._bindings.values():
                yield from bucket.values()
            return
        yield from self._bindings.get(mode, {}).values()

    def stats(self) -> RegistryStats:
        return RegistryStats(
            action_count=len(self._actions),
            binding_count=sum(len(bucket) for bucket in self._bindings.values()),
            modes=tuple(sorted(self._bindings)),
        )

    def _check_commands(self, binding: Binding) -> None:
        for command in binding.commands:
            if command.name not in self._actions:
                raise KeyError(
                    f"Binding '{binding.id}' references unknown command '{command.name}'"
                )


__all__ = ["KeymapRegistry", "KeymapConflictError", "RegistryStats"]
