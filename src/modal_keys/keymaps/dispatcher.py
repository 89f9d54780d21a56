"""Key-sequence dispatcher: turns keystrokes into bound commands."""

from __future__ import annotations

from typing import Callable, List, Mapping, Optional

from modal_keys.runtime import telemetry

from .models import KeyCommand
from .resolver import KeymapResolver

Executor = Callable[[KeyCommand], object]


class KeyDispatcher:
    """Accumulates keys per mode until they resolve to a binding.

    ``capture_modes`` maps a mode to a command that receives every key typed
    in that mode as its argument (search mode feeds characters straight to
    the search command). ``spawn`` returns a dispatcher that shares bindings
    and executor but keeps its own pending keys, so programmatic key runs
    never disturb a sequence the user is halfway through.
    """

    def __init__(
        self,
        resolver: KeymapResolver,
        execute: Executor,
        *,
        capture_modes: Optional[Mapping[str, str]] = None,
        logger_name: str = "modal_keys.keymaps",
    ) -> None:
        self.resolver = resolver
        self.execute = execute
        self.capture_modes = dict(capture_modes or {})
        self.logger_name = logger_name
        self._pending: List[str] = []
        self._pending_mode: Optional[str] = None
        self._help = ""

    @property
    def pending_keys(self) -> tuple[str, ...]:
        return tuple(self._pending)

    def spawn(self) -> "KeyDispatcher":
        return KeyDispatcher(
            self.resolver,
            self.execute,
            capture_modes=self.capture_modes,
            logger_name=self.logger_name,
        )

    def waiting_for_key(self) -> bool:
        return bool(self._pending)

    def help(self) -> str:
        return self._help

    def reset(self) -> None:
        self._pending.clear()
        self._pending_mode = None
        self._help = ""

    def handle_key(self, key: str, mode: str) -> bool:
        """Feed one key typed in ``mode``; return whether it was consumed."""

        captured = self.capture_modes.get(mode)
        if captured is not None:
            self.reset()
            self._run((KeyCommand(captured, key),), mode=mode, keys=key)
            return True

        if self._pending_mode is not None and self._pending_mode != mode:
            self.reset()
        self._pending.append(key)
        self._pending_mode = mode
        result = self.resolver.resolve(mode, self._pending)

        if result.status == "match" and result.binding is not None:
            keys = "".join(self._pending)
            self.reset()
            self._run(result.binding.commands, mode=mode, keys=keys)
            return True

        if result.status == "pending":
            self._help = ", ".join(result.hints)
            return True

        telemetry.record_event(
            "keys.unbound",
            level="debug",
            data={"mode": mode, "keys": "".join(self._pending)},
            logger_name=self.logger_name,
        )
        self.reset()
        return False

    def _run(self, commands: tuple[KeyCommand, ...], *, mode: str, keys: str) -> None:
        with telemetry.span(
            "keymaps::execute",
            logger_name=self.logger_name,
            component="keymaps",
            metadata={"mode": mode, "keys": keys},
        ):
            for command in commands:
                self.execute(command)


__all__ = ["KeyDispatcher", "Executor"]
