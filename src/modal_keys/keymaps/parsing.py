"""Turn a structured key-binding table into ``Binding`` objects.

The table maps mode names to ``{keys: command-spec}``. A mode entry may list
several modes separated by ``|`` (``"normal|visual"``). A command spec is a
command name, a ``{"command": name, "args": ...}`` object, or a list of
either; an object may also carry ``help`` text shown while the sequence is
being typed.
"""

from __future__ import annotations

from typing import Any, List, Mapping

from .models import Binding, KeyCommand, KeySequence


def parse_command(spec: Any) -> KeyCommand:
    if isinstance(spec, str):
        return KeyCommand(spec)
    if isinstance(spec, Mapping) and isinstance(spec.get("command"), str):
        return KeyCommand(spec["command"], spec.get("args"))
    raise ValueError(f"Invalid command spec: {spec!r}")


def parse_commands(spec: Any) -> tuple[KeyCommand, ...]:
    if isinstance(spec, list):
        if not spec:
            raise ValueError("Empty command list")
        return tuple(parse_command(item) for item in spec)
    return (parse_command(spec),)


def bindings_from_mapping(
    table: Mapping[str, Any], *, source: str | None = None
) -> List[Binding]:
    if not isinstance(table, Mapping):
        raise ValueError("Key bindings must be an object keyed by mode")

    bindings: List[Binding] = []
    for mode_spec, entries in table.items():
        if not isinstance(entries, Mapping):
            raise ValueError(f"Bindings for '{mode_spec}' must be an object")
        modes = [mode.strip() for mode in str(mode_spec).split("|") if mode.strip()]
        for keys, spec in entries.items():
            help_text = ""
            if isinstance(spec, Mapping) and "commands" in spec:
                help_text = str(spec.get("help", ""))
                spec = spec["commands"]
            elif isinstance(spec, Mapping):
                help_text = str(spec.get("help", ""))
            commands = parse_commands(spec)
            sequence = KeySequence.parse(str(keys))
            for mode in modes:
                bindings.append(
                    Binding(
                        mode=mode,
                        sequence=sequence,
                        commands=commands,
                        help=help_text,
                        source=source,
                    )
                )
    return bindings


__all__ = ["bindings_from_mapping", "parse_command", "parse_commands"]
