"""Key-binding presets: bundled or user files that replace the binding table."""

from __future__ import annotations

import json
import tomllib
from pathlib import Path
from typing import Any, Dict, List, Optional

from modal_keys.keymaps import Binding, KeymapConflictError, KeymapRegistry
from modal_keys.keymaps import bindings_from_mapping
from modal_keys.modes import ModeContext
from modal_keys.runtime import telemetry

BUNDLED_PRESETS = Path(__file__).resolve().parent.parent / "presets"
DATA_SUFFIXES = (".json", ".jsonc", ".toml")
EXECUTABLE_SUFFIXES = (".js", ".py")


class PresetError(ValueError):
    """A preset could not be read, parsed or validated."""


def list_presets(directory: Optional[Path] = None) -> List[Path]:
    root = directory or BUNDLED_PRESETS
    if not root.is_dir():
        return []
    return sorted(
        path for path in root.iterdir() if path.suffix.lower() in DATA_SUFFIXES
    )


def strip_json_comments(text: str) -> str:
    """Remove ``//`` and ``/* */`` comments that sit outside string literals."""

    out: List[str] = []
    index = 0
    length = len(text)
    in_string = False
    while index < length:
        char = text[index]
        if in_string:
            out.append(char)
            if char == "\\" and index + 1 < length:
                out.append(text[index + 1])
                index += 2
                continue
            if char == '"':
                in_string = False
            index += 1
        elif char == '"':
            in_string = True
            out.append(char)
            index += 1
        elif text.startswith("//", index):
            newline = text.find("\n", index)
            index = length if newline < 0 else newline
        elif text.startswith("/*", index):
            close = text.find("*/", index + 2)
            if close < 0:
                raise PresetError("Unterminated block comment")
            index = close + 2
        else:
            out.append(char)
            index += 1
    return "".join(out)


def load_preset(path: Path) -> Dict[str, Any]:
    suffix = path.suffix.lower()
    if suffix in EXECUTABLE_SUFFIXES:
        raise PresetError(f"Executable presets are not supported: {path.name}")
    if suffix not in DATA_SUFFIXES:
        raise PresetError(f"Unsupported preset format: {path.name}")
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise PresetError(f"Cannot read {path}: {exc}") from exc

    try:
        if suffix == ".toml":
            data = tomllib.loads(raw)
        else:
            data = json.loads(strip_json_comments(raw))
    except (json.JSONDecodeError, tomllib.TOMLDecodeError) as exc:
        raise PresetError(f"Cannot parse {path.name}: {exc}") from exc

    if not isinstance(data, dict) or not data.get("keybindings"):
        raise PresetError(f'Could not find "keybindings" in {path}')
    return data


def preset_bindings(
    data: Dict[str, Any], registry: KeymapRegistry, *, source: str
) -> List[Binding]:
    try:
        bindings = bindings_from_mapping(data["keybindings"], source=source)
    except ValueError as exc:
        raise PresetError(str(exc)) from exc
    for binding in bindings:
        for command in binding.commands:
            if not registry.has_action(command.name):
                raise PresetError(
                    f"Binding '{binding.id}' uses unknown command '{command.name}'"
                )
    return bindings


def import_presets(
    path: Path, *, registry: KeymapRegistry, context: ModeContext
) -> bool:
    """Replace the key bindings with those of the preset at ``path``.

    Nothing is applied unless the whole preset validates. Failures are
    reported as a warning and ``False`` is returned.
    """

    with telemetry.span(
        "presets::import",
        logger_name="modal_keys.store",
        component="presets",
        metadata={"path": str(path)},
    ) as handle:
        try:
            data = load_preset(path)
            bindings = preset_bindings(data, registry, source=path.name)
            registry.replace_bindings(bindings)
        except (PresetError, KeymapConflictError) as exc:
            handle.cancel(str(exc))
            context.notify("warning", "Bindings not imported.", str(exc))
            return False

        context.settings.keybindings = dict(data["keybindings"])
        handle.add_metadata("bindings", len(bindings))
    telemetry.record_event(
        "presets.imported",
        data={"path": str(path), "bindings": len(bindings)},
        logger_name="modal_keys.store",
    )
    context.notify("info", "Keybindings imported.")
    return True


__all__ = [
    "BUNDLED_PRESETS",
    "PresetError",
    "import_presets",
    "list_presets",
    "load_preset",
    "preset_bindings",
    "strip_json_comments",
]
