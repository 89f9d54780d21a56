"""Key bindings, binding registry, trie resolver and key dispatcher."""

from .models import ActionRef, Binding, KeyCommand, KeySequence, normalize_key, split_keys
from .registry import KeymapConflictError, KeymapRegistry, RegistryStats
from .resolver import KeymapResolver, ResolutionResult
from .dispatcher import KeyDispatcher
from .parsing import bindings_from_mapping, parse_command, parse_commands
from .defaults import DEFAULT_KEYBINDINGS, default_bindings, load_default_keymaps

__all__ = [
    "ActionRef",
    "Binding",
    "KeyCommand",
    "KeySequence",
    "normalize_key",
    "split_keys",
    "KeymapConflictError",
    "KeymapRegistry",
    "RegistryStats",
    "KeymapResolver",
    "ResolutionResult",
    "KeyDispatcher",
    "bindings_from_mapping",
    "parse_command",
    "parse_commands",
    "DEFAULT_KEYBINDINGS",
    "default_bindings",
    "load_default_keymaps",
]
