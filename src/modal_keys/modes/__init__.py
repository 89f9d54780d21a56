"""Mode names, shared context and the mode controller."""

from .base_mode import (
    BUILTIN_MODES,
    INSERT,
    NORMAL,
    SEARCH,
    VISUAL,
    ModeBus,
    ModeContext,
    ModeHook,
    ModeHooks,
)
from .mode_manager import ModeController

__all__ = [
    "BUILTIN_MODES",
    "INSERT",
    "NORMAL",
    "SEARCH",
    "VISUAL",
    "ModeBus",
    "ModeContext",
    "ModeHook",
    "ModeHooks",
    "ModeController",
]
