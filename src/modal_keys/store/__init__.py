"""Bookmarks, quick snippets and key-binding presets."""

from .bookmarks import DEFAULT_GROUP, Bookmark, BookmarkSet
from .snippets import QuickSnippets
from .presets import (
    BUNDLED_PRESETS,
    PresetError,
    import_presets,
    list_presets,
    load_preset,
    preset_bindings,
    strip_json_comments,
)

__all__ = [
    "DEFAULT_GROUP",
    "Bookmark",
    "BookmarkSet",
    "QuickSnippets",
    "BUNDLED_PRESETS",
    "PresetError",
    "import_presets",
    "list_presets",
    "load_preset",
    "preset_bindings",
    "strip_json_comments",
]
