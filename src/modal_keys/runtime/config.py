"""User settings: highlight colours, mode presentation and stored key bindings."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from .telemetry import env_value


@dataclass(frozen=True, slots=True)
class DecorationStyle:
    """Paint attributes for one decoration kind.

    Colours are either literal CSS-like values or editor theme colour names;
    hosts resolve theme names against their own palette.
    """

    background: str
    border: Optional[str] = None
    border_style: str = "solid"
    whole_line: bool = False


@dataclass(frozen=True, slots=True)
class ModeStyle:
    cursor: str
    label: str
    color: Optional[str] = None


DEFAULT_MODE_STYLES: Mapping[str, ModeStyle] = {
    "normal": ModeStyle(cursor="block", label="-- NORMAL --"),
    "insert": ModeStyle(cursor="line", label="-- INSERT --"),
    "visual": ModeStyle(cursor="line-thin", label="-- VISUAL --"),
    "search": ModeStyle(cursor="underline", label="SEARCH"),
}

_SETTING_ENV = {
    "searchMatchBackground": "SEARCH_MATCH_BACKGROUND",
    "searchMatchBorder": "SEARCH_MATCH_BORDER",
    "searchOtherMatchesBackground": "SEARCH_OTHER_MATCHES_BACKGROUND",
    "searchOtherMatchesBorder": "SEARCH_OTHER_MATCHES_BORDER",
    "bookmarkColor": "BOOKMARK_COLOR",
}


@dataclass
class Settings:
    search_match_background: Optional[str] = None
    search_match_border: Optional[str] = None
    search_other_matches_background: Optional[str] = None
    search_other_matches_border: Optional[str] = None
    bookmark_color: Optional[str] = None
    mode_styles: Dict[str, ModeStyle] = field(
        default_factory=lambda: dict(DEFAULT_MODE_STYLES)
    )
    keybindings: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_env(cls) -> "Settings":
        return cls.from_mapping(
            {key: env_value(suffix) for key, suffix in _SETTING_ENV.items()}
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Settings":
        """Build settings from a camelCase mapping as found in settings files."""

        settings = cls(
            search_match_background=data.get("searchMatchBackground"),
            search_match_border=data.get("searchMatchBorder"),
            search_other_matches_background=data.get("searchOtherMatchesBackground"),
            search_other_matches_border=data.get("searchOtherMatchesBorder"),
            bookmark_color=data.get("bookmarkColor"),
            keybindings=dict(data.get("keybindings") or {}),
        )
        for mode, style in (data.get("modeStyles") or {}).items():
            base = settings.mode_styles.get(mode, DEFAULT_MODE_STYLES["normal"])
            settings.mode_styles[mode] = ModeStyle(
                cursor=style.get("cursor", base.cursor),
                label=style.get("label", base.label),
                color=style.get("color", base.color),
            )
        return settings

    def search_match_style(self) -> DecorationStyle:
        return DecorationStyle(
            background=self.search_match_background
            or "editor.findMatchBackground",
            border=self.search_match_border or "editor.findMatchBorder",
        )

    def search_other_style(self) -> DecorationStyle:
        return DecorationStyle(
            background=self.search_other_matches_background
            or "editor.findMatchHighlightBackground",
            border=self.search_other_matches_border
            or "editor.findMatchHighlightBorder",
        )

    def bookmark_style(self) -> DecorationStyle:
        return DecorationStyle(
            background=self.bookmark_color or "rgba(0,0,150,0.5)",
            border_style="none",
            whole_line=True,
        )

    def mode_style(self, mode: str) -> ModeStyle:
        style = self.mode_styles.get(mode)
        if style is None:
            # user-defined modes show their own name
            return ModeStyle(cursor="block", label=mode.upper())
        return style


__all__ = ["DecorationStyle", "ModeStyle", "Settings", "DEFAULT_MODE_STYLES"]
