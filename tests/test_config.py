from __future__ import annotations

import pytest

from modal_keys.runtime.config import DEFAULT_MODE_STYLES, ModeStyle, Settings


def test_styles_fall_back_to_theme_colours() -> None:
    settings = Settings()

    match = settings.search_match_style()
    assert match.background == "editor.findMatchBackground"
    assert match.border == "editor.findMatchBorder"
    assert settings.search_other_style().background == "editor.findMatchHighlightBackground"
    assert settings.bookmark_style().whole_line is True


def test_from_env_reads_prefixed_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MODAL_KEYS_SEARCH_MATCH_BACKGROUND", "#ff0000")
    monkeypatch.setenv("MODAL_KEYS_BOOKMARK_COLOR", "blue")
    monkeypatch.delenv("MODAL_KEYS_SEARCH_MATCH_BORDER", raising=False)

    settings = Settings.from_env()

    assert settings.search_match_style().background == "#ff0000"
    assert settings.search_match_style().border == "editor.findMatchBorder"
    assert settings.bookmark_style().background == "blue"


def test_from_mapping_merges_mode_styles() -> None:
    settings = Settings.from_mapping(
        {
            "modeStyles": {
                "insert": {"color": "green"},
                "replace": {"label": "-- REPLACE --", "cursor": "underline"},
            },
            "keybindings": {"normal": {"x": "deleteRight"}},
        }
    )

    assert settings.mode_style("insert") == ModeStyle(
        cursor="line", label="-- INSERT --", color="green"
    )
    assert settings.mode_style("replace").label == "-- REPLACE --"
    assert settings.mode_style("normal") == DEFAULT_MODE_STYLES["normal"]
    assert settings.keybindings == {"normal": {"x": "deleteRight"}}


def test_unknown_mode_shows_its_name() -> None:
    style = Settings().mode_style("pending")

    assert style.label == "PENDING"
    assert style.cursor == "block"
