from __future__ import annotations

from typing import List, Tuple

from modal_keys.adapters.textual import TextualModalAdapter, TextualUIHooks, translate_key
from modal_keys.buffer import EditorBuffer
from modal_keys.session import ModalSession


def make_adapter(
    text: str = "",
) -> Tuple[TextualModalAdapter, List[str], List[str], List[Tuple[str, object]], List[str]]:
    session = ModalSession().activate()
    session.open_editor(EditorBuffer(text))
    buffers: List[str] = []
    statuses: List[str] = []
    events: List[Tuple[str, object]] = []
    logs: List[str] = []
    hooks = TextualUIHooks(
        update_buffer=lambda mirror: buffers.append(mirror.text),
        update_status=statuses.append,
        handle_event=lambda name, payload: events.append((name, payload)),
        log=logs.append,
    )
    return TextualModalAdapter(session, hooks), buffers, statuses, events, logs


def test_translate_key_maps_named_keys() -> None:
    assert translate_key("escape") == "ESC"
    assert translate_key("enter") == "\n"
    assert translate_key("backspace") == "BACKSPACE"
    assert translate_key("a", text="a") == "a"
    assert translate_key("a", text="a", modifiers=("ctrl",)) is None
    assert translate_key("f1") is None


def test_adapter_updates_buffer_and_status() -> None:
    adapter, buffers, statuses, _events, _logs = make_adapter()

    adapter.handle_textual_key("i", text="i")
    adapter.handle_textual_key("x", text="x")
    adapter.handle_textual_key("escape")

    assert buffers[-1] == "x"
    assert "-- INSERT --" in statuses
    assert statuses[-1] == "-- NORMAL --"


def test_adapter_relays_mode_events() -> None:
    adapter, _buffers, _statuses, events, _logs = make_adapter("abc")

    adapter.handle_textual_key("i", text="i")

    assert ("mode.changed", {"mode": "insert", "visual": False}) in events


def test_adapter_logs_keys_and_ignores_modified_keys() -> None:
    adapter, buffers, _statuses, _events, logs = make_adapter("abc")

    assert adapter.handle_textual_key("l", text="l") == "l"
    assert adapter.handle_textual_key("q", text="q", modifiers=("ctrl",)) is None

    assert any(line.startswith("key ->") for line in logs)
    assert any(line.startswith("key ignored") for line in logs)
    assert buffers[-1] == "abc"
