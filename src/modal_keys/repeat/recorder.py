"""Sentence recorder: remembers what "repeat last change" should replay."""

from __future__ import annotations

from typing import Any, Optional, Sequence

from modal_keys.buffer import Selection, any_selected
from modal_keys.keymaps import KeyCommand, KeyDispatcher
from modal_keys.modes import NORMAL, ModeController
from modal_keys.runtime import telemetry

from .words import KeySentence, KeyWord, RawSequence, ResolvedCommand

COLLAPSE_SELECTIONS = "modalkeys.cancelMultipleSelections"


class CommandArgumentError(TypeError):
    """Raised when a command receives a malformed argument payload."""


class SentenceRecorder:
    """Assembles typed keys into words and words into sentences.

    Text and selection changes are reported asynchronously by the editor
    and only folded into the sentence on the next keystroke: the word that
    just completed is the one that caused them. While a repeat is replaying
    a remembered word, that bookkeeping is skipped once so the replay does
    not overwrite what it is replaying.
    """

    def __init__(self, modes: ModeController, dispatcher: KeyDispatcher) -> None:
        self.modes = modes
        self.dispatcher = dispatcher
        self.text_changed = False
        self.selection_changed = False
        self.selection_used = False
        self.ignore_changes = False
        self.replaying = False
        self.current_word = KeyWord()
        self.last_word = KeyWord()
        self.pending_sentence = KeySentence()
        self.last_sentence = KeySentence()
        self.logger = telemetry.get_logger("modal_keys.repeat")
        modes.add_hooks(NORMAL, on_enter=self._on_normal_enter)

    def note_text_changed(self) -> None:
        self.text_changed = True

    def note_selection_changed(self, selections: Sequence[Selection]) -> None:
        if self.text_changed or self.ignore_changes:
            return
        self.selection_changed = True
        self.selection_used = any_selected(selections)

    def touch_document(self) -> None:
        self.text_changed = True

    def untouch_document(self) -> None:
        self.ignore_changes = True

    def on_type(self, key: str) -> bool:
        """Handle one captured keystroke; return whether it was consumed."""

        if self.replaying:
            self.replaying = False
            self.text_changed = False
            self.selection_changed = False
            self.selection_used = False
        else:
            self._fold_changes()
            self.ignore_changes = False

        mode = self.modes.mode
        self.current_word.add_key(key, mode)
        consumed = self.run_key(key, mode)
        if not self.dispatcher.waiting_for_key():
            self.last_word = self.current_word
            self.current_word = KeyWord()
        self.modes.context.bus.emit("presentation.refresh", None)
        return consumed

    def run_key(
        self, key: str, mode: str, dispatcher: Optional[KeyDispatcher] = None
    ) -> bool:
        target = dispatcher or self.dispatcher
        return target.handle_key(key, self.modes.dispatch_mode(mode))

    def repeat_last_change(self) -> None:
        self._replay(self.last_sentence.verb, "verb")

    def repeat_last_used_selection(self) -> None:
        self._replay(self.last_sentence.noun, "noun")

    def type_keys(self, keys: Any, mode: Optional[str] = None) -> None:
        """Run ``keys`` through an isolated dispatcher as if typed in ``mode``."""

        if not isinstance(keys, str):
            raise CommandArgumentError(f"typeKeys: invalid keys {keys!r}")
        nested = self.dispatcher.spawn()
        start_mode = self.modes.effective_mode
        new_mode = mode or NORMAL
        if self.modes.mode != new_mode:
            self.modes.enter_mode(new_mode)
        for key in keys:
            self.run_key(key, new_mode, nested)
        self._restore(start_mode)

    def _fold_changes(self) -> None:
        if self.ignore_changes:
            # the untouched action's own edits must not surface on a later key
            self.text_changed = False
            self.selection_changed = False
            return
        if self.text_changed:
            self.last_sentence = KeySentence(
                noun=self.pending_sentence.noun, verb=self.last_word
            )
            self.pending_sentence = KeySentence(
                noun=KeyWord.command(COLLAPSE_SELECTIONS)
            )
            self.text_changed = False
            self.selection_changed = False
        elif self.selection_changed:
            if self.selection_used:
                noun = self.last_word
            else:
                noun = KeyWord.command(COLLAPSE_SELECTIONS, mode=self.last_word.mode)
            self.pending_sentence = KeySentence(noun=noun)
            self.selection_changed = False

    def _replay(self, word: Optional[KeyWord], part: str) -> None:
        self.replaying = True
        if word is None:
            return
        telemetry.record_event(
            "repeat.replay",
            data={"part": part, "keys": word.text(), "mode": word.mode},
            logger_name="modal_keys.repeat",
        )
        seq = word.seq
        if isinstance(seq, ResolvedCommand):
            self.dispatcher.execute(KeyCommand(seq.name, seq.args))
            return
        if not isinstance(seq, RawSequence):
            raise TypeError(f"Unknown word storage {seq!r}")

        nested = self.dispatcher.spawn()
        start_mode = self.modes.effective_mode
        if self.modes.mode != word.mode:
            self.modes.enter_mode(word.mode)
        for key in list(seq.keys):
            self.run_key(key, word.mode, nested)
        self.current_word = self.last_word
        self._restore(start_mode)

    def _restore(self, mode: str) -> None:
        # compared as effective modes so a visual overlay is restored too
        if self.modes.effective_mode != mode:
            self.modes.enter_mode(mode)

    def _on_normal_enter(self, new_mode: str, old_mode: str) -> None:
        del new_mode, old_mode
        self.current_word = KeyWord()
        self.dispatcher.reset()


__all__ = ["SentenceRecorder", "CommandArgumentError", "COLLAPSE_SELECTIONS"]
