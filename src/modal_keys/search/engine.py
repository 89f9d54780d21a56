"""Incremental multi-cursor search with highlight-as-you-type."""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Sequence

from modal_keys.buffer import EditorSurface, Selection
from modal_keys.modes import SEARCH, ModeController
from modal_keys.runtime import telemetry

from .models import SearchParams, SearchSession
from .offsets import (
    UnknownOffsetPolicy,
    offset_shift,
    shift_selections,
    unposition_shift,
)

PRIMARY_DECORATION = "search.primary"
SECONDARY_DECORATION = "search.secondary"
NOT_FOUND = "Pattern not found"


def _boundary(backwards: bool) -> str:
    return "TOP" if backwards else "BOTTOM"


def find_from(text: str, target: str, cursor: int, backwards: bool) -> int:
    """Offset of the nearest occurrence of ``target`` from ``cursor``.

    Forward searches include a match starting at the cursor; backward
    searches consider matches starting strictly before it.
    """

    if backwards:
        if cursor <= 0:
            return -1
        return text.rfind(target, 0, cursor - 1 + len(target))
    return text.find(target, cursor)


def fold_case(text: str) -> str:
    """Lower-case ``text`` one character at a time without changing its length.

    Characters whose lower-case form is longer (a dotted capital I becomes
    two code points) are kept as they are, so match offsets stay valid in the
    document.
    """

    folded = []
    for char in text:
        lower = char.lower()
        folded.append(lower if len(lower) == 1 else char)
    return "".join(folded)


class SearchEngine:
    """Owns the active search session and the last finished one.

    While the mode is ``search`` every typed character extends the pattern
    and matches are recomputed from the selections captured when the search
    began. After accept or cancel the session moves to ``last`` so
    ``next_match``/``previous_match`` keep working from normal mode.
    """

    def __init__(self, modes: ModeController) -> None:
        self.modes = modes
        self.context = modes.context
        self.session: Optional[SearchSession] = None
        self.last: Optional[SearchSession] = None
        self.changed = False
        self._previous_mode = modes.mode
        self.logger = telemetry.get_logger("modal_keys.search")
        modes.add_hooks(SEARCH, on_enter=self._on_search_enter)

    @property
    def editor(self) -> Optional[EditorSurface]:
        return self.context.editor

    @property
    def current(self) -> Optional[SearchSession]:
        return self.session or self.last

    @property
    def info(self) -> Optional[str]:
        current = self.current
        return current.info if current else None

    def clear_info(self) -> None:
        current = self.current
        if current is not None:
            current.info = None

    def consume_changed(self) -> bool:
        changed, self.changed = self.changed, False
        return changed

    def search(self, args: Mapping[str, Any] | str | None = None) -> None:
        editor = self.editor
        if editor is None:
            return
        if args is None or isinstance(args, Mapping):
            self.begin(SearchParams.from_args(args))
        elif args == "\n":
            session = self.session
            if session is not None:
                self.accept(len(session.pattern) - 1)
        else:
            self.append(str(args))

    def begin(self, params: SearchParams) -> SearchSession:
        editor = self.editor
        if editor is None:
            raise RuntimeError("search requires an active editor")
        self.modes.enter_mode(SEARCH)
        session = SearchSession(
            params=params,
            start_selections=list(editor.selections),
            previous_mode=self._previous_mode,
        )
        self.session = session
        telemetry.record_event(
            "search.begin",
            data={"backwards": params.backwards, "offset": params.offset},
            logger_name="modal_keys.search",
        )
        self._refresh()
        return session

    def append(self, text: str) -> None:
        session = self.session
        editor = self.editor
        if session is None or editor is None:
            return
        session.pattern += text
        self.highlight(session.start_selections)
        if len(session.pattern) >= session.params.accept_after:
            self.accept(len(session.pattern))
        else:
            self._refresh()

    def delete_char(self) -> None:
        session = self.session
        if session is None or self.editor is None or not session.pattern:
            return
        session.pattern = session.pattern[:-1]
        self.highlight(session.start_selections)
        self._refresh()

    def accept(self, length: int) -> None:
        session = self.session
        editor = self.editor
        if session is None or editor is None:
            return
        self.modes.enter_mode(session.previous_mode)
        self.session = None
        self.last = session
        session.match_length = length
        self.position(session, length, session.forward)
        telemetry.record_event(
            "search.accept",
            data={"pattern": session.pattern, "length": length},
            logger_name="modal_keys.search",
        )
        self._refresh()

    def cancel(self) -> None:
        session = self.session
        if self.modes.mode != SEARCH or session is None:
            return
        self.modes.enter_mode(session.previous_mode)
        self.session = None
        self.last = session
        editor = self.editor
        if editor is not None:
            editor.selections = session.start_selections
            editor.reveal(editor.selections[0])
            self._clear_decorations(editor)
        telemetry.record_event("search.cancel", logger_name="modal_keys.search")
        self._refresh()

    def next_match(self) -> None:
        self._step(flip=False)

    def previous_match(self) -> None:
        self._step(flip=True)

    def _step(self, *, flip: bool) -> None:
        session = self.current
        editor = self.editor
        if session is None or editor is None or not session.pattern:
            return
        if flip:
            session.params.backwards = not session.params.backwards
        try:
            self.unposition(session, session.forward)
            self.highlight(editor.selections, session)
            self.position(session, session.match_length, session.forward)
            editor.reveal(editor.selections[0])
        finally:
            if flip:
                session.params.backwards = not session.params.backwards
        self._refresh()

    def highlight(
        self,
        selections: Sequence[Selection],
        session: Optional[SearchSession] = None,
    ) -> None:
        """Move every cursor to its next match and paint the visible matches."""

        session = session or self.session
        editor = self.editor
        if session is None or editor is None:
            return
        session.info = None
        if not session.pattern:
            editor.selections = session.start_selections
            self._clear_decorations(editor)
            return

        params = session.params
        with telemetry.span(
            "search::highlight",
            logger_name="modal_keys.search",
            component="search",
            metadata={"length": len(session.pattern), "cursors": len(selections)},
        ):
            document = editor.document
            text = document.text if params.case_sensitive else fold_case(document.text)
            target = (
                session.pattern if params.case_sensitive else fold_case(session.pattern)
            )
            primary: List[tuple[int, int]] = []
            landed: List[Selection] = []
            for selection in selections:
                found = find_from(text, target, selection.active, params.backwards)
                if found < 0:
                    if params.wrap_around:
                        found = (
                            text.rfind(target) if params.backwards else text.find(target)
                        )
                    if found < 0:
                        session.info = NOT_FOUND
                        landed.append(selection)
                        continue
                    session.info = (
                        f"Search hit {_boundary(params.backwards)} "
                        f"continuing at {_boundary(not params.backwards)}"
                    )
                start, end = found, found + len(target)
                primary.append((start, end))
                anchor, active = (end, start) if params.backwards else (start, end)
                if params.select_till_match:
                    anchor = selection.anchor
                landed.append(Selection(anchor, active))

            editor.selections = landed
            editor.reveal(editor.selections[0])

            secondary: List[tuple[int, int]] = []
            for range_start, range_end in editor.visible_ranges:
                chunk = text[range_start:range_end]
                index = chunk.find(target)
                while index >= 0:
                    match = (range_start + index, range_start + index + len(target))
                    if match not in primary and match not in secondary:
                        secondary.append(match)
                    index = chunk.find(target, index + 1)

            session.primary_ranges = primary
            session.secondary_ranges = secondary
            settings = self.context.settings
            editor.set_decorations(
                PRIMARY_DECORATION, primary, settings.search_match_style()
            )
            editor.set_decorations(
                SECONDARY_DECORATION, secondary, settings.search_other_style()
            )
        self.changed = True

    def position(self, session: SearchSession, length: int, forward: bool) -> None:
        editor = self.editor
        if editor is None:
            return
        try:
            shift, at_start = offset_shift(session.params.offset, length, forward)
        except UnknownOffsetPolicy as exc:
            self.context.notify("error", str(exc))
            return
        session.at_start = at_start
        self._shift(session, shift)

    def unposition(self, session: SearchSession, forward: bool) -> None:
        self._shift(
            session, unposition_shift(session.at_start, session.match_length, forward)
        )

    def clear_decorations(self) -> None:
        editor = self.editor
        if editor is not None:
            self._clear_decorations(editor)

    def _shift(self, session: SearchSession, shift: int) -> None:
        editor = self.editor
        if shift == 0 or editor is None:
            return
        editor.selections = shift_selections(
            editor.selections,
            shift,
            keep_anchor=session.params.select_till_match,
            limit=editor.document.length,
        )

    def _clear_decorations(self, editor: EditorSurface) -> None:
        editor.set_decorations(PRIMARY_DECORATION, [])
        editor.set_decorations(SECONDARY_DECORATION, [])

    def _on_search_enter(self, new_mode: str, old_mode: str) -> None:
        del new_mode
        self._previous_mode = old_mode

    def _refresh(self) -> None:
        self.context.bus.emit("presentation.refresh", None)


__all__ = [
    "SearchEngine",
    "find_from",
    "PRIMARY_DECORATION",
    "SECONDARY_DECORATION",
    "NOT_FOUND",
]
