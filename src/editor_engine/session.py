"""Per-document façade combining highlighter, diagnostics and history."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence

from editor_engine.catalog import RuleCatalog
from editor_engine.config import EngineSettings
from editor_engine.diagnostics import Diagnostic, DiagnosticOverlay
from editor_engine.highlight import Highlighter
from editor_engine.history import CheckpointScheduler, EditorState, HistoryManager
from editor_engine.history.state import Selection
from editor_engine.languages import Language, Span, detect_language
from editor_engine.runtime import telemetry

LOGGER_NAME = "editor_engine.session"


@dataclass(slots=True)
class SessionView:
    """Host-friendly snapshot of everything a renderer needs."""

    text: str
    selection: Selection
    language: Language
    spans: Sequence[Span] = ()
    diagnostics: Sequence[Diagnostic] = ()
    overlays: Sequence[DiagnosticOverlay] = ()
    attributes: dict[str, str] = field(default_factory=dict)


class EditorSession:
    """One open document: current text, language, styling and history."""

    def __init__(
        self,
        catalog: RuleCatalog,
        *,
        name: str = "untitled",
        language: Optional[Language] = None,
        settings: Optional[EngineSettings] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.settings = settings or EngineSettings.from_env()
        self.name = name
        self.catalog = catalog
        self.language = language or Language.parse(self.settings.default_language)
        self.highlighter = Highlighter(catalog)
        self.history = HistoryManager(
            limit=self.settings.history_limit,
            min_char_delta=self.settings.min_char_delta,
            idle_ms=self.settings.idle_ms,
        )
        self.scheduler = CheckpointScheduler(self.settings.debounce_ms, clock=clock)
        self._clock = clock
        self._state = EditorState("", (0, 0), clock())
        self._spans: list[Span] = []
        self.history.record(self._state)
        self._refresh()

    @property
    def state(self) -> EditorState:
        return self._state

    @property
    def text(self) -> str:
        return self._state.text

    @property
    def spans(self) -> Sequence[Span]:
        return tuple(self._spans)

    @property
    def diagnostics(self) -> Sequence[Diagnostic]:
        return self.highlighter.last_diagnostics

    def snapshot(self) -> SessionView:
        return SessionView(
            text=self._state.text,
            selection=self._state.selection,
            language=self.language,
            spans=tuple(self._spans),
            diagnostics=self.highlighter.last_diagnostics,
            overlays=self.highlighter.last_overlays,
            attributes={"name": self.name},
        )

    def edit(self, text: str, selection: Optional[Selection] = None) -> SessionView:
        """Apply a host edit: re-highlight now, offer it to history after the quiet period."""

        caret = len(text)
        state = EditorState(text, selection or (caret, caret), self._clock())
        with telemetry.span(
            "session::edit",
            logger_name=LOGGER_NAME,
            component="session",
            metadata={"session": self.name, "length": len(text)},
        ):
            self._state = state
            self._refresh()
            self.scheduler.schedule(state)
        return self.snapshot()

    def select(self, start: int, end: Optional[int] = None) -> None:
        self._state = self._state.with_selection(start, end)

    def process_timeouts(self, now: Optional[float] = None) -> bool:
        """Record the debounced state if its quiet period elapsed."""

        state = self.scheduler.poll(now)
        if state is None:
            return False
        return self._offer(state)

    def checkpoint(self) -> bool:
        """Force a checkpoint (before save, compile hand-off or bulk replace)."""

        self.scheduler.cancel()
        pending = self.history.pending
        if pending is not None and pending.same_content(self._state):
            pushed = False
        else:
            pushed = self.history.record(self._state, force=True)
        telemetry.record_event(
            "session.checkpoint",
            data={"session": self.name, "pushed": pushed},
            logger_name=LOGGER_NAME,
        )
        return pushed

    def undo(self) -> Optional[EditorState]:
        self._flush_debounce()
        return self._apply(self.history.undo(), "undo")

    def redo(self) -> Optional[EditorState]:
        self._flush_debounce()
        return self._apply(self.history.redo(), "redo")

    def can_undo(self) -> bool:
        if self.history.can_undo():
            return True
        armed = self.scheduler.armed_state
        return armed is not None and self._would_push(armed)

    def can_redo(self) -> bool:
        if not self.history.can_redo():
            return False
        armed = self.scheduler.armed_state
        return armed is None or not self._is_fresh_edit(armed)

    def new_file(self, text: str = "") -> SessionView:
        """Reset history and start over with ``text``."""

        self.scheduler.cancel()
        self.history.clear()
        self._state = EditorState(text, (0, 0), self._clock())
        self.history.record(self._state)
        self._refresh()
        return self.snapshot()

    def open(self, filename: str, text: str) -> SessionView:
        self.name = filename
        self.language = detect_language(filename, text)
        return self.new_file(text)

    def set_language(self, language: Language) -> SessionView:
        self.language = language
        self._refresh()
        return self.snapshot()

    def replace_all(self, find: str, replacement: str) -> int:
        """Replace every occurrence of ``find``; returns how many were replaced."""

        if not find:
            return 0
        occurrences = self._state.text.count(find)
        if not occurrences:
            return 0
        self.checkpoint()
        text = self._state.text.replace(find, replacement)
        caret = min(self._state.selection[1], len(text))
        self._state = EditorState(text, (caret, caret), self._clock())
        self.history.record(self._state, force=True)
        self._refresh()
        telemetry.record_event(
            "session.replace_all",
            data={"session": self.name, "occurrences": occurrences},
            logger_name=LOGGER_NAME,
        )
        return occurrences

    def _flush_debounce(self) -> None:
        state = self.scheduler.flush()
        if state is not None:
            self._offer(state)

    def _is_fresh_edit(self, state: EditorState) -> bool:
        """New text typed while redo entries exist; it must invalidate them."""

        pending = self.history.pending
        return (
            self.history.can_redo()
            and pending is not None
            and pending.text != state.text
        )

    def _would_push(self, state: EditorState) -> bool:
        if self.history.pending is None:
            return False
        return self._is_fresh_edit(state) or self.history.is_significant(state)

    def _offer(self, state: EditorState) -> bool:
        return self.history.record(state, force=self._is_fresh_edit(state))

    def _apply(self, state: Optional[EditorState], action: str) -> Optional[EditorState]:
        if state is None:
            return None
        self._state = state
        self._refresh()
        telemetry.record_event(
            f"session.{action}",
            data={"session": self.name, "undo": self.history.undo_depth},
            logger_name=LOGGER_NAME,
        )
        return state

    def _refresh(self) -> None:
        self._spans = self.highlighter.highlight(self._state.text, self.language)


__all__ = ["EditorSession", "SessionView"]
