"""Bounded undo/redo history with a change-significance heuristic."""

from __future__ import annotations

from collections import deque
from typing import Deque, Optional

from editor_engine.runtime import telemetry

from .state import EditorState

LOGGER_NAME = "editor_engine.history"


class HistoryManager:
    """Undo/redo stacks of ``EditorState`` plus one pending state.

    Small, quick edits replace the pending state in place so a burst of
    keystrokes becomes one checkpoint; a significant (or forced) change
    pushes the previous pending state onto the undo stack.
    """

    def __init__(
        self,
        *,
        limit: int = 100,
        min_char_delta: int = 3,
        idle_ms: int = 2000,
    ) -> None:
        if limit < 1:
            raise ValueError("history limit must be at least 1")
        self.limit = limit
        self.min_char_delta = min_char_delta
        self.idle_ms = idle_ms
        self._undo: Deque[EditorState] = deque(maxlen=limit)
        self._redo: Deque[EditorState] = deque(maxlen=limit)
        self._pending: Optional[EditorState] = None

    @property
    def pending(self) -> Optional[EditorState]:
        return self._pending

    @property
    def undo_depth(self) -> int:
        return len(self._undo)

    @property
    def redo_depth(self) -> int:
        return len(self._redo)

    def can_undo(self) -> bool:
        return bool(self._undo)

    def can_redo(self) -> bool:
        return bool(self._redo)

    def is_significant(self, candidate: EditorState) -> bool:
        """Whether ``candidate`` should become a new checkpoint."""

        previous = self._pending
        if previous is None:
            return True
        delta = len(candidate.text) - len(previous.text)
        if abs(delta) >= self.min_char_delta:
            return True
        if (candidate.timestamp - previous.timestamp) * 1000.0 > self.idle_ms:
            return True
        if candidate.newline_count != previous.newline_count:
            return True
        if candidate.text != previous.text and _selection_jumped(
            previous, candidate, delta
        ):
            return True
        return False

    def record(self, state: EditorState, force: bool = False) -> bool:
        """Offer ``state`` to the history; returns True if a checkpoint was pushed."""

        if self._pending is None:
            self._pending = state
            return False

        if not force and not self.is_significant(state):
            self._pending = state
            return False

        self._undo.append(self._pending)
        self._redo.clear()
        self._pending = state
        telemetry.record_event(
            "history.checkpoint",
            data={"force": force, "undo": len(self._undo)},
            logger_name=LOGGER_NAME,
        )
        return True

    def undo(self) -> Optional[EditorState]:
        if not self._undo:
            return None
        state = self._undo.pop()
        if self._pending is not None:
            self._redo.append(self._pending)
        self._pending = state
        return state

    def redo(self) -> Optional[EditorState]:
        if not self._redo:
            return None
        state = self._redo.pop()
        if self._pending is not None:
            self._undo.append(self._pending)
        self._pending = state
        return state

    def clear(self) -> None:
        self._undo.clear()
        self._redo.clear()
        self._pending = None


def _selection_jumped(
    previous: EditorState, candidate: EditorState, delta: int
) -> bool:
    """Selection moved somewhere other than where typing would leave the caret."""

    if candidate.selection == previous.selection:
        return False
    caret = previous.selection[1] + delta
    return candidate.selection != (caret, caret)


__all__ = ["HistoryManager", "LOGGER_NAME"]
