"""Minimal Textual adapter that wires an EditorSession into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional, Sequence

from editor_engine.diagnostics import Diagnostic
from editor_engine.history import EditorState
from editor_engine.history.state import Selection
from editor_engine.languages import Language
from editor_engine.session import EditorSession, SessionView


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    render: Callable[[SessionView], None]
    apply_state: Callable[[EditorState], None] = _noop
    update_status: Callable[[str], None] = _noop
    show_diagnostics: Callable[[Sequence[Diagnostic]], None] = _noop
    log: Callable[[str], None] = _noop


class TextualEditorAdapter:
    """Bridges host text-area events to the session and back."""

    def __init__(self, session: EditorSession, hooks: TextualUIHooks) -> None:
        self.session = session
        self.hooks = hooks
        self._render(self.session.snapshot())

    def handle_text_change(
        self, text: str, selection: Optional[Selection] = None
    ) -> SessionView:
        """Forward an edit coming from the text widget."""

        if text == self.session.text:
            if selection is not None:
                self.session.select(*selection)
            return self.session.snapshot()
        self._log_state("edit ->", length=len(text), selection=selection)
        view = self.session.edit(text, selection)
        self._render(view)
        return view

    def undo(self) -> Optional[EditorState]:
        state = self.session.undo()
        self._after_history("undo", state)
        return state

    def redo(self) -> Optional[EditorState]:
        state = self.session.redo()
        self._after_history("redo", state)
        return state

    def checkpoint(self, reason: str = "checkpoint") -> bool:
        pushed = self.session.checkpoint()
        self.hooks.update_status(f"{reason}: {'saved' if pushed else 'unchanged'}")
        return pushed

    def new_file(self) -> SessionView:
        view = self.session.new_file()
        self.hooks.apply_state(self.session.state)
        self.hooks.update_status("new file")
        self._render(view)
        return view

    def set_language(self, language: Language) -> SessionView:
        view = self.session.set_language(language)
        self.hooks.update_status(f"language: {language.value}")
        self._render(view)
        return view

    def replace_all(self, find: str, replacement: str) -> int:
        count = self.session.replace_all(find, replacement)
        if count:
            self.hooks.apply_state(self.session.state)
            self._render(self.session.snapshot())
        self.hooks.update_status(f"replaced {count} occurrence(s)")
        return count

    def process_timeouts(self) -> bool:
        """Forward the debounce timer; True when a checkpoint was recorded."""

        recorded = self.session.process_timeouts()
        if recorded:
            self._log_state("checkpoint <-", undo=self.session.history.undo_depth)
        return recorded

    def _after_history(self, action: str, state: Optional[EditorState]) -> None:
        if state is None:
            self.hooks.update_status(f"nothing to {action}")
            return
        self.hooks.apply_state(state)
        self.hooks.update_status(action)
        self._render(self.session.snapshot())

    def _render(self, view: SessionView) -> None:
        self.hooks.render(view)
        self.hooks.show_diagnostics(view.diagnostics)
        self._log_state("render <-", spans=len(view.spans), diagnostics=len(view.diagnostics))

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        history = self.session.history
        return {
            "session": self.session.name,
            "language": self.session.language.value,
            "undo": history.undo_depth,
            "redo": history.redo_depth,
            "debounce_armed": self.session.scheduler.armed,
        }


__all__ = ["TextualEditorAdapter", "TextualUIHooks"]
