"""Executable Textual app that hosts the editing core."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional, Sequence, Tuple

try:  # pragma: no cover - imported only when demo is run
    from rich.text import Text
    from textual.app import App, ComposeResult
    from textual.binding import Binding
    from textual.containers import Horizontal, Vertical
    from textual.widgets import Footer, Header, Static, TextArea
    from textual.widgets.text_area import Selection as AreaSelection
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use editor_engine.adapters.textual.app"
    ) from exc

from editor_engine.catalog import RuleCatalog
from editor_engine.config import EngineSettings
from editor_engine.diagnostics import Diagnostic, Severity
from editor_engine.history import EditorState
from editor_engine.languages import Category, Language
from editor_engine.runtime import telemetry
from editor_engine.session import EditorSession, SessionView

from .controller import TextualEditorAdapter, TextualUIHooks

CATEGORY_STYLES = {
    Category.KEYWORD: "bold magenta",
    Category.STRING: "green",
    Category.COMMENT: "italic bright_black",
    Category.NUMBER: "cyan",
    Category.FUNCTION: "yellow",
    Category.TYPE: "bold blue",
    Category.OPERATOR: "red",
    Category.NORMAL: "",
}
SEVERITY_BACKGROUNDS = {
    Severity.ERROR: "on #4b1c1c",
    Severity.WARNING: "on #4b3f1c",
    Severity.INFO: "on #1c324b",
}

Location = Tuple[int, int]


def offset_for_location(text: str, location: Location) -> int:
    row, col = location
    lines = text.split("\n")
    row = max(0, min(row, len(lines) - 1))
    return sum(len(line) + 1 for line in lines[:row]) + min(col, len(lines[row]))


def location_for_offset(text: str, offset: int) -> Location:
    before = text[: max(0, offset)]
    row = before.count("\n")
    return row, len(before) - (before.rfind("\n") + 1)


def render_view(view: SessionView) -> Text:
    styled = Text(view.text)
    for overlay in view.overlays:
        if overlay.end > overlay.start:
            styled.stylize(SEVERITY_BACKGROUNDS[overlay.severity], overlay.start, overlay.end)
    for span in view.spans:
        style = CATEGORY_STYLES[span.category]
        if style:
            styled.stylize(style, span.start, span.end)
    return styled


def render_diagnostics(diagnostics: Sequence[Diagnostic]) -> Text:
    if not diagnostics:
        return Text("No problems", style="green")
    lines = Text()
    for item in diagnostics:
        lines.append(f"{item.line}:{item.column} ", style="bold")
        lines.append(f"{item.severity.value:<7} ", style=SEVERITY_BACKGROUNDS[item.severity])
        lines.append(item.message)
        if item.suggestion:
            lines.append(f"  ({item.suggestion})", style="italic")
        lines.append("\n")
    return lines


class EditorEngineApp(App[None]):
    """Editor with a live preview of spans and diagnostics."""

    CSS = """
	#panes {
		height: 1fr;
	}

	#editor, #preview {
		width: 1fr;
		border: round $accent;
	}

	#problems {
		height: 8;
		border: round $warning;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        Binding("ctrl+z", "undo_edit", "Undo", priority=True),
        Binding("ctrl+y", "redo_edit", "Redo", priority=True),
        Binding("ctrl+s", "save", "Save", priority=True),
        Binding("ctrl+n", "new_file", "New", priority=True),
        Binding("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        *,
        path: Optional[Path] = None,
        language: Optional[Language] = None,
        settings: Optional[EngineSettings] = None,
    ) -> None:
        super().__init__()
        self._path = path
        self._language = language
        self._settings = settings or EngineSettings.from_env()
        self.session: EditorSession | None = None
        self.adapter: TextualEditorAdapter | None = None
        self._editor: TextArea | None = None
        self._preview: Static | None = None
        self._problems: Static | None = None
        self._status: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Horizontal(id="panes"):
            self._editor = TextArea(id="editor")
            yield self._editor
            self._preview = Static("", id="preview")
            yield self._preview
        with Vertical():
            self._problems = Static("", id="problems")
            yield self._problems
            self._status = Static("", id="status-line")
            yield self._status
        yield Footer()

    def on_mount(self) -> None:
        catalog = RuleCatalog(self._settings.catalog_path).load()
        self.session = EditorSession(
            catalog, language=self._language, settings=self._settings
        )
        if self._path is not None and self._path.exists():
            self.session.open(self._path.name, self._path.read_text(encoding="utf-8"))
            if self._language is not None:
                self.session.set_language(self._language)
        hooks = TextualUIHooks(
            render=self._render,
            apply_state=self._apply_state,
            update_status=self._update_status,
            show_diagnostics=self._show_diagnostics,
        )
        self.adapter = TextualEditorAdapter(self.session, hooks)
        if self._editor is not None:
            self._editor.load_text(self.session.text)
        self._update_status(f"{self.session.name} [{self.session.language.value}]")
        self.set_interval(0.1, self._process_timeouts)

    def _process_timeouts(self) -> None:
        if self.adapter:
            self.adapter.process_timeouts()

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        if not self.adapter:
            return
        area = event.text_area
        text = area.text
        selection = (
            offset_for_location(text, area.selection.start),
            offset_for_location(text, area.selection.end),
        )
        self.adapter.handle_text_change(text, selection)

    def action_undo_edit(self) -> None:
        if self.adapter:
            self.adapter.undo()

    def action_redo_edit(self) -> None:
        if self.adapter:
            self.adapter.redo()

    def action_new_file(self) -> None:
        if self.adapter:
            self.adapter.new_file()

    def action_save(self) -> None:
        if not self.adapter or not self.session:
            return
        self.adapter.checkpoint("save")
        if self._path is not None:
            self._path.write_text(self.session.text, encoding="utf-8")
            self._update_status(f"saved {self._path}")

    def _render(self, view: SessionView) -> None:
        if self._preview:
            self._preview.update(render_view(view))

    def _show_diagnostics(self, diagnostics: Sequence[Diagnostic]) -> None:
        if self._problems:
            self._problems.update(render_diagnostics(diagnostics))

    def _apply_state(self, state: EditorState) -> None:
        if not self._editor:
            return
        self._editor.load_text(state.text)
        start, end = state.selection
        self._editor.selection = AreaSelection(
            location_for_offset(state.text, start),
            location_for_offset(state.text, end),
        )

    def _update_status(self, status: str) -> None:
        if self._status:
            self._status.update(status)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the editor-engine Textual demo.")
    parser.add_argument("path", nargs="?", help="File to open")
    parser.add_argument(
        "--language",
        choices=[language.value for language in Language],
        help="Override language detection",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    telemetry.configure(preset="quiet")
    app = EditorEngineApp(
        path=Path(args.path) if args.path else None,
        language=Language.parse(args.language) if args.language else None,
    )
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
