from __future__ import annotations

from typing import Any, Dict, List

from editor_engine.adapters.textual import TextualEditorAdapter, TextualUIHooks
from editor_engine.catalog import RuleCatalog
from editor_engine.config import EngineSettings
from editor_engine.languages import Language
from editor_engine.session import EditorSession


def make_session() -> EditorSession:
    return EditorSession(RuleCatalog(), settings=EngineSettings(), clock=lambda: 0.0)


def make_adapter() -> tuple[TextualEditorAdapter, Dict[str, List[Any]]]:
    captured: Dict[str, List[Any]] = {
        "renders": [],
        "states": [],
        "statuses": [],
        "diagnostics": [],
        "logs": [],
    }
    hooks = TextualUIHooks(
        render=lambda view: captured["renders"].append(view.text),
        apply_state=lambda state: captured["states"].append(state.text),
        update_status=lambda status: captured["statuses"].append(status),
        show_diagnostics=lambda items: captured["diagnostics"].append(list(items)),
        log=lambda line: captured["logs"].append(line),
    )
    return TextualEditorAdapter(make_session(), hooks), captured


def test_adapter_renders_on_start_and_edit() -> None:
    adapter, captured = make_adapter()
    assert captured["renders"] == [""]

    adapter.handle_text_change("fun f() {", (9, 9))

    assert captured["renders"][-1] == "fun f() {"
    kinds = [item.kind for item in captured["diagnostics"][-1]]
    assert kinds == ["unclosed_bracket"]


def test_unchanged_text_only_moves_selection() -> None:
    adapter, captured = make_adapter()
    adapter.handle_text_change("hello", (5, 5))
    renders = len(captured["renders"])

    adapter.handle_text_change("hello", (1, 3))

    assert len(captured["renders"]) == renders
    assert adapter.session.state.selection == (1, 3)


def test_undo_applies_state_and_reports_status() -> None:
    adapter, captured = make_adapter()

    assert adapter.undo() is None
    assert captured["statuses"][-1] == "nothing to undo"

    adapter.handle_text_change("hello", (5, 5))
    restored = adapter.undo()

    assert restored is not None
    assert captured["states"][-1] == ""
    assert captured["statuses"][-1] == "undo"
    assert adapter.redo() is not None
    assert captured["states"][-1] == "hello"


def test_checkpoint_and_replace_all_status() -> None:
    adapter, captured = make_adapter()
    adapter.handle_text_change("foo foo", (7, 7))

    assert adapter.checkpoint("save") is True
    assert captured["statuses"][-1] == "save: saved"

    assert adapter.replace_all("foo", "bar") == 2
    assert captured["states"][-1] == "bar bar"
    assert captured["statuses"][-1] == "replaced 2 occurrence(s)"


def test_language_switch_and_new_file() -> None:
    adapter, captured = make_adapter()
    adapter.handle_text_change("x = compute()")

    adapter.set_language(Language.JAVA)
    assert captured["statuses"][-1] == "language: java"
    assert [item.kind for item in captured["diagnostics"][-1]] == ["missing_terminator"]

    adapter.new_file()
    assert captured["states"][-1] == ""
    assert captured["renders"][-1] == ""
    assert not adapter.session.can_undo()


def test_adapter_emits_log_lines() -> None:
    adapter, captured = make_adapter()

    adapter.handle_text_change("val x = 1")

    assert any(line.startswith("edit ->") for line in captured["logs"])
    assert any(line.startswith("render <-") for line in captured["logs"])
    assert "language='kotlin'" in captured["logs"][-1]
