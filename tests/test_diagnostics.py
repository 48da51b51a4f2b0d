from __future__ import annotations

from typing import List, Tuple

import pytest

import editor_engine.diagnostics.engine as engine_module
from editor_engine.catalog import RuleCatalog
from editor_engine.diagnostics import (
    SUGGESTIONS,
    Diagnostic,
    DiagnosticEngine,
    LineIndex,
    Severity,
    build_context,
    dedupe_and_sort,
)
from editor_engine.languages import Language


def make_engine() -> DiagnosticEngine:
    return DiagnosticEngine(RuleCatalog())


def summary(diagnostics: List[Diagnostic]) -> List[Tuple[int, int, str]]:
    return [(item.line, item.column, item.kind) for item in diagnostics]


def test_mismatched_brackets_report_closer_positions() -> None:
    diagnostics = make_engine().check("foo(bar[baz)]", Language.KOTLIN)

    assert summary(diagnostics) == [
        (1, 11, "mismatched_bracket"),
        (1, 12, "mismatched_bracket"),
    ]
    assert diagnostics[0].message == "Mismatched bracket, expected ']'"
    assert all(item.kind != "unclosed_bracket" for item in diagnostics)


def test_unclosed_brace_anchored_at_opening() -> None:
    (diagnostic,) = make_engine().check("fun f() {", Language.KOTLIN)

    assert (diagnostic.line, diagnostic.column) == (1, 8)
    assert diagnostic.message == "Unclosed bracket '{'"
    assert diagnostic.severity is Severity.ERROR


def test_unmatched_closer() -> None:
    diagnostics = make_engine().check("x = 1)\n", Language.PYTHON)

    assert summary(diagnostics) == [(1, 5, "unmatched_bracket")]


def test_brackets_inside_comments_and_strings_are_ignored() -> None:
    engine = make_engine()

    assert engine.check('// (\nval s = "(["', Language.KOTLIN) == []
    assert engine.check("x = ')'  # ]", Language.PYTHON) == []


def test_unclosed_string_anchored_at_quote() -> None:
    engine = make_engine()

    (diagnostic,) = engine.check('x = "abc', Language.PYTHON)
    assert (diagnostic.line, diagnostic.column, diagnostic.kind) == (
        1,
        4,
        "unclosed_string",
    )
    assert engine.check('x = "abc"', Language.PYTHON) == []


def test_unclosed_block_comment() -> None:
    engine = make_engine()
    text = "#include <stdio.h>\n/* open\nint x = 1"

    assert summary(engine.check(text, Language.C)) == [(2, 0, "unclosed_comment")]
    assert engine.check("/* ok */\nval x = 1", Language.KOTLIN) == []


@pytest.mark.parametrize("language", list(Language))
def test_empty_buffer_has_no_diagnostics(language: Language) -> None:
    assert make_engine().check("", language) == []


def test_missing_include_reported_once() -> None:
    engine = make_engine()
    body = "int main() {\n    return 0;\n}"

    diagnostics = engine.check(body, Language.C)
    assert summary(diagnostics) == [(1, 0, "missing_include")]
    assert diagnostics[0].message == "Missing #include <stdio.h>"
    assert engine.check("#include <stdio.h>\n" + body, Language.C) == []


def test_cpp_accepts_iostream() -> None:
    text = "#include <iostream>\nint main() {\n    std::cout << 1;\n    return 0;\n}"

    assert make_engine().check(text, Language.CPP) == []


def test_missing_terminator_column_at_end_of_content() -> None:
    text = (
        "public class Main {\n"
        "    public static void main(String[] args) {\n"
        "        int x = 1\n"
        "    }\n"
        "}"
    )

    diagnostics = make_engine().check(text, Language.JAVA)

    assert summary(diagnostics) == [(3, 17, "missing_terminator")]
    assert diagnostics[0].suggestion == SUGGESTIONS["missing_terminator"]


def test_terminator_skips_control_lines_and_allman_braces() -> None:
    text = (
        "#include <stdio.h>\n"
        "int main(void)\n"
        "{\n"
        "    if (1)\n"
        "        puts(\"x\");\n"
        "    return 0;\n"
        "}"
    )

    assert make_engine().check(text, Language.C) == []


def test_java_class_without_entry_point_is_info() -> None:
    (diagnostic,) = make_engine().check("class Foo {\n}", Language.JAVA)

    assert diagnostic.kind == "missing_entry_point"
    assert diagnostic.severity is Severity.INFO


def test_kotlin_binding_without_initializer_warns() -> None:
    engine = make_engine()

    (diagnostic,) = engine.check("    var count", Language.KOTLIN)
    assert (diagnostic.column, diagnostic.kind) == (4, "missing_initializer")
    assert diagnostic.severity is Severity.WARNING
    assert engine.check("lateinit var name: String", Language.KOTLIN) == []


def test_kotlin_function_without_parenthesis() -> None:
    diagnostics = make_engine().check("fun main {", Language.KOTLIN)

    assert {item.kind for item in diagnostics} == {
        "function_declaration",
        "missing_parenthesis",
        "unclosed_bracket",
    }
    assert all(item.severity is Severity.ERROR for item in diagnostics)


def test_python_declaration_indentation() -> None:
    text = "class A:\n  def f(self):\n    pass"

    diagnostics = make_engine().check(text, Language.PYTHON)

    assert summary(diagnostics) == [(2, 0, "indentation")]
    assert diagnostics[0].severity is Severity.WARNING


def test_catalog_rule_reports_match_column_and_suggestion() -> None:
    (diagnostic,) = make_engine().check('print "hi"', Language.PYTHON)

    assert (diagnostic.column, diagnostic.kind) == (0, "print_statement")
    assert diagnostic.suggestion == SUGGESTIONS["print_statement"]


def test_catalog_info_rule_surfaces_as_warning() -> None:
    (diagnostic,) = make_engine().check("val x = 1;", Language.KOTLIN)

    assert (diagnostic.column, diagnostic.kind) == (9, "trailing_semicolon")
    assert diagnostic.severity is Severity.WARNING


def test_dedupe_keeps_first_and_orders_by_line_then_severity() -> None:
    info = Diagnostic(2, 0, "info", Severity.INFO, "a")
    error = Diagnostic(2, 5, "error", Severity.ERROR, "b")
    warning = Diagnostic(1, 3, "warning", Severity.WARNING, "c")
    duplicate = Diagnostic(2, 5, "again", Severity.ERROR, "b")

    result = dedupe_and_sort([info, error, warning, duplicate])

    assert result == [warning, error, info]


def test_failing_stage_is_contained(monkeypatch: pytest.MonkeyPatch) -> None:
    def explode(*_args: object) -> List[Diagnostic]:
        raise RuntimeError("boom")

    monkeypatch.setattr(engine_module, "analyze_brackets", explode)

    diagnostics = make_engine().check('x = "abc', Language.PYTHON)

    assert summary(diagnostics) == [(1, 4, "unclosed_string")]


def test_positions_stay_inside_buffer() -> None:
    engine = make_engine()
    samples = [
        ("fun f() {\n  val x\n  foo(]\n", Language.KOTLIN),
        ("def f:\n  print 'x\n", Language.PYTHON),
        ("int main() {\n  gets(buf)\n", Language.C),
    ]
    for text, language in samples:
        index = LineIndex(text)
        lines = text.split("\n")
        for item in engine.check(text, language):
            assert 1 <= item.line <= index.line_count
            assert 0 <= item.column <= len(lines[item.line - 1])


def test_large_buffer_completes() -> None:
    text = "val x = 1\n" * 5000

    assert make_engine().check(text, Language.KOTLIN) == []


def test_overlays_cover_diagnostic_lines() -> None:
    engine = make_engine()
    text = "val a = 1\nfoo("

    overlays = engine.overlays_for(text, engine.check(text, Language.KOTLIN))

    assert [(item.start, item.end) for item in overlays] == [(10, 14)]


def test_line_index_round_trip() -> None:
    index = LineIndex("ab\ncd\n")

    assert index.line_count == 3
    assert index.locate(0) == (1, 0)
    assert index.locate(4) == (2, 1)
    assert index.locate(6) == (3, 0)
    assert index.line_range(2) == (3, 5)


def test_buffer_context() -> None:
    java = build_context(
        "class A {\n  public static void main(String[] a) {}\n}", Language.JAVA
    )
    assert java.has_entry_point and java.has_class and java.has_function
    assert java.max_depth == 3

    python = build_context("x = 1\n    y = 2", Language.PYTHON)
    assert not python.has_entry_point
    assert python.min_indent == 4


def test_assignment_in_condition() -> None:
    engine = make_engine()
    template = "#include <stdio.h>\nint main() {{\n    if ({cond}) {{\n    }}\n    return 0;\n}}"

    flagged = engine.check(template.format(cond="x = 1"), Language.C)
    assert summary(flagged) == [(3, 4, "assignment_in_condition")]
    assert engine.check(template.format(cond="x == 1"), Language.C) == []


def test_many_conditions_on_one_line_stay_linear() -> None:
    text = "#include <stdio.h>\n" + "if(" * 4000

    diagnostics = make_engine().check(text, Language.C)

    assert all(item.kind != "assignment_in_condition" for item in diagnostics)
    assert {item.kind for item in diagnostics} == {"unclosed_bracket"}


def test_duplicated_rule_reports_once() -> None:
    entry = {
        "type": "print_statement",
        "message": "print is a function",
        "severity": "error",
        "pattern": {"regex": r"^\s*print\s+[^\s(=]"},
    }
    catalog = RuleCatalog(document={"rules": {"python": [entry, dict(entry)]}})
    assert len(catalog.get_rules(Language.PYTHON)) == 2

    diagnostics = DiagnosticEngine(catalog).check('print "x"', Language.PYTHON)

    assert summary(diagnostics) == [(1, 0, "print_statement")]
