"""Language-specific line checks that need more than a single regex."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Iterator, Mapping, Tuple

from editor_engine.catalog.models import Severity
from editor_engine.languages import Language

from .context import BufferContext
from .models import Diagnostic
from .suggestions import suggestion_for


@dataclass(frozen=True, slots=True)
class LineView:
    """One non-blank, non-comment line handed to the per-line checks."""

    number: int
    text: str
    stripped: str
    lead: int
    indent: int
    next_stripped: str = ""


LineCheck = Callable[[LineView, BufferContext], Iterator[Diagnostic]]

CONTROL_KEYWORDS = frozenset(
    {
        "if", "else", "for", "while", "do", "switch", "case", "default",
        "try", "catch", "finally", "class", "struct", "namespace", "enum",
        "union", "template", "interface", "public", "private", "protected",
        "extern", "typedef",
    }
)
TERMINATORS = (";", "{", "}", ":")
CONTINUATIONS = (",", "(", "\\")

_KOTLIN_FUN = re.compile(r"\bfun\b")
_KOTLIN_BINDING = re.compile(
    r"^(?:(?:private|public|protected|internal|override|const)\s+)*(val|var)\s+\w+"
)
_PYTHON_DEF = re.compile(r"^(?:async\s+)?def\b")
_PYTHON_DECLARATION = re.compile(r"^(?:async\s+def|def|class)\b")
_JAVA_CLASS = re.compile(r"\bclass\s+\w+")
_FIRST_WORD = re.compile(r"[A-Za-z_]\w*")


def _diagnostic(
    line: LineView, column: int, message: str, severity: Severity, kind: str
) -> Diagnostic:
    return Diagnostic(
        line=line.number,
        column=column,
        message=message,
        severity=severity,
        kind=kind,
        suggestion=suggestion_for(kind),
    )


def check_function_parenthesis(
    pattern: re.Pattern[str],
) -> LineCheck:
    def check(line: LineView, context: BufferContext) -> Iterator[Diagnostic]:
        del context
        match = pattern.search(line.stripped)
        if match and "(" not in line.text:
            yield _diagnostic(
                line,
                line.lead + match.start(),
                "Function declaration is missing '('",
                Severity.ERROR,
                "missing_parenthesis",
            )

    return check


def check_kotlin_binding(line: LineView, context: BufferContext) -> Iterator[Diagnostic]:
    del context
    match = _KOTLIN_BINDING.match(line.stripped)
    if match is None or "=" in line.text:
        return
    if "lateinit" in line.stripped or "abstract" in line.stripped:
        return
    yield _diagnostic(
        line,
        line.lead + match.start(1),
        f"'{match.group(1)}' declared without an initializer",
        Severity.WARNING,
        "missing_initializer",
    )


def check_python_indentation(
    line: LineView, context: BufferContext
) -> Iterator[Diagnostic]:
    del context
    if line.indent % 4 and _PYTHON_DECLARATION.match(line.stripped):
        yield _diagnostic(
            line,
            0,
            f"Declaration indented by {line.indent} columns, not a multiple of 4",
            Severity.WARNING,
            "indentation",
        )


def check_terminator(line: LineView, context: BufferContext) -> Iterator[Diagnostic]:
    del context
    stripped = line.stripped
    if stripped.endswith(TERMINATORS) or stripped.endswith(CONTINUATIONS):
        return
    if stripped.startswith(("@", "*", "#")):
        return
    first = _FIRST_WORD.match(stripped)
    if first and first.group(0) in CONTROL_KEYWORDS:
        return
    # Allman style: the opening brace sits on the following line.
    if line.next_stripped.startswith("{"):
        return
    yield _diagnostic(
        line,
        line.lead + len(stripped),
        "Missing terminator ';' at end of statement",
        Severity.ERROR,
        "missing_terminator",
    )


def check_java_entry_point(
    line: LineView, context: BufferContext
) -> Iterator[Diagnostic]:
    if context.has_entry_point:
        return
    match = _JAVA_CLASS.search(line.stripped)
    if match:
        yield _diagnostic(
            line,
            line.lead + match.start(),
            "Class has no 'public static void main' entry point",
            Severity.INFO,
            "missing_entry_point",
        )


CONTEXTUAL_CHECKS: Mapping[Language, Tuple[LineCheck, ...]] = {
    Language.KOTLIN: (
        check_function_parenthesis(_KOTLIN_FUN),
        check_kotlin_binding,
    ),
    Language.JAVA: (check_terminator, check_java_entry_point),
    Language.PYTHON: (
        check_function_parenthesis(_PYTHON_DEF),
        check_python_indentation,
    ),
    Language.CPP: (check_terminator,),
    Language.C: (check_terminator,),
}


def run_contextual_checks(
    language: Language, line: LineView, context: BufferContext
) -> Iterator[Diagnostic]:
    for check in CONTEXTUAL_CHECKS.get(language, ()):
        yield from check(line, context)


__all__ = [
    "CONTEXTUAL_CHECKS",
    "LineCheck",
    "LineView",
    "run_contextual_checks",
]
