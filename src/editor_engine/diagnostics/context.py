"""Coarse whole-buffer facts consulted by the contextual checks."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Mapping

from editor_engine.languages import Language

ENTRY_POINTS: Mapping[Language, re.Pattern[str]] = {
    Language.KOTLIN: re.compile(r"\bfun\s+main\s*\("),
    Language.JAVA: re.compile(r"\bstatic\s+void\s+main\s*\("),
    Language.PYTHON: re.compile(r"__name__\s*==\s*['\"]__main__['\"]"),
    Language.CPP: re.compile(r"\bint\s+main\s*\("),
    Language.C: re.compile(r"\bint\s+main\s*\("),
}

CLASS_DECLARATIONS: Mapping[Language, re.Pattern[str]] = {
    Language.KOTLIN: re.compile(r"\b(class|object|interface)\s+\w+"),
    Language.JAVA: re.compile(r"\b(class|interface|enum)\s+\w+"),
    Language.PYTHON: re.compile(r"^[ \t]*class\s+\w+", re.M),
    Language.CPP: re.compile(r"\b(class|struct)\s+\w+"),
    Language.C: re.compile(r"\bstruct\s+\w+"),
}

FUNCTION_DECLARATIONS: Mapping[Language, re.Pattern[str]] = {
    Language.KOTLIN: re.compile(r"\bfun\s+[\w.]+\s*\("),
    Language.PYTHON: re.compile(r"^[ \t]*(async\s+)?def\s+\w+\s*\(", re.M),
}

NOT_FUNCTIONS = frozenset(
    {"if", "for", "while", "switch", "return", "catch", "else", "do", "new", "sizeof"}
)

OPEN_BRACKETS = frozenset("([{")
CLOSE_BRACKETS = frozenset(")]}")


@dataclass(frozen=True, slots=True)
class BufferContext:
    has_entry_point: bool = False
    has_class: bool = False
    has_function: bool = False
    min_indent: int = 0
    max_depth: int = 0


def indent_width(line: str) -> int:
    """Leading whitespace width with tabs expanded to 4 columns."""

    expanded = line.expandtabs(4)
    return len(expanded) - len(expanded.lstrip(" "))


def _looks_like_c_function(line: str) -> bool:
    """``type name(...)`` at the start of a line, not ending in ``;``."""

    stripped = line.strip()
    head, paren, _ = stripped.partition("(")
    if not paren or "=" in head or stripped.endswith(";"):
        return False
    words = head.replace("*", " ").replace("&", " ").split()
    if len(words) < 2 or words[0] in NOT_FUNCTIONS:
        return False
    return words[-1].isidentifier() and words[-1] not in NOT_FUNCTIONS


def _has_function(text: str, language: Language) -> bool:
    pattern = FUNCTION_DECLARATIONS.get(language)
    if pattern is not None:
        return bool(pattern.search(text))
    return any(_looks_like_c_function(line) for line in text.split("\n"))


def build_context(text: str, language: Language) -> BufferContext:
    min_indent = 0
    for line in text.split("\n"):
        if not line.strip():
            continue
        width = indent_width(line)
        if width and (min_indent == 0 or width < min_indent):
            min_indent = width

    depth = max_depth = 0
    for char in text:
        if char in OPEN_BRACKETS:
            depth += 1
            max_depth = max(max_depth, depth)
        elif char in CLOSE_BRACKETS and depth:
            depth -= 1

    return BufferContext(
        has_entry_point=bool(ENTRY_POINTS[language].search(text)),
        has_class=bool(CLASS_DECLARATIONS[language].search(text)),
        has_function=_has_function(text, language),
        min_indent=min_indent,
        max_depth=max_depth,
    )


__all__ = ["BufferContext", "build_context", "indent_width"]
