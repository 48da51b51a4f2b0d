"""Whole-buffer analyzers for brackets, string literals and block comments."""

from __future__ import annotations

from typing import List, Optional, Tuple

from editor_engine.catalog.models import Severity
from editor_engine.languages import Language
from editor_engine.languages.lexical import (
    QUOTES,
    code_offsets,
    comment_end,
    string_end,
)

from .models import Diagnostic
from .positions import LineIndex
from .suggestions import suggestion_for

BRACKET_PAIRS = {"(": ")", "[": "]", "{": "}"}
CLOSERS = frozenset(BRACKET_PAIRS.values())


def _error(line: int, column: int, message: str, kind: str) -> Diagnostic:
    return Diagnostic(
        line=line,
        column=column,
        message=message,
        severity=Severity.ERROR,
        kind=kind,
        suggestion=suggestion_for(kind),
    )


def analyze_brackets(text: str, language: Language, index: LineIndex) -> List[Diagnostic]:
    """Match ``()[]{}`` outside comments and literals with a stack."""

    diagnostics: List[Diagnostic] = []
    stack: List[Tuple[str, int]] = []
    for offset, char in code_offsets(text, language):
        if char in BRACKET_PAIRS:
            stack.append((char, offset))
        elif char in CLOSERS:
            line, column = index.locate(offset)
            if not stack:
                diagnostics.append(
                    _error(
                        line,
                        column,
                        f"Unmatched closing bracket '{char}'",
                        "unmatched_bracket",
                    )
                )
                continue
            opener, _ = stack.pop()
            expected = BRACKET_PAIRS[opener]
            if expected != char:
                diagnostics.append(
                    _error(
                        line,
                        column,
                        f"Mismatched bracket, expected '{expected}'",
                        "mismatched_bracket",
                    )
                )

    for opener, offset in stack:
        line, column = index.locate(offset)
        diagnostics.append(
            _error(line, column, f"Unclosed bracket '{opener}'", "unclosed_bracket")
        )
    return diagnostics


def analyze_strings(text: str, language: Language, index: LineIndex) -> List[Diagnostic]:
    """Report a literal that is still open when the buffer ends.

    Literals may continue across lines; only the one left open at the end of
    the buffer is reported, anchored at its opening quote.
    """

    pos = 0
    length = len(text)
    while pos < length:
        end = comment_end(text, pos, language)
        if end is not None:
            pos = end
            continue
        if text[pos] in QUOTES:
            end, closed = string_end(text, pos)
            if not closed:
                line, column = index.locate(pos)
                return [
                    _error(line, column, "Unclosed string literal", "unclosed_string")
                ]
            pos = end
            continue
        pos += 1
    return []


def analyze_block_comments(text: str, language: Language) -> List[Diagnostic]:
    """Line-based tracking of ``/*`` without a later ``*/``."""

    if not language.has_block_comments:
        return []

    opened: Optional[Tuple[int, int]] = None
    for number, line in enumerate(text.split("\n"), start=1):
        if opened is None:
            start = line.find("/*")
            if start == -1:
                continue
            line_comment = line.find(language.line_comment)
            if line_comment != -1 and line_comment < start:
                continue
            if line.find("*/", start + 2) == -1:
                opened = (number, start)
        elif "*/" in line:
            opened = None

    if opened is None:
        return []
    return [
        _error(
            opened[0],
            opened[1],
            "Unclosed multi-line comment",
            "unclosed_comment",
        )
    ]


__all__ = [
    "BRACKET_PAIRS",
    "analyze_block_comments",
    "analyze_brackets",
    "analyze_strings",
]
