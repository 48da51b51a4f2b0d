"""Single-pass tokenizer turning a buffer into styled spans."""

from __future__ import annotations

from typing import List, Optional, Sequence

from editor_engine.catalog import RuleCatalog
from editor_engine.diagnostics import Diagnostic, DiagnosticEngine, DiagnosticOverlay
from editor_engine.languages import Category, Language, Span
from editor_engine.languages.lexical import QUOTES, comment_end, string_end

OPERATORS = frozenset("+-*/=<>!&|^%~")
NUMBER_TAIL = frozenset(".fL")


def _is_identifier_start(char: str) -> bool:
    return char.isalpha() or char == "_"


def _is_identifier_part(char: str) -> bool:
    return char.isalnum() or char == "_"


def tokenize(
    text: str, language: Language, keywords: frozenset[str] | set[str]
) -> List[Span]:
    """Split ``text`` into contiguous spans covering ``[0, len(text))``."""

    spans: List[Span] = []
    length = len(text)
    pos = 0

    while pos < length:
        char = text[pos]
        start = pos

        comment = comment_end(text, pos, language)
        if comment is not None:
            pos = comment
            category = Category.COMMENT
        elif char in QUOTES:
            pos, _ = string_end(text, pos)
            category = Category.STRING
        elif char.isdigit():
            pos += 1
            while pos < length and (text[pos].isdigit() or text[pos] in NUMBER_TAIL):
                pos += 1
            category = Category.NUMBER
        elif _is_identifier_start(char):
            pos += 1
            while pos < length and _is_identifier_part(text[pos]):
                pos += 1
            category = _classify_identifier(text, start, pos, keywords)
        elif char in OPERATORS:
            pos += 1
            category = Category.OPERATOR
        else:
            pos += 1
            category = Category.NORMAL

        spans.append(Span(start, pos, category))

    return spans


def _classify_identifier(
    text: str, start: int, end: int, keywords: frozenset[str] | set[str]
) -> Category:
    word = text[start:end]
    if word in keywords:
        return Category.KEYWORD
    if end < len(text) and text[end] == "(":
        return Category.FUNCTION
    if word[0].isupper():
        return Category.TYPE
    return Category.NORMAL


class Highlighter:
    """Produces spans and keeps the diagnostics computed for the same buffer."""

    def __init__(
        self,
        catalog: RuleCatalog,
        *,
        engine: Optional[DiagnosticEngine] = None,
    ) -> None:
        self.catalog = catalog
        self.engine = engine or DiagnosticEngine(catalog)
        self._last_key: Optional[tuple[str, Language]] = None
        self._last_spans: List[Span] = []
        self._last_diagnostics: List[Diagnostic] = []
        self._last_overlays: List[DiagnosticOverlay] = []

    @property
    def last_diagnostics(self) -> Sequence[Diagnostic]:
        return tuple(self._last_diagnostics)

    @property
    def last_overlays(self) -> Sequence[DiagnosticOverlay]:
        return tuple(self._last_overlays)

    def highlight(self, text: str, language: Language) -> List[Span]:
        key = (text, language)
        if key == self._last_key:
            return list(self._last_spans)

        diagnostics = self.engine.check(text, language)
        self._last_diagnostics = diagnostics
        self._last_overlays = self.engine.overlays_for(text, diagnostics)
        self._last_spans = tokenize(text, language, self.catalog.get_keywords(language))
        self._last_key = key
        return list(self._last_spans)


__all__ = ["Highlighter", "OPERATORS", "tokenize"]
