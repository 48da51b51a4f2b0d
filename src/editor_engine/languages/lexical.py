"""Lexical helpers shared by the tokenizer and the structural analyzers."""

from __future__ import annotations

from typing import Iterator, Optional, Tuple

from .models import Language

QUOTES = frozenset("\"'")
ESCAPE = "\\"


def string_end(text: str, start: int) -> Tuple[int, bool]:
    """Scan the literal opened at ``start``.

    Returns the offset just past the closing quote and ``True``, or
    ``(len(text), False)`` when the literal is never closed. A backslash
    consumes the following character.
    """

    quote = text[start]
    pos = start + 1
    length = len(text)
    while pos < length:
        char = text[pos]
        if char == ESCAPE:
            pos += 2
            continue
        pos += 1
        if char == quote:
            return pos, True
    return length, False


def comment_end(text: str, pos: int, language: Language) -> Optional[int]:
    """Offset past the comment starting at ``pos``, or None if none starts there."""

    if text.startswith(language.line_comment, pos):
        newline = text.find("\n", pos)
        return len(text) if newline == -1 else newline
    if language.has_block_comments and text.startswith("/*", pos):
        close = text.find("*/", pos + 2)
        return len(text) if close == -1 else close + 2
    return None


def code_offsets(text: str, language: Language) -> Iterator[Tuple[int, str]]:
    """Yield ``(offset, char)`` for characters outside comments and literals."""

    pos = 0
    length = len(text)
    while pos < length:
        end = comment_end(text, pos, language)
        if end is not None:
            pos = end
            continue
        char = text[pos]
        if char in QUOTES:
            pos, _ = string_end(text, pos)
            continue
        yield pos, char
        pos += 1


__all__ = ["ESCAPE", "QUOTES", "code_offsets", "comment_end", "string_end"]
