"""Tokenizing highlighter."""

from .tokenizer import OPERATORS, Highlighter, tokenize

__all__ = ["Highlighter", "OPERATORS", "tokenize"]
