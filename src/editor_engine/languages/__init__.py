"""Supported languages, highlight categories and language detection."""

from .detect import EXTENSIONS, detect_language
from .models import C_FAMILY, Category, Language, Span

__all__ = [
    "C_FAMILY",
    "Category",
    "EXTENSIONS",
    "Language",
    "Span",
    "detect_language",
]
