"""Guess the language of a buffer from its file name or its content."""

from __future__ import annotations

import os
import re
from typing import Optional

from .models import Language

EXTENSIONS = {
    ".kt": Language.KOTLIN,
    ".kts": Language.KOTLIN,
    ".java": Language.JAVA,
    ".py": Language.PYTHON,
    ".cpp": Language.CPP,
    ".cc": Language.CPP,
    ".cxx": Language.CPP,
    ".c++": Language.CPP,
    ".c": Language.C,
    ".h": Language.C,
}

# Checked in order; the first idiom found wins.
_SNIFFERS: tuple[tuple[Language, re.Pattern[str]], ...] = (
    (Language.CPP, re.compile(r"#\s*include\s*<(iostream|string|vector|cstdio|map)>|\bstd::")),
    (Language.C, re.compile(r"#\s*include\s*<\w+\.h>|(?<![.\w])printf\s*\(")),
    (Language.JAVA, re.compile(r"\bpublic\s+static\s+void\s+main\b|\bSystem\.out\.")),
    (Language.KOTLIN, re.compile(r"\bfun\s+\w+\s*\(|\bval\s+\w+|\bprintln\s*\(")),
    (
        Language.PYTHON,
        re.compile(
            r"__name__\s*==|^[ \t]*def\s+\w+\s*\(.*\)\s*:"
            r"|\bprint\s*\(|^[ \t]*import\s+\w+\s*$",
            re.M,
        ),
    ),
)


def detect_language(filename: Optional[str], content: Optional[str] = None) -> Language:
    """Return the language for ``filename``/``content``, never raising."""

    if filename:
        _, extension = os.path.splitext(filename.strip())
        language = EXTENSIONS.get(extension.lower())
        if language is not None:
            return language

    if content:
        for language, pattern in _SNIFFERS:
            if pattern.search(content):
                return language

    return Language.default()


__all__ = ["EXTENSIONS", "detect_language"]
