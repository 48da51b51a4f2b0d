"""Built-in keywords and the fallback rule set used when the catalog is unreadable."""

from __future__ import annotations

from typing import Mapping, Sequence

from editor_engine.languages import Language

DEFAULT_KEYWORDS: Mapping[Language, frozenset[str]] = {
    Language.KOTLIN: frozenset(
        {
            "as", "break", "class", "continue", "do", "else", "false", "for",
            "fun", "if", "in", "interface", "is", "null", "object", "package",
            "return", "super", "this", "throw", "true", "try", "typealias",
            "val", "var", "when", "while", "import", "catch", "finally",
            "override", "private", "public", "protected", "internal", "data",
            "sealed", "open", "abstract", "companion", "enum", "lateinit",
        }
    ),
    Language.JAVA: frozenset(
        {
            "abstract", "boolean", "break", "byte", "case", "catch", "char",
            "class", "continue", "default", "do", "double", "else", "enum",
            "extends", "final", "finally", "float", "for", "if", "implements",
            "import", "instanceof", "int", "interface", "long", "new",
            "package", "private", "protected", "public", "return", "short",
            "static", "super", "switch", "this", "throw", "throws", "try",
            "void", "while", "null", "true", "false", "var",
        }
    ),
    Language.PYTHON: frozenset(
        {
            "False", "None", "True", "and", "as", "assert", "async", "await",
            "break", "class", "continue", "def", "del", "elif", "else",
            "except", "finally", "for", "from", "global", "if", "import", "in",
            "is", "lambda", "nonlocal", "not", "or", "pass", "raise", "return",
            "try", "while", "with", "yield",
        }
    ),
    Language.CPP: frozenset(
        {
            "auto", "bool", "break", "case", "catch", "char", "class", "const",
            "continue", "default", "delete", "do", "double", "else", "enum",
            "false", "float", "for", "if", "include", "int", "long",
            "namespace", "new", "nullptr", "private", "protected", "public",
            "return", "short", "signed", "sizeof", "static", "struct",
            "switch", "template", "this", "throw", "true", "try", "typedef",
            "typename", "unsigned", "using", "virtual", "void", "while",
        }
    ),
    Language.C: frozenset(
        {
            "auto", "break", "case", "char", "const", "continue", "default",
            "do", "double", "else", "enum", "extern", "float", "for", "goto",
            "if", "include", "int", "long", "register", "return", "short",
            "signed", "sizeof", "static", "struct", "switch", "typedef",
            "union", "unsigned", "void", "volatile", "while",
        }
    ),
}

# Same shape as the ``rules`` section of the catalog document.
FALLBACK_RULES: Mapping[str, Sequence[Mapping[str, object]]] = {
    "kotlin": (
        {
            "type": "function_declaration",
            "message": "Function declaration is missing its parameter list",
            "severity": "error",
            "pattern": {"regex": r"^\s*fun\s+\w+\s*(\{|=|$)"},
        },
        {
            "type": "class_declaration",
            "message": "Class declaration is missing a name before '{'",
            "severity": "error",
            "pattern": {"regex": r"\bclass\s*\{"},
        },
    ),
    "java": (
        {
            "type": "string_comparison",
            "message": "Strings should be compared with equals(), not ==",
            "severity": "warning",
            "pattern": {"regex": r"==\s*\"|\"\s*=="},
        },
    ),
    "python": (
        {
            "type": "print_statement",
            "message": "print is a function; call it with parentheses",
            "severity": "error",
            "pattern": {"regex": r"^\s*print\s+[^\s(=]"},
        },
    ),
    "cpp": (
        {
            "type": "using_namespace_std",
            "message": "'using namespace std' pulls every std name into scope",
            "severity": "warning",
            "pattern": {"regex": r"^\s*using\s+namespace\s+std\s*;"},
        },
    ),
    "c": (
        {
            "type": "unsafe_gets",
            "message": "gets() cannot limit input length; use fgets()",
            "severity": "error",
            "pattern": {"regex": r"\bgets\s*\("},
        },
    ),
}

__all__ = ["DEFAULT_KEYWORDS", "FALLBACK_RULES"]
