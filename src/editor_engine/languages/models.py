"""Language identifiers, highlight categories and spans."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Language(str, Enum):
    """Closed set of supported languages; the first member is the default."""

    KOTLIN = "kotlin"
    JAVA = "java"
    PYTHON = "python"
    CPP = "cpp"
    C = "c"

    @classmethod
    def default(cls) -> "Language":
        return next(iter(cls))

    @classmethod
    def parse(cls, value: object) -> "Language":
        """Resolve a language name, falling back to the default."""

        if isinstance(value, Language):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.default()

    @property
    def line_comment(self) -> str:
        return LINE_COMMENT[self]

    @property
    def has_block_comments(self) -> bool:
        return self in C_FAMILY


LINE_COMMENT = {
    Language.KOTLIN: "//",
    Language.JAVA: "//",
    Language.PYTHON: "#",
    Language.CPP: "//",
    Language.C: "//",
}

C_FAMILY = frozenset({Language.KOTLIN, Language.JAVA, Language.CPP, Language.C})


class Category(str, Enum):
    KEYWORD = "keyword"
    STRING = "string"
    COMMENT = "comment"
    NUMBER = "number"
    FUNCTION = "function"
    TYPE = "type"
    OPERATOR = "operator"
    NORMAL = "normal"


@dataclass(frozen=True, slots=True)
class Span:
    """Half-open ``[start, end)`` range of text tagged with one category."""

    start: int
    end: int
    category: Category

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"invalid span [{self.start}, {self.end})")

    def __len__(self) -> int:
        return self.end - self.start

    def text(self, source: str) -> str:
        return source[self.start : self.end]


__all__ = [
    "C_FAMILY",
    "Category",
    "LINE_COMMENT",
    "Language",
    "Span",
]
