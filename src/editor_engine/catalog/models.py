"""Dataclasses describing catalog rules and diagnostic severities."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from editor_engine.languages import Language


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"

    @property
    def rank(self) -> int:
        return _RANKS[self]

    @classmethod
    def from_catalog(cls, value: object) -> "Severity":
        """Normalize a catalog severity string.

        ``warning`` and ``info`` both become WARNING and anything else is
        ERROR. Contextual checks still emit INFO directly.
        """

        if str(value).strip().lower() in {"warning", "info"}:
            return cls.WARNING
        return cls.ERROR


_RANKS = {Severity.ERROR: 0, Severity.WARNING: 1, Severity.INFO: 2}


@dataclass(frozen=True, slots=True)
class DiagnosticRule:
    """Line-level regex rule scoped to a single language."""

    kind: str
    pattern: re.Pattern[str]
    message: str
    severity: Severity
    language: Language

    def __post_init__(self) -> None:
        if not self.kind:
            raise ValueError("rule kind cannot be empty")
        if not self.message:
            raise ValueError("rule message cannot be empty")

    def matches(self, line: str) -> list[re.Match[str]]:
        return list(self.pattern.finditer(line))


__all__ = ["DiagnosticRule", "Severity"]
