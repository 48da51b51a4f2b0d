"""Diagnostic records produced by the engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional

from editor_engine.catalog.models import Severity


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Advisory finding at ``line`` (1-based) and ``column`` (0-based)."""

    line: int
    column: int
    message: str
    severity: Severity
    kind: str
    suggestion: Optional[str] = None

    @property
    def key(self) -> tuple[int, int, str]:
        return (self.line, self.column, self.kind)

    @property
    def sort_key(self) -> tuple[int, int]:
        return (self.line, self.severity.rank)


@dataclass(frozen=True, slots=True)
class DiagnosticOverlay:
    """Background range a renderer paints for one diagnostic's line."""

    start: int
    end: int
    severity: Severity
    diagnostic: Diagnostic


def dedupe_and_sort(diagnostics: Iterable[Diagnostic]) -> List[Diagnostic]:
    """Keep the first diagnostic per ``(line, column, kind)`` and order them."""

    unique: dict[tuple[int, int, str], Diagnostic] = {}
    for diagnostic in diagnostics:
        unique.setdefault(diagnostic.key, diagnostic)
    return sorted(unique.values(), key=lambda item: item.sort_key)


__all__ = ["Diagnostic", "DiagnosticOverlay", "Severity", "dedupe_and_sort"]
