"""Heuristic, single-pass linter combining rules, contextual checks and analyzers."""

from __future__ import annotations

import re
from typing import Callable, Iterable, List, Optional, Sequence, TypeVar

from editor_engine.catalog import RuleCatalog
from editor_engine.catalog.models import Severity
from editor_engine.languages import Language
from editor_engine.runtime import telemetry

from .context import BufferContext, build_context, indent_width
from .contextual import LineView, run_contextual_checks
from .models import Diagnostic, DiagnosticOverlay, dedupe_and_sort
from .positions import LineIndex
from .structure import analyze_block_comments, analyze_brackets, analyze_strings
from .suggestions import suggestion_for

LOGGER_NAME = "editor_engine.diagnostics"

STDIO_INCLUDES = {
    Language.C: re.compile(r"#\s*include\s*[<\"]stdio\.h[>\"]"),
    Language.CPP: re.compile(r"#\s*include\s*[<\"](iostream|cstdio|stdio\.h)[>\"]"),
}
STDIO_HEADERS = {Language.C: "<stdio.h>", Language.CPP: "<iostream>"}

T = TypeVar("T")


class DiagnosticEngine:
    """Runs every check for a ``(text, language)`` pair.

    The engine is advisory: a stage that fails unexpectedly is logged and
    contributes nothing, so ``check`` never raises on string input.
    """

    def __init__(self, catalog: RuleCatalog) -> None:
        self.catalog = catalog
        self._last: List[Diagnostic] = []
        self._last_context = BufferContext()

    @property
    def last_diagnostics(self) -> Sequence[Diagnostic]:
        return tuple(self._last)

    @property
    def last_context(self) -> BufferContext:
        return self._last_context

    def check(self, text: str, language: Language) -> List[Diagnostic]:
        with telemetry.span(
            "diagnostics::check",
            logger_name=LOGGER_NAME,
            metadata={"language": language.value, "length": len(text)},
        ) as handle:
            index = LineIndex(text)
            context = self._guarded(
                "context", lambda: build_context(text, language), BufferContext()
            )
            collected: List[Diagnostic] = []
            collected += self._guarded(
                "lines", lambda: self._check_lines(text, language, context), []
            )
            collected += self._guarded(
                "brackets", lambda: analyze_brackets(text, language, index), []
            )
            collected += self._guarded(
                "strings", lambda: analyze_strings(text, language, index), []
            )
            collected += self._guarded(
                "comments", lambda: analyze_block_comments(text, language), []
            )
            result = dedupe_and_sort(collected)
            handle.add_metadata("diagnostics", len(result))

        self._last = result
        self._last_context = context
        return list(result)

    def overlays_for(
        self, text: str, diagnostics: Optional[Iterable[Diagnostic]] = None
    ) -> List[DiagnosticOverlay]:
        """Map diagnostics onto the offsets of the lines they sit on."""

        index = LineIndex(text)
        overlays = []
        for diagnostic in self._last if diagnostics is None else diagnostics:
            start, end = index.line_range(diagnostic.line)
            overlays.append(
                DiagnosticOverlay(
                    start=start,
                    end=end,
                    severity=diagnostic.severity,
                    diagnostic=diagnostic,
                )
            )
        return overlays

    def _guarded(self, stage: str, run: Callable[[], T], fallback: T) -> T:
        try:
            return run()
        except Exception as exc:
            telemetry.record_event(
                "diagnostics.stage_failed",
                level="error",
                data={"stage": stage, "error": repr(exc)},
                logger_name=LOGGER_NAME,
            )
            return fallback

    def _check_lines(
        self, text: str, language: Language, context: BufferContext
    ) -> List[Diagnostic]:
        diagnostics: List[Diagnostic] = []
        rules = self.catalog.get_rules(language)
        include = STDIO_INCLUDES.get(language)
        missing_include = include is not None and include.search(text) is None
        lines = text.split("\n")
        following = _following_code_lines(lines)
        in_block = False

        for number, raw in enumerate(lines, start=1):
            line = raw.rstrip("\r")
            stripped = line.strip()
            if in_block:
                in_block = "*/" not in line
                continue
            if not stripped or stripped.startswith(("//", "#")):
                continue
            if stripped.startswith("/*"):
                in_block = language.has_block_comments and "*/" not in stripped[2:]
                continue

            if missing_include:
                diagnostics.append(
                    Diagnostic(
                        line=1,
                        column=0,
                        message=f"Missing #include {STDIO_HEADERS[language]}",
                        severity=Severity.ERROR,
                        kind="missing_include",
                        suggestion=suggestion_for("missing_include"),
                    )
                )
                missing_include = False

            for rule in rules:
                for match in rule.matches(line):
                    diagnostics.append(
                        Diagnostic(
                            line=number,
                            column=match.start(),
                            message=rule.message,
                            severity=rule.severity,
                            kind=rule.kind,
                            suggestion=suggestion_for(rule.kind),
                        )
                    )

            view = LineView(
                number=number,
                text=line,
                stripped=stripped,
                lead=len(line) - len(line.lstrip()),
                indent=indent_width(line),
                next_stripped=following[number - 1],
            )
            diagnostics.extend(run_contextual_checks(language, view, context))

        return diagnostics


def _following_code_lines(lines: Sequence[str]) -> List[str]:
    """For each line, the stripped text of the next non-blank line after it."""

    following = [""] * len(lines)
    upcoming = ""
    for position in range(len(lines) - 1, -1, -1):
        following[position] = upcoming
        stripped = lines[position].strip()
        if stripped:
            upcoming = stripped
    return following


__all__ = ["DiagnosticEngine", "LOGGER_NAME"]
