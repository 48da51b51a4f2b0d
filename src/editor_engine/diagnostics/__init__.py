"""Line rules, contextual checks and structural analyzers producing diagnostics."""

from editor_engine.catalog.models import Severity

from .context import BufferContext, build_context
from .engine import DiagnosticEngine
from .models import Diagnostic, DiagnosticOverlay, dedupe_and_sort
from .positions import LineIndex
from .suggestions import SUGGESTIONS, suggestion_for

__all__ = [
    "BufferContext",
    "Diagnostic",
    "DiagnosticEngine",
    "DiagnosticOverlay",
    "LineIndex",
    "SUGGESTIONS",
    "Severity",
    "build_context",
    "dedupe_and_sort",
    "suggestion_for",
]
