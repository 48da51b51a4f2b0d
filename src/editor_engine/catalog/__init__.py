"""Language-keyed keyword sets and diagnostic rules."""

from .catalog import ConfigLoadError, PatternCompileError, RuleCatalog
from .defaults import DEFAULT_KEYWORDS, FALLBACK_RULES
from .models import DiagnosticRule, Severity

__all__ = [
    "ConfigLoadError",
    "DEFAULT_KEYWORDS",
    "DiagnosticRule",
    "FALLBACK_RULES",
    "PatternCompileError",
    "RuleCatalog",
    "Severity",
]
