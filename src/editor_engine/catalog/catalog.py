"""Per-language keyword sets and diagnostic rules, loaded once and cached."""

from __future__ import annotations

import json
import re
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from editor_engine.config import env_value
from editor_engine.languages import Language
from editor_engine.runtime import telemetry

from .defaults import DEFAULT_KEYWORDS, FALLBACK_RULES
from .models import DiagnosticRule, Severity

LOGGER_NAME = "editor_engine.catalog"
BUNDLED_RESOURCE = "catalog.json"


class ConfigLoadError(RuntimeError):
    """Raised when the catalog document cannot be read or has the wrong shape."""

    def __init__(self, message: str, *, source: str | None = None) -> None:
        super().__init__(message)
        self.source = source


class PatternCompileError(ValueError):
    """Raised for a single rule whose payload or regex is unusable."""

    def __init__(self, message: str, *, language: str, entry: object) -> None:
        super().__init__(message)
        self.language = language
        self.entry = entry


class RuleCatalog:
    """Owns keyword sets and rules for every ``Language``.

    One instance is built by the host and shared by every consumer. The
    document is read lazily on the first query and cached until
    ``invalidate`` is called.
    """

    def __init__(
        self,
        source: str | Path | None = None,
        *,
        document: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self._source = source
        self._document = document
        self._keywords: Optional[Dict[Language, frozenset[str]]] = None
        self._rules: Optional[Dict[Language, tuple[DiagnosticRule, ...]]] = None
        self._from_fallback = False
        self._skipped = 0

    @property
    def loaded(self) -> bool:
        return self._rules is not None

    @property
    def from_fallback(self) -> bool:
        return self._from_fallback

    @property
    def skipped_rules(self) -> int:
        return self._skipped

    def get_keywords(self, language: Language) -> frozenset[str]:
        self._ensure_loaded()
        assert self._keywords is not None
        return self._keywords.get(language, frozenset())

    def get_rules(self, language: Language) -> tuple[DiagnosticRule, ...]:
        self._ensure_loaded()
        assert self._rules is not None
        return self._rules.get(language, ())

    def load(self) -> "RuleCatalog":
        """Read the source now (if not cached yet) and return ``self``."""

        self._ensure_loaded()
        return self

    def invalidate(self) -> None:
        self._keywords = None
        self._rules = None
        self._from_fallback = False
        self._skipped = 0

    def _ensure_loaded(self) -> None:
        if self._rules is not None:
            return
        with telemetry.span(
            "catalog::load",
            logger_name=LOGGER_NAME,
            component="catalog",
            metadata={"source": self._describe_source()},
        ) as handle:
            try:
                document = self._read_document()
                keywords = self._parse_keywords(document.get("keywords"))
                rules = self._parse_rules(document.get("rules"))
            except ConfigLoadError as exc:
                telemetry.record_event(
                    "catalog.fallback",
                    level="warning",
                    data={"reason": str(exc), "source": exc.source},
                    logger_name=LOGGER_NAME,
                )
                keywords = dict(DEFAULT_KEYWORDS)
                rules = self._parse_rules(FALLBACK_RULES)
                self._from_fallback = True
            self._keywords = keywords
            self._rules = rules
            handle.add_metadata("fallback", self._from_fallback)
            handle.add_metadata("skipped", self._skipped)
        telemetry.record_event(
            "catalog.loaded",
            data={
                "rules": sum(len(items) for items in rules.values()),
                "skipped": self._skipped,
                "fallback": self._from_fallback,
            },
            logger_name=LOGGER_NAME,
        )

    def _describe_source(self) -> str:
        if self._document is not None:
            return "<document>"
        return str(self._resolve_path() or f"<bundled:{BUNDLED_RESOURCE}>")

    def _resolve_path(self) -> Optional[Path]:
        if self._source is not None:
            return Path(self._source)
        override = env_value("CATALOG")
        return Path(override) if override else None

    def _read_document(self) -> Mapping[str, Any]:
        if self._document is not None:
            document: Any = self._document
            origin = "<document>"
        else:
            path = self._resolve_path()
            origin = str(path) if path else BUNDLED_RESOURCE
            try:
                if path is None:
                    raw = (
                        resources.files("editor_engine.catalog")
                        .joinpath("data").joinpath(BUNDLED_RESOURCE)
                        .read_text(encoding="utf-8")
                    )
                else:
                    raw = path.read_text(encoding="utf-8")
                document = json.loads(raw)
            except (OSError, UnicodeDecodeError, ValueError) as exc:
                raise ConfigLoadError(str(exc), source=origin) from exc

        if not isinstance(document, Mapping):
            raise ConfigLoadError("catalog root must be an object", source=origin)
        if "keywords" not in document and "rules" not in document:
            raise ConfigLoadError(
                "catalog has neither 'keywords' nor 'rules'", source=origin
            )
        return document

    def _parse_keywords(self, section: Any) -> Dict[Language, frozenset[str]]:
        keywords = dict(DEFAULT_KEYWORDS)
        if not isinstance(section, Mapping):
            return keywords
        for name, values in section.items():
            language = _language_for(name)
            if language is None or not isinstance(values, (list, tuple)):
                continue
            words = frozenset(
                value.strip()
                for value in values
                if isinstance(value, str) and value.strip()
            )
            if words:
                keywords[language] = words
        return keywords

    def _parse_rules(self, section: Any) -> Dict[Language, tuple[DiagnosticRule, ...]]:
        rules: Dict[Language, tuple[DiagnosticRule, ...]] = {}
        if not isinstance(section, Mapping):
            return rules
        for name, entries in section.items():
            language = _language_for(name)
            if language is None or not isinstance(entries, (list, tuple)):
                continue
            compiled: list[DiagnosticRule] = []
            for entry in entries:
                try:
                    compiled.append(_compile_rule(language, entry))
                except PatternCompileError as exc:
                    self._skipped += 1
                    telemetry.record_event(
                        "catalog.rule_skipped",
                        level="warning",
                        data={"language": exc.language, "reason": str(exc)},
                        logger_name=LOGGER_NAME,
                    )
            rules[language] = tuple(compiled)
        return rules


def _language_for(name: object) -> Optional[Language]:
    try:
        return Language(str(name).strip().lower())
    except ValueError:
        return None


def _pattern_text(payload: Any) -> Optional[str]:
    if isinstance(payload, str):
        return payload
    if isinstance(payload, Mapping):
        value = payload.get("regex")
        return value if isinstance(value, str) else None
    return None


def _compile_rule(language: Language, entry: Any) -> DiagnosticRule:
    if not isinstance(entry, Mapping):
        raise PatternCompileError(
            "rule entry must be an object", language=language.value, entry=entry
        )
    kind = entry.get("type")
    message = entry.get("message")
    pattern = _pattern_text(entry.get("pattern"))
    if not isinstance(kind, str) or not kind.strip():
        raise PatternCompileError(
            "rule is missing 'type'", language=language.value, entry=entry
        )
    if not isinstance(message, str) or not message.strip():
        raise PatternCompileError(
            f"rule '{kind}' is missing 'message'", language=language.value, entry=entry
        )
    if not pattern:
        raise PatternCompileError(
            f"rule '{kind}' is missing 'pattern'", language=language.value, entry=entry
        )
    try:
        compiled = re.compile(pattern, re.IGNORECASE)
    except re.error as exc:
        raise PatternCompileError(
            f"rule '{kind}' has an invalid pattern: {exc}",
            language=language.value,
            entry=entry,
        ) from exc
    return DiagnosticRule(
        kind=kind.strip(),
        pattern=compiled,
        message=message.strip(),
        severity=Severity.from_catalog(entry.get("severity")),
        language=language,
    )


__all__ = ["ConfigLoadError", "PatternCompileError", "RuleCatalog"]
