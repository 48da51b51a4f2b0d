from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

import pytest

from editor_engine.catalog import (
    DEFAULT_KEYWORDS,
    RuleCatalog,
    Severity,
)
from editor_engine.languages import Language
from editor_engine.runtime import telemetry


def make_document(rules: Dict[str, List[Dict[str, Any]]]) -> Dict[str, Any]:
    return {"keywords": {"kotlin": ["fun", "val"]}, "rules": rules}


def rule(kind: str, regex: str, severity: str = "error") -> Dict[str, Any]:
    return {
        "type": kind,
        "message": f"{kind} message",
        "severity": severity,
        "pattern": {"regex": regex},
    }


def kinds(catalog: RuleCatalog, language: Language) -> List[str]:
    return [item.kind for item in catalog.get_rules(language)]


def test_bundled_catalog_covers_every_language(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("EDITOR_ENGINE_CATALOG", raising=False)
    catalog = RuleCatalog().load()

    assert catalog.loaded is True
    assert catalog.from_fallback is False
    assert catalog.skipped_rules == 0
    for language in Language:
        assert catalog.get_keywords(language)
        assert catalog.get_rules(language)
    assert "fun" in catalog.get_keywords(Language.KOTLIN)
    assert "function_declaration" in kinds(catalog, Language.KOTLIN)


def test_missing_file_uses_builtin_fallback(tmp_path: Path) -> None:
    catalog = RuleCatalog(tmp_path / "missing.json")

    assert kinds(catalog, Language.KOTLIN) == [
        "function_declaration",
        "class_declaration",
    ]
    assert catalog.from_fallback is True
    assert catalog.get_keywords(Language.KOTLIN) == DEFAULT_KEYWORDS[Language.KOTLIN]


@pytest.mark.parametrize("payload", ["{not json", "[1, 2, 3]", '{"other": {}}'])
def test_malformed_document_falls_back(tmp_path: Path, payload: str) -> None:
    path = tmp_path / "catalog.json"
    path.write_text(payload, encoding="utf-8")

    catalog = RuleCatalog(path).load()

    assert catalog.from_fallback is True
    assert kinds(catalog, Language.C) == ["unsafe_gets"]


def test_fallback_is_reported_as_event(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    events: List[str] = []
    original = telemetry.record_event

    def capture(name: str, **kwargs: Any) -> None:
        events.append(name)
        original(name, **kwargs)

    monkeypatch.setattr(telemetry, "record_event", capture)
    RuleCatalog(tmp_path / "missing.json").load()

    assert "catalog.fallback" in events
    assert "catalog.loaded" in events


def test_invalid_rule_is_skipped_not_fatal() -> None:
    document = make_document(
        {"kotlin": [rule("ok", r"\bfoo\b"), rule("broken", "("), {"type": "no_pattern"}]}
    )
    catalog = RuleCatalog(document=document)

    assert kinds(catalog, Language.KOTLIN) == ["ok"]
    assert catalog.skipped_rules == 2
    assert catalog.from_fallback is False


def test_severity_warning_and_info_collapse_to_warning() -> None:
    document = make_document(
        {
            "java": [
                rule("a", "a", "warning"),
                rule("b", "b", "info"),
                rule("c", "c", "error"),
                rule("d", "d", "fatal"),
            ]
        }
    )
    catalog = RuleCatalog(document=document)

    severities = [item.severity for item in catalog.get_rules(Language.JAVA)]
    assert severities == [
        Severity.WARNING,
        Severity.WARNING,
        Severity.ERROR,
        Severity.ERROR,
    ]
    assert Severity.from_catalog(None) is Severity.ERROR
    assert Severity.from_catalog(" INFO ") is Severity.WARNING


def test_missing_keyword_sections_use_defaults() -> None:
    catalog = RuleCatalog(document={"rules": {}})

    assert catalog.get_keywords(Language.PYTHON) == DEFAULT_KEYWORDS[Language.PYTHON]
    assert catalog.get_rules(Language.PYTHON) == ()


def test_unknown_languages_and_plain_patterns() -> None:
    document = {
        "rules": {
            "cobol": [rule("ignored", "x")],
            "Python": [{"type": "plain", "message": "m", "pattern": "^\\s*exec\\b"}],
        }
    }
    catalog = RuleCatalog(document=document)

    (only,) = catalog.get_rules(Language.PYTHON)
    assert only.kind == "plain"
    assert only.matches("  EXEC code")


def test_catalog_is_cached_until_invalidated(tmp_path: Path) -> None:
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(make_document({"c": [rule("first", "x")]})), encoding="utf-8")
    catalog = RuleCatalog(path)
    assert kinds(catalog, Language.C) == ["first"]

    path.write_text(json.dumps(make_document({"c": [rule("second", "y")]})), encoding="utf-8")
    assert kinds(catalog, Language.C) == ["first"]

    catalog.invalidate()
    assert catalog.loaded is False
    assert kinds(catalog, Language.C) == ["second"]


def test_environment_selects_catalog_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "custom.json"
    path.write_text(json.dumps(make_document({"cpp": [rule("custom", "x")]})), encoding="utf-8")
    monkeypatch.setenv("EDITOR_ENGINE_CATALOG", str(path))

    assert kinds(RuleCatalog(), Language.CPP) == ["custom"]
