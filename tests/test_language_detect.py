from __future__ import annotations

import pytest

from editor_engine.languages import Language, detect_language


@pytest.mark.parametrize(
    ("filename", "expected"),
    [
        ("Main.kt", Language.KOTLIN),
        ("App.java", Language.JAVA),
        ("script.PY", Language.PYTHON),
        ("engine.cpp", Language.CPP),
        ("engine.cc", Language.CPP),
        ("util.c", Language.C),
        ("util.h", Language.C),
    ],
)
def test_extension_wins(filename: str, expected: Language) -> None:
    assert detect_language(filename, "fun main() {}") is expected


@pytest.mark.parametrize(
    ("content", "expected"),
    [
        ("#include <iostream>\nint main() {}", Language.CPP),
        ("#include <stdio.h>\nint main() {}", Language.C),
        ("class A { public static void main(String[] a) {} }", Language.JAVA),
        ("fun main() {\n    println(1)\n}", Language.KOTLIN),
        ("def main():\n    pass\n", Language.PYTHON),
    ],
)
def test_content_sniffing(content: str, expected: Language) -> None:
    assert detect_language("untitled", content) is expected


def test_unknown_input_falls_back_to_default() -> None:
    assert detect_language("README", "") is Language.KOTLIN
    assert detect_language(None, None) is Language.default()


def test_language_parse() -> None:
    assert Language.parse(" JAVA ") is Language.JAVA
    assert Language.parse("cobol") is Language.KOTLIN
    assert Language.parse(Language.C) is Language.C


def test_java_printf_is_not_mistaken_for_c() -> None:
    content = 'System.out.printf("%d", 1);'

    assert detect_language(None, content) is Language.JAVA
    assert detect_language(None, 'printf("%d", 1);') is Language.C
