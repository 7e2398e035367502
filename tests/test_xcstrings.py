from __future__ import annotations

import json
from pathlib import Path

import pytest

from xcstrings_cli.xcstrings import (
    detect_languages,
    dumps,
    format_xcstrings,
    load,
    save,
    sort_localizations,
)


def test_format_adds_space_before_colon() -> None:
    text = json.dumps({"key": "value"}, indent=2)

    assert format_xcstrings(text) == text.replace('":', '" :')
    assert '"key" : "value"' in format_xcstrings(text)


def test_format_nested_objects() -> None:
    output = format_xcstrings(json.dumps({"nested": {"child": "grandchild"}}, indent=2))

    assert '"nested" : {' in output
    assert '"child" : "grandchild"' in output


def test_format_keeps_colons_inside_strings() -> None:
    output = format_xcstrings(json.dumps({"key:with:colons": "value:with:colons"}, indent=2))

    assert '"key:with:colons" : "value:with:colons"' in output


def test_format_handles_escaped_quotes() -> None:
    output = format_xcstrings(json.dumps({"tricky": 'value has ": sequence inside'}, indent=2))

    assert '"tricky" : "value has \\": sequence inside"' in output


def test_format_handles_backslashes() -> None:
    output = format_xcstrings(json.dumps({"path": "C:\\Windows\\System32"}, indent=2))

    assert '"path" : "C:\\\\Windows\\\\System32"' in output


def test_format_preserves_data() -> None:
    obj = {
        "normalKey": "normalValue",
        "key with spaces": "value with spaces",
        "key:with:colons": "value:with:colons",
        'key"with"quotes': 'value"with"quotes',
        "key\\with\\backslashes": "value\\with\\backslashes",
        "nested": {"child": "grandchild", "list": [1, "a:b", {"x": None}]},
        "empty": {},
        "tricky": 'value has ": sequence inside',
        "tricky2": 'value ending in quote"',
        "tricky3": "value ending in backslash\\",
        "unicode": "こんにちは: 世界",
    }

    output = format_xcstrings(json.dumps(obj, indent=2, ensure_ascii=False))

    assert json.loads(output) == obj


def test_save_writes_xcode_style_with_trailing_newline(tmp_path: Path) -> None:
    path = tmp_path / "Localizable.xcstrings"
    data = {"sourceLanguage": "en", "strings": {"hi": {"comment": "こんにちは"}}, "version": "1.0"}

    save(str(path), data)

    text = path.read_text(encoding="utf-8")
    assert text.endswith("}\n")
    assert '"sourceLanguage" : "en"' in text
    assert '"comment" : "こんにちは"' in text
    assert text == dumps(data) + "\n"
    assert load(str(path)) == data


def test_save_keeps_key_order(tmp_path: Path) -> None:
    path = tmp_path / "order.xcstrings"
    data = {"sourceLanguage": "en", "strings": {"zeta": {}, "alpha": {}}}

    save(str(path), data)

    assert list(load(str(path))["strings"]) == ["zeta", "alpha"]


def test_load_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load(str(tmp_path / "missing.xcstrings"))


def test_sort_localizations_ignores_case() -> None:
    localizations = {"zh-Hans": 1, "en": 2, "Ja": 3, "de": 4}

    assert list(sort_localizations(localizations)) == ["de", "en", "Ja", "zh-Hans"]


def test_detect_languages_includes_source_language() -> None:
    data = {
        "sourceLanguage": "en",
        "strings": {"a": {"localizations": {"ja": {}}}, "b": {}},
    }

    assert detect_languages(data) == {"en", "ja"}
