from __future__ import annotations

from pathlib import Path

from conftest import read_catalog
from xcstrings_cli.remove import remove


def test_remove_whole_key(copy_fixture) -> None:
    path = copy_fixture("manual-comment-3langs.xcstrings")

    result = remove(path, "closeAction")

    content = read_catalog(path)
    assert "closeAction" not in content["strings"]
    assert content["sourceLanguage"] == "en"
    assert result == {"closeAction": ["en", "ja", "zh-Hans"]}


def test_remove_specific_language(copy_fixture) -> None:
    path = copy_fixture("manual-comment-3langs.xcstrings")

    result = remove(path, "closeAction", ["ja"])

    localizations = read_catalog(path)["strings"]["closeAction"]["localizations"]
    assert list(localizations) == ["en", "zh-Hans"]
    assert result == {"closeAction": ["ja"]}


def test_remove_language_across_all_keys(copy_fixture) -> None:
    path = copy_fixture("manual-comment-3langs.xcstrings")

    result = remove(path, None, ["zh-Hans"])

    strings = read_catalog(path)["strings"]
    assert list(strings["closeAction"]["localizations"]) == ["en", "ja"]
    assert "nonTranslatableString" in strings
    assert result == {"closeAction": ["zh-Hans"]}


def test_removing_every_language_removes_key(copy_fixture) -> None:
    path = copy_fixture("manual-comment-3langs.xcstrings")

    result = remove(path, None, ["en", "ja", "zh-Hans"])

    strings = read_catalog(path)["strings"]
    assert "closeAction" not in strings
    assert "nonTranslatableString" in strings
    assert sorted(result["closeAction"]) == ["en", "ja", "zh-Hans"]


def test_empty_language_list_removes_whole_key(copy_fixture) -> None:
    path = copy_fixture("manual-comment-3langs.xcstrings")

    result = remove(path, "closeAction", [])

    assert "closeAction" not in read_catalog(path)["strings"]
    assert result == {"closeAction": ["en", "ja", "zh-Hans"]}


def test_remove_all_keys(copy_fixture) -> None:
    path = copy_fixture("manual-comment-3langs.xcstrings")

    result = remove(path)

    assert read_catalog(path)["strings"] == {}
    assert result == {"closeAction": ["en", "ja", "zh-Hans"], "nonTranslatableString": []}


def test_dry_run_does_not_touch_file(copy_fixture) -> None:
    path = copy_fixture("manual-comment-3langs.xcstrings")
    before = Path(path).read_bytes()

    dry = remove(path, "closeAction", ["ja"], dry_run=True)

    assert Path(path).read_bytes() == before
    assert dry == {"closeAction": ["ja"]}
    assert remove(path, "closeAction", ["ja"]) == dry


def test_dry_run_matches_real_run_for_key_removal(copy_fixture) -> None:
    path = copy_fixture("manual-comment-3langs.xcstrings")
    before = Path(path).read_bytes()

    dry = remove(path, None, ["en", "ja", "zh-Hans"], dry_run=True)

    assert Path(path).read_bytes() == before
    assert remove(path, None, ["en", "ja", "zh-Hans"]) == dry


def test_missing_key_reports_nothing(copy_fixture) -> None:
    path = copy_fixture("manual-comment-3langs.xcstrings")
    before = Path(path).read_bytes()

    assert remove(path, "doesNotExist") == {}
    assert remove(path, "closeAction", ["fr"]) == {}
    assert Path(path).read_bytes() == before
