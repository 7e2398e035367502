from __future__ import annotations

from pathlib import Path

import pytest

from xcstrings_cli.config import AppConfig, XCStringsPathEntry
from xcstrings_cli.errors import ArgumentError
from xcstrings_cli.paths import resolve_xcstrings_path


def _config(*entries: XCStringsPathEntry) -> AppConfig:
    return AppConfig(xcstrings_paths=list(entries))


def _no_select(entries):
    raise AssertionError("selection should not be needed")


def test_default_path_without_config(isolated_cwd: Path) -> None:
    assert resolve_xcstrings_path(None, None, _no_select) == str(isolated_cwd / "Localizable.xcstrings")


def test_explicit_path_is_kept() -> None:
    config = _config(XCStringsPathEntry("a.xcstrings", alias="core"))

    assert resolve_xcstrings_path("other/Localizable.xcstrings", config, _no_select) == "other/Localizable.xcstrings"


def test_alias_prefix() -> None:
    config = _config(XCStringsPathEntry("Core/Localizable.xcstrings", alias="core"))

    assert resolve_xcstrings_path("alias:core", config, _no_select) == "Core/Localizable.xcstrings"


def test_bare_alias() -> None:
    config = _config(XCStringsPathEntry("Utils/Localizable.xcstrings", alias="utils"))

    assert resolve_xcstrings_path("utils", config, _no_select) == "Utils/Localizable.xcstrings"


def test_unknown_alias_prefix() -> None:
    with pytest.raises(ArgumentError, match="Unknown alias: missing"):
        resolve_xcstrings_path("alias:missing", None, _no_select)


def test_unknown_bare_alias_when_aliases_configured() -> None:
    config = _config(XCStringsPathEntry("Core/Localizable.xcstrings", alias="core"))

    with pytest.raises(ArgumentError, match="Unknown alias: missing"):
        resolve_xcstrings_path("missing", config, _no_select)


def test_bare_name_without_alias_entries_is_a_path() -> None:
    config = _config(XCStringsPathEntry("Core/Localizable.xcstrings"))

    assert resolve_xcstrings_path("Strings", config, _no_select) == "Strings"


def test_single_configured_path_is_used() -> None:
    config = _config(XCStringsPathEntry("App/Localizable.xcstrings"))

    assert resolve_xcstrings_path(None, config, _no_select) == "App/Localizable.xcstrings"


def test_multiple_configured_paths_prompt() -> None:
    entries = [
        XCStringsPathEntry("App/Localizable.xcstrings"),
        XCStringsPathEntry("Widgets/Localizable.xcstrings", alias="widgets"),
    ]
    seen = []

    def select(choices):
        seen.extend(choices)
        return choices[1].path

    assert resolve_xcstrings_path(None, _config(*entries), select) == "Widgets/Localizable.xcstrings"
    assert seen == entries
