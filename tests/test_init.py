from __future__ import annotations

import io
from pathlib import Path

from rich.console import Console

from xcstrings_cli.config import AppConfig, XCStringsPathEntry, load_config
from xcstrings_cli.init import (
    INIT_FILE_NAME,
    find_xcodeproj_dirs,
    find_xcstrings_files,
    init,
    render_config,
)


def _project(root: Path) -> None:
    (root / "App").mkdir()
    (root / "App" / "Localizable.xcstrings").write_text("{}", encoding="utf-8")
    (root / "Widgets").mkdir()
    (root / "Widgets" / "Widgets.xcstrings").write_text("{}", encoding="utf-8")
    (root / ".build").mkdir()
    (root / ".build" / "Hidden.xcstrings").write_text("{}", encoding="utf-8")
    (root / "node_modules" / "pkg").mkdir(parents=True)
    (root / "node_modules" / "pkg" / "Vendor.xcstrings").write_text("{}", encoding="utf-8")
    (root / "App.xcodeproj").mkdir()


def _quiet_console() -> Console:
    return Console(file=io.StringIO())


def test_discovery_skips_hidden_and_node_modules(isolated_cwd: Path) -> None:
    _project(isolated_cwd)

    found = [p.relative_to(isolated_cwd).as_posix() for p in find_xcstrings_files(isolated_cwd)]

    assert found == ["App/Localizable.xcstrings", "Widgets/Widgets.xcstrings"]
    assert [p.name for p in find_xcodeproj_dirs(isolated_cwd)] == ["App.xcodeproj"]


def test_render_config_with_empty_lists() -> None:
    content = render_config([], [])

    assert "missingLanguagePolicy: skip" in content
    assert "# Paths to .xcstrings files to manage." in content
    assert "xcstringsPaths: []" in content
    assert "xcodeprojPaths: []" in content


def test_init_writes_selected_paths(isolated_cwd: Path) -> None:
    _project(isolated_cwd)
    prompts: list[str] = []

    def ask(prompt: str, default: bool = True) -> bool:
        prompts.append(prompt)
        return "Widgets" not in prompt

    target = init(cwd=isolated_cwd, console=_quiet_console(), ask=ask)

    assert target == isolated_cwd.resolve() / INIT_FILE_NAME
    assert len(prompts) == 4
    assert load_config(str(target)) == AppConfig(
        xcstrings_paths=[XCStringsPathEntry(path="App/Localizable.xcstrings")],
        xcodeproj_paths=["App.xcodeproj"],
        missing_language_policy="skip",
    )


def test_init_without_candidates(isolated_cwd: Path) -> None:
    target = init(cwd=isolated_cwd, console=_quiet_console(), ask=lambda prompt, default=True: True)

    assert target is not None
    assert load_config(str(target)) == AppConfig()


def test_init_cancelled(isolated_cwd: Path) -> None:
    _project(isolated_cwd)

    def ask(prompt: str, default: bool = True) -> bool:
        return INIT_FILE_NAME not in prompt

    assert init(cwd=isolated_cwd, console=_quiet_console(), ask=ask) is None
    assert not (isolated_cwd / INIT_FILE_NAME).exists()


def test_init_round_trips_paths_needing_quotes(isolated_cwd: Path) -> None:
    catalog_dir = isolated_cwd / 'my"app' / "back\\fslash"
    catalog_dir.mkdir(parents=True)
    (catalog_dir / "Localizable.xcstrings").write_text("{}", encoding="utf-8")
    (isolated_cwd / "Say \"hi\": app.xcodeproj").mkdir()

    target = init(cwd=isolated_cwd, console=_quiet_console(), ask=lambda prompt, default=True: True)

    assert load_config(str(target)) == AppConfig(
        xcstrings_paths=[XCStringsPathEntry(path='my"app/back\\fslash/Localizable.xcstrings')],
        xcodeproj_paths=['Say "hi": app.xcodeproj'],
    )
