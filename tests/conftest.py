from __future__ import annotations

import json
import shutil
from pathlib import Path
from typing import Callable

import pytest

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run every test from an empty directory so no stray config is discovered."""
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    monkeypatch.setenv("HOME", str(workdir))
    return workdir


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def copy_fixture(tmp_path: Path) -> Callable[[str], str]:
    def _copy(name: str) -> str:
        target = tmp_path / name
        if (FIXTURES_DIR / name).is_dir():
            shutil.copytree(FIXTURES_DIR / name, target)
        else:
            shutil.copyfile(FIXTURES_DIR / name, target)
        return str(target)

    return _copy


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[..., str]:
    def _write(content: dict, name: str = "config.json") -> str:
        target = tmp_path / name
        target.write_text(json.dumps(content), encoding="utf-8")
        return str(target)

    return _write


def read_catalog(path: str) -> dict:
    return json.loads(Path(path).read_text(encoding="utf-8"))
