"""Configuration discovery, loading and validation for xcstrings-cli."""

import json
from dataclasses import dataclass, field
from pathlib import Path

import json5
import yaml

MODULE_NAME = "xcstrings-cli"

SEARCH_PLACES: tuple[str, ...] = (
    f"{MODULE_NAME}.json",
    f"{MODULE_NAME}.json5",
    f"{MODULE_NAME}.yaml",
    f"{MODULE_NAME}.yml",
)

MISSING_LANGUAGE_POLICIES: tuple[str, ...] = ("skip", "include")


@dataclass
class XCStringsPathEntry:
    """A catalog path from ``xcstringsPaths``, optionally reachable by alias."""

    path: str
    alias: str | None = None


@dataclass
class AppConfig:
    """Top-level application configuration."""

    xcstrings_paths: list[XCStringsPathEntry] = field(default_factory=list)
    xcodeproj_paths: list[str] = field(default_factory=list)
    missing_language_policy: str = "skip"


def find_config_file(start: Path | None = None) -> Path | None:
    """Search for a config file from ``start`` upwards.

    Each directory is checked for the names in ``SEARCH_PLACES`` in order.
    The search stops after the user's home directory (or the filesystem root).

    Args:
        start: Directory to start from, defaults to the working directory.

    Returns:
        Path of the first config file found, or None.
    """
    current = (start or Path.cwd()).resolve()
    home = Path.home().resolve()

    while True:
        for name in SEARCH_PLACES:
            candidate = current / name
            if candidate.is_file():
                return candidate
        if current == home or current.parent == current:
            return None
        current = current.parent


def _parse_config_file(path: Path) -> dict:
    """Parse a config file according to its extension."""
    content = path.read_text(encoding="utf-8")
    suffix = path.suffix.lower()

    try:
        if suffix == ".json":
            raw = json.loads(content) if content.strip() else {}
        elif suffix == ".json5":
            raw = json5.loads(content) if content.strip() else {}
        else:
            raw = yaml.safe_load(content)
    except (ValueError, yaml.YAMLError) as e:
        raise ValueError(f"Failed to parse configuration file {path}: {e}") from e

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ValueError(f"Configuration file {path} must contain an object.")
    return raw


def _parse_xcstrings_paths(raw: object) -> list[XCStringsPathEntry]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ValueError("xcstringsPaths must be a list.")

    entries: list[XCStringsPathEntry] = []
    for item in raw:
        if isinstance(item, str):
            entries.append(XCStringsPathEntry(path=item))
        elif isinstance(item, dict) and isinstance(item.get("path"), str) and isinstance(item.get("alias"), str):
            entries.append(XCStringsPathEntry(path=item["path"], alias=item["alias"]))
        else:
            raise ValueError(
                "Each xcstringsPaths entry must be a path string or an object with \"alias\" and \"path\"."
            )
    return entries


def load_config(config_path: str | None = None) -> AppConfig | None:
    """Load configuration from an explicit path or by discovery.

    Args:
        config_path: Path given with ``--config``. When omitted the file is
            discovered with ``find_config_file``.

    Returns:
        Validated AppConfig instance, or None when no config file exists.

    Raises:
        FileNotFoundError: If an explicit config file does not exist.
        ValueError: If the file cannot be parsed or has an invalid shape.
    """
    if config_path:
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")
    else:
        path = find_config_file()
        if path is None:
            return None

    raw = _parse_config_file(path)

    xcodeproj_raw = raw.get("xcodeprojPaths") or []
    if not isinstance(xcodeproj_raw, list) or not all(isinstance(p, str) for p in xcodeproj_raw):
        raise ValueError("xcodeprojPaths must be a list of paths.")

    config = AppConfig(
        xcstrings_paths=_parse_xcstrings_paths(raw.get("xcstringsPaths")),
        xcodeproj_paths=list(xcodeproj_raw),
        missing_language_policy=raw.get("missingLanguagePolicy") or AppConfig.missing_language_policy,
    )
    _validate_config(config)
    return config


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values.

    Args:
        config: The configuration to validate.

    Raises:
        ValueError: If validation fails.
    """
    if config.missing_language_policy not in MISSING_LANGUAGE_POLICIES:
        raise ValueError(
            f"Invalid missingLanguagePolicy \"{config.missing_language_policy}\". "
            f"Allowed values: {', '.join(MISSING_LANGUAGE_POLICIES)}."
        )

    aliases = [entry.alias for entry in config.xcstrings_paths if entry.alias is not None]
    duplicates = sorted({alias for alias in aliases if aliases.count(alias) > 1})
    if duplicates:
        raise ValueError(f"Duplicate xcstringsPaths aliases: {', '.join(duplicates)}")
