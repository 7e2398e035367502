"""Discovery of the languages a project supports."""

import logging
import re
from pathlib import Path

from xcstrings_cli.config import AppConfig
from xcstrings_cli.xcstrings import detect_languages, load

logger = logging.getLogger(__name__)

_KNOWN_REGIONS_PATTERN = re.compile(r"knownRegions\s*=\s*\((.*?)\);", re.DOTALL)
_COMMENT_PATTERN = re.compile(r"/\*.*?\*/", re.DOTALL)

BASE_REGION = "Base"


def _normalize_region(token: str) -> str:
    return token.strip().strip('"').strip()


def get_languages_from_xcodeproj(xcodeproj_path: str) -> list[str]:
    """Read the known regions declared by an Xcode project.

    Args:
        xcodeproj_path: Path to a ``.xcodeproj`` directory.

    Returns:
        Region codes in declaration order, without duplicates and without
        the ``Base`` pseudo-region. Empty when the project declares none.

    Raises:
        FileNotFoundError: If ``project.pbxproj`` does not exist.
    """
    pbx = Path(xcodeproj_path) / "project.pbxproj"
    if not pbx.exists():
        raise FileNotFoundError(f"Xcode project file not found: {pbx}")

    content = pbx.read_text(encoding="utf-8")
    match = _KNOWN_REGIONS_PATTERN.search(content)
    if match is None:
        logger.debug("No knownRegions block in %s", pbx)
        return []

    block = _COMMENT_PATTERN.sub("", match.group(1))

    regions: list[str] = []
    seen: set[str] = set()
    for token in block.split(","):
        region = _normalize_region(token)
        if not region or region == BASE_REGION or region in seen:
            continue
        seen.add(region)
        regions.append(region)
    return regions


def get_languages_from_xcstrings(xcstrings_path: str) -> list[str]:
    """Collect the languages used by a catalog, source language included."""
    return sorted(detect_languages(load(xcstrings_path)))


def languages(xcstrings_path: str, config: AppConfig | None = None) -> list[str]:
    """List the languages supported by the project.

    When ``xcodeprojPaths`` are configured, the union of their known regions
    is returned; otherwise the languages found in the catalog.

    Args:
        xcstrings_path: Catalog used as the fallback source.
        config: Loaded configuration, if any.

    Returns:
        Sorted list of language codes.
    """
    if config is not None and config.xcodeproj_paths:
        all_languages: set[str] = set()
        for xcodeproj_path in config.xcodeproj_paths:
            all_languages.update(get_languages_from_xcodeproj(xcodeproj_path))
        return sorted(all_languages)

    return get_languages_from_xcstrings(xcstrings_path)
