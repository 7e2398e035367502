"""Removing keys or individual localizations from a catalog."""

import logging

from xcstrings_cli.xcstrings import load, save

logger = logging.getLogger(__name__)


def remove(
    path: str,
    key: str | None = None,
    languages: list[str] | None = None,
    dry_run: bool = False,
) -> dict[str, list[str]]:
    """Remove a key, or some of its localizations, from a catalog.

    Without ``languages`` the whole key is removed (every key when ``key`` is
    None). With ``languages`` only those localizations are removed; a key left
    with no localizations is removed as well.

    Args:
        path: Catalog file.
        key: Key to target, or None for all keys.
        languages: Languages to remove; None or empty removes whole keys.
        dry_run: Report what would be removed without writing the file.

    Returns:
        Removed (or, for a dry run, removable) languages per key, in
        catalog order. Keys that held no localizations map to an empty list.
    """
    data = load(path)
    strings = data.get("strings") or {}

    if key is None:
        target_keys = list(strings.keys())
    elif key in strings:
        target_keys = [key]
    else:
        target_keys = []

    removed: dict[str, list[str]] = {}

    for target in target_keys:
        unit = strings[target] or {}
        localizations = unit.get("localizations") or {}

        if not languages:
            removed[target] = list(localizations.keys())
            if not dry_run:
                del strings[target]
            continue

        present = [lang for lang in languages if lang in localizations]
        if not present:
            continue
        removed[target] = present

        if dry_run:
            continue

        remaining = {lang: loc for lang, loc in localizations.items() if lang not in present}
        if remaining:
            unit["localizations"] = remaining
        else:
            del strings[target]

    if removed and not dry_run:
        save(path, data)
        logger.debug("Removed %d key(s) from %s", len(removed), path)

    return removed
