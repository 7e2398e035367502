"""Resolution of the ``--path`` option against configured catalogs."""

from pathlib import Path
from typing import Callable

from rich.prompt import Prompt

from xcstrings_cli.config import AppConfig, XCStringsPathEntry
from xcstrings_cli.errors import ArgumentError

ALIAS_PREFIX = "alias:"
DEFAULT_FILE_NAME = "Localizable.xcstrings"


def default_path() -> str:
    """Catalog used when neither ``--path`` nor a config names one."""
    return str(Path.cwd() / DEFAULT_FILE_NAME)


def find_alias_path(entries: list[XCStringsPathEntry], alias: str) -> str | None:
    for entry in entries:
        if entry.alias is not None and entry.alias == alias:
            return entry.path
    return None


def select_path(entries: list[XCStringsPathEntry]) -> str:
    """Ask the user which configured catalog to use."""
    labels = [
        f"{entry.alias} ({entry.path})" if entry.alias else entry.path
        for entry in entries
    ]
    choices = [str(i) for i in range(1, len(entries) + 1)]
    prompt = "Select xcstrings file:\n" + "\n".join(
        f"  {i}. {label}" for i, label in zip(choices, labels)
    )
    answer = Prompt.ask(prompt, choices=choices, default="1")
    return entries[int(answer) - 1].path


def resolve_xcstrings_path(
    requested: str | None,
    config: AppConfig | None,
    select: Callable[[list[XCStringsPathEntry]], str] = select_path,
) -> str:
    """Turn the ``--path`` value into a catalog file path.

    Args:
        requested: The ``--path`` value, or None when it was not given.
        config: Loaded configuration, if any.
        select: Called to choose among several configured catalogs.

    Returns:
        The catalog path to operate on.

    Raises:
        ArgumentError: If the value names an alias that is not configured.
    """
    entries = config.xcstrings_paths if config else []

    if requested is not None:
        if requested.startswith(ALIAS_PREFIX):
            alias = requested[len(ALIAS_PREFIX):]
            resolved = find_alias_path(entries, alias)
            if resolved is None:
                raise ArgumentError(f"Unknown alias: {alias}")
            return resolved

        resolved = find_alias_path(entries, requested)
        if resolved is not None:
            return resolved

        has_aliases = any(entry.alias is not None for entry in entries)
        looks_like_alias = "/" not in requested and not requested.endswith(".xcstrings")
        if has_aliases and looks_like_alias:
            raise ArgumentError(f"Unknown alias: {requested}")

        return requested

    if len(entries) == 1:
        return entries[0].path
    if len(entries) > 1:
        return select(entries)

    return default_path()
