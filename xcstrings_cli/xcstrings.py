"""Reader and writer for Apple .xcstrings localization catalogs."""

import json
from pathlib import Path

LOCALIZATION_STATES: tuple[str, ...] = ("translated", "needs_review", "new", "stale")

DEFAULT_STATE = "translated"


def load(path: str) -> dict:
    """Load and parse an .xcstrings JSON file.

    Args:
        path: File path to the .xcstrings file.

    Returns:
        Parsed JSON data as a dictionary, keys in file order.

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the file contains invalid JSON.
    """
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"XCStrings file not found: {path}")

    with open(file_path, "r", encoding="utf-8") as f:
        return json.load(f)


def format_xcstrings(text: str) -> str:
    """Insert a space before every structural colon of a JSON document.

    Xcode writes catalogs as ``"key" : "value"``. Colons that sit inside
    string literals are left alone, including ones following an escaped quote.

    Args:
        text: JSON produced by ``json.dumps(..., indent=2)``.

    Returns:
        The same document with Xcode's colon spacing.
    """
    out: list[str] = []
    in_string = False
    escape = False

    for char in text:
        if in_string and char == "\\" and not escape:
            escape = True
            out.append(char)
            continue
        if escape:
            escape = False
            out.append(char)
            continue
        if char == '"':
            in_string = not in_string
            out.append(char)
            continue
        if not in_string and char == ":":
            out.append(" :")
            continue
        out.append(char)

    return "".join(out)


def dumps(data: dict) -> str:
    """Serialize catalog data the way Xcode does, without trailing newline."""
    return format_xcstrings(json.dumps(data, indent=2, ensure_ascii=False))


def save(path: str, data: dict) -> None:
    """Save xcstrings data back to a JSON file.

    Uses Apple's formatting conventions: 2-space indentation,
    ``" : "`` separators, and a trailing newline. Key order is kept.

    Args:
        path: File path to write to.
        data: The xcstrings data dictionary.
    """
    with open(path, "w", encoding="utf-8") as f:
        f.write(dumps(data))
        f.write("\n")


def sort_localizations(localizations: dict) -> dict:
    """Return localizations ordered by language tag, ignoring case."""
    return dict(sorted(localizations.items(), key=lambda item: (item[0].lower(), item[0])))


def detect_languages(data: dict) -> set[str]:
    """Detect all language codes present in the xcstrings data.

    Args:
        data: Parsed xcstrings data.

    Returns:
        Set of language codes used by any localization, plus the
        catalog's source language when declared.
    """
    languages: set[str] = set()
    strings = data.get("strings") or {}

    for _key, entry in strings.items():
        localizations = (entry or {}).get("localizations") or {}
        languages.update(localizations.keys())

    source_language = data.get("sourceLanguage")
    if source_language:
        languages.add(source_language)

    return languages
