"""Listing catalog strings with key, text and language filters."""

import json
import re

from xcstrings_cli.filters import FilterSpec, build_matcher
from xcstrings_cli.xcstrings import load

TEMPLATE_VARIABLES: tuple[str, ...] = ("language", "key", "text")

_VARIABLE_ALTERNATION = "|".join(TEMPLATE_VARIABLES)
_PLACEHOLDER_PATTERN = re.compile(
    r"\{\{\s*(%s)\s*\}\}|\{(%s)\}" % (_VARIABLE_ALTERNATION, _VARIABLE_ALTERNATION)
)


def render_template(template: str, language: str, key: str, text: str) -> str:
    """Fill ``{{language}}``, ``{{key}}`` and ``{{text}}`` into a template.

    Single-brace forms (``{text}``) work too. Values are inserted verbatim;
    anything else in braces is left as written.
    """
    context = {"language": language, "key": key, "text": text}
    return _PLACEHOLDER_PATTERN.sub(lambda m: context[m.group(1) or m.group(2)], template)


def list_strings(
    path: str,
    languages: list[str] | None = None,
    key_filter: FilterSpec | None = None,
    text_filter: FilterSpec | None = None,
    fmt: str | None = None,
) -> str:
    """Render the strings of a catalog, filtered.

    Keys keep their catalog order and localizations their stored order.
    Without ``fmt`` each key with surviving localizations is printed as a
    ``key:`` header followed by ``  lang: "text"`` lines. With ``fmt`` every
    surviving localization becomes one rendered line.

    Args:
        path: Catalog file.
        languages: Only include these languages.
        key_filter: Filter applied to keys.
        text_filter: Filter applied to each localization's value.
        fmt: Template for one line per localization.

    Returns:
        The output lines joined with newlines (empty when nothing matched).
    """
    data = load(path)
    strings = data.get("strings") or {}

    match_key = build_matcher(key_filter)
    match_text = build_matcher(text_filter)
    language_set = set(languages) if languages else None

    lines: list[str] = []

    for key, unit in strings.items():
        if not match_key(key):
            continue

        localizations = (unit or {}).get("localizations") or {}
        per_key: list[str] = []

        for lang, localization in localizations.items():
            if language_set is not None and lang not in language_set:
                continue
            text = ((localization or {}).get("stringUnit") or {}).get("value") or ""
            if not match_text(text):
                continue

            if fmt:
                per_key.append(render_template(fmt, language=lang, key=key, text=text))
            else:
                per_key.append(f"  {lang}: {json.dumps(text, ensure_ascii=False)}")

        if not per_key:
            continue

        if not fmt:
            lines.append(f"{key}:")
        lines.extend(per_key)

    return "\n".join(lines)
