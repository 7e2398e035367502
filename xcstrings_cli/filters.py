"""Key and text filters for the ``strings`` command."""

import re
from dataclasses import dataclass
from typing import Callable

from xcstrings_cli.errors import ArgumentError

FILTER_MODES: tuple[str, ...] = ("glob", "regex", "substring")


@dataclass
class FilterSpec:
    """A pattern plus the way it should be matched."""

    pattern: str
    mode: str = "glob"


def glob_to_regex(glob: str) -> str:
    """Translate a glob into a regular expression body.

    Only ``*`` and ``?`` are wildcards; every other character is literal.
    """
    parts: list[str] = []
    for char in glob:
        if char == "*":
            parts.append(".*")
        elif char == "?":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    return "".join(parts)


def build_matcher(spec: FilterSpec | None) -> Callable[[str], bool]:
    """Compile a filter into a predicate over strings.

    Args:
        spec: Filter to compile, or None to accept everything.

    Returns:
        Callable returning True for matching values.

    Raises:
        ValueError: If the mode is unknown or a regex does not compile.
    """
    if spec is None:
        return lambda value: True

    if spec.mode == "substring":
        needle = spec.pattern
        return lambda value: needle in value

    if spec.mode == "regex":
        try:
            regex = re.compile(spec.pattern)
        except re.error as e:
            raise ValueError(f"Invalid regex {spec.pattern!r}: {e}") from e
        return lambda value: regex.search(value) is not None

    if spec.mode == "glob":
        regex = re.compile(glob_to_regex(spec.pattern))
        return lambda value: regex.fullmatch(value) is not None

    raise ValueError(f"Unknown filter mode {spec.mode!r}. Allowed values: {', '.join(FILTER_MODES)}.")


def resolve_filter(
    label: str,
    glob: str | None = None,
    regex: str | None = None,
    substring: str | None = None,
    explicit_glob: str | None = None,
) -> FilterSpec | None:
    """Pick the single filter given for ``label`` (``key`` or ``text``).

    ``glob`` comes from the bare flag (``--key``) and ``explicit_glob`` from
    ``--key-glob``; both count as a glob source.

    Raises:
        ArgumentError: If more than one pattern source was provided.
    """
    provided = [v for v in (glob, explicit_glob, regex, substring) if v is not None]
    if not provided:
        return None
    if len(provided) > 1:
        raise ArgumentError(
            f"Specify only one of --{label}, --{label}-glob, --{label}-regex, --{label}-substring"
        )
    if regex is not None:
        return FilterSpec(pattern=regex, mode="regex")
    if substring is not None:
        return FilterSpec(pattern=substring, mode="substring")
    return FilterSpec(pattern=glob if glob is not None else explicit_glob, mode="glob")
