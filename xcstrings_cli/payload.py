"""Parsing and normalization of ``--strings`` payloads.

A payload is JSON5 or YAML text describing translations. It comes in two
shapes, decided by ``classify_payload``:

* single: translations for one catalog key given separately with ``--key``,
  e.g. ``{en: Hello, ja: こんにちは}`` or
  ``{translations: {en: Hello}, comment: Greeting}``;
* multi: one entry per catalog key, e.g.
  ``{greeting: {en: Hello, comment: Greeting}, farewell: Bye comment}``.
"""

import re
import sys
from dataclasses import dataclass, field
from typing import Any, Callable

import json5
import yaml

from xcstrings_cli.xcstrings import DEFAULT_STATE, LOCALIZATION_STATES

STRINGS_FORMATS: tuple[str, ...] = ("auto", "json", "yaml")


@dataclass
class Translation:
    """A translated value with an optional explicit state."""

    value: str
    state: str | None = None


@dataclass
class SinglePayload:
    """Translations for a single catalog key."""

    translations: dict[str, Translation] = field(default_factory=dict)
    comment: str | None = None


@dataclass
class MultiEntry:
    """One catalog key's part of a multi-key payload."""

    translations: dict[str, Translation] = field(default_factory=dict)
    comment: str | None = None


@dataclass
class MultiPayload:
    """Entries for several catalog keys, in payload order."""

    entries: dict[str, MultiEntry] = field(default_factory=dict)


Payload = SinglePayload | MultiPayload


def resolve_state(value: str | None) -> str:
    """Validate a localization state, defaulting to ``translated``.

    Raises:
        ValueError: If the value is not one of ``LOCALIZATION_STATES``.
    """
    if value is None:
        return DEFAULT_STATE
    if value in LOCALIZATION_STATES:
        return value
    raise ValueError(
        f'Invalid state "{value}". Allowed values: {", ".join(LOCALIZATION_STATES)}.'
    )


class _PayloadLoader(yaml.SafeLoader):
    """SafeLoader resolving plain scalars by the YAML 1.2 core schema.

    Values such as ``no`` (Norwegian), ``10:30`` or ``2024-01-01`` stay
    strings instead of becoming booleans, sexagesimal ints or dates.
    """

    yaml_implicit_resolvers: dict = {}


_CORE_SCHEMA_RESOLVERS = (
    ("tag:yaml.org,2002:null", r"^(?:~|null|Null|NULL|)$", ["~", "n", "N", ""]),
    ("tag:yaml.org,2002:bool", r"^(?:true|True|TRUE|false|False|FALSE)$", list("tTfF")),
    ("tag:yaml.org,2002:int", r"^(?:[-+]?(?:0|[1-9][0-9]*)|0x[0-9a-fA-F]+)$", list("-+0123456789")),
    (
        "tag:yaml.org,2002:float",
        r"^(?:[-+]?(?:\.[0-9]+|[0-9]+(?:\.[0-9]*)?)(?:[eE][-+]?[0-9]+)?"
        r"|[-+]?\.(?:inf|Inf|INF)|\.(?:nan|NaN|NAN))$",
        list("-+.0123456789"),
    ),
)

for _tag, _pattern, _first in _CORE_SCHEMA_RESOLVERS:
    _PayloadLoader.add_implicit_resolver(_tag, re.compile(_pattern), _first)


def _ensure_object(value: Any, kind: str) -> dict:
    if isinstance(value, dict):
        return value
    raise ValueError(f"Parsed --strings as {kind}, but it was not an object.")


def _load_yaml(text: str) -> dict:
    return _ensure_object(yaml.load(text, Loader=_PayloadLoader), "yaml")


def _load_json5(text: str) -> dict:
    return _ensure_object(json5.loads(text), "json")


def parse_content(content: str, fmt: str = "auto") -> dict:
    """Parse payload text into a mapping.

    Args:
        content: Raw JSON5 or YAML text.
        fmt: ``json`` (JSON5), ``yaml``, or ``auto`` to try YAML then JSON5.

    Returns:
        The parsed mapping; empty for blank input.

    Raises:
        ValueError: If the text cannot be parsed, with a hint about
            ``--strings-format``.
    """
    trimmed = content.strip()
    if not trimmed:
        return {}

    if fmt == "json":
        try:
            return _load_json5(trimmed)
        except ValueError as e:
            raise ValueError(
                f"Failed to parse --strings as JSON. Hint: check --strings-format=json. {e}"
            ) from e

    if fmt == "yaml":
        try:
            return _load_yaml(trimmed)
        except (ValueError, yaml.YAMLError) as e:
            raise ValueError(
                f"Failed to parse --strings as YAML. Hint: check --strings-format=yaml. {e}"
            ) from e

    if fmt != "auto":
        raise ValueError(
            f'Invalid --strings-format "{fmt}". Allowed values: {", ".join(STRINGS_FORMATS)}.'
        )

    errors: list[str] = []
    try:
        return _load_yaml(trimmed)
    except (ValueError, yaml.YAMLError) as e:
        errors.append(f"yaml error: {e}")
    try:
        return _load_json5(trimmed)
    except ValueError as e:
        errors.append(f"json error: {e}")
    raise ValueError(
        "Failed to parse --strings input. Provide valid YAML or JSON, "
        f"or specify --strings-format. {' | '.join(errors)}"
    )


def is_translation_value(value: Any) -> bool:
    """Tell whether a value looks like one language's translation."""
    if isinstance(value, str):
        return True
    if isinstance(value, dict):
        return isinstance(value.get("value"), str) and (
            "state" not in value or isinstance(value["state"], str)
        )
    return False


def normalize_translation(value: Any, context: str) -> Translation:
    """Turn a string or ``{value, state}`` mapping into a Translation."""
    if isinstance(value, str):
        return Translation(value=value)
    if isinstance(value, dict):
        if not isinstance(value.get("value"), str):
            raise ValueError(f'{context} must include a string "value".')
        state = value.get("state")
        return Translation(
            value=value["value"],
            state=resolve_state(str(state)) if state is not None else None,
        )
    raise ValueError(f'{context} must be a string or an object with "value" (and optional "state").')


def normalize_translations(value: Any, context: str) -> dict[str, Translation]:
    """Normalize a ``language -> translation`` mapping."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"{context} must be an object of language -> text.")
    return {
        str(lang): normalize_translation(text, f'{context} for "{lang}"')
        for lang, text in value.items()
    }


def _normalize_multi_entry(value: Any, key: str) -> MultiEntry:
    if value is None:
        return MultiEntry()
    if isinstance(value, str):
        return MultiEntry(comment=value)
    if not isinstance(value, dict):
        raise ValueError(f'Value for "{key}" must be an object.')

    comment = value.get("comment") if isinstance(value.get("comment"), str) else None
    translations = normalize_translations(value.get("translations"), f'translations for "{key}"')
    for lang, text in value.items():
        if lang in ("comment", "translations"):
            continue
        # inline pairs override the explicit translations map
        translations[str(lang)] = normalize_translation(text, f'Translation for "{lang}" in "{key}"')

    return MultiEntry(translations=translations, comment=comment)


def classify_payload(obj: dict) -> Payload:
    """Classify a parsed payload as single-key or multi-key.

    Rules are applied in order:

    1. every value is a translation value -> single;
    2. only ``translations``/``comment`` keys, ``translations`` present -> single;
    3. anything else -> multi, one entry per top-level key.

    Args:
        obj: Parsed payload mapping.

    Returns:
        A SinglePayload or MultiPayload.
    """
    if all(is_translation_value(v) for v in obj.values()):
        return SinglePayload(translations=normalize_translations(obj, "translations"))

    if "translations" in obj and set(obj) <= {"translations", "comment"}:
        comment = obj.get("comment") if isinstance(obj.get("comment"), str) else None
        return SinglePayload(
            translations=normalize_translations(obj["translations"], "translations"),
            comment=comment,
        )

    return MultiPayload(
        entries={str(key): _normalize_multi_entry(value, str(key)) for key, value in obj.items()}
    )


def merge_payloads(base: Payload | None, new: Payload) -> Payload:
    """Merge two payloads of the same shape.

    Translations are unioned with later values winning; the first defined
    comment wins.

    Raises:
        ValueError: If one payload is single and the other multi.
    """
    if base is None:
        return new

    if isinstance(base, SinglePayload) and isinstance(new, SinglePayload):
        return SinglePayload(
            translations={**base.translations, **new.translations},
            comment=base.comment if base.comment is not None else new.comment,
        )

    if isinstance(base, MultiPayload) and isinstance(new, MultiPayload):
        entries = dict(base.entries)
        for key, entry in new.entries.items():
            prev = entries.get(key) or MultiEntry()
            entries[key] = MultiEntry(
                translations={**prev.translations, **entry.translations},
                comment=prev.comment if prev.comment is not None else entry.comment,
            )
        return MultiPayload(entries=entries)

    raise ValueError("Cannot merge single and multi --strings payloads. Provide one consistent shape.")


def read_stdin_to_string() -> str:
    """Read all of standard input."""
    return sys.stdin.read()


def parse_strings_arg(
    strings_arg: str | list[str] | bool | None,
    stdin_reader: Callable[[], str] = read_stdin_to_string,
    fmt: str = "auto",
) -> Payload | None:
    """Parse the value(s) given with ``--strings``.

    Args:
        strings_arg: None when the flag is absent; True or an empty string
            to read the payload from stdin; a string payload; or a list of
            payloads when the flag was repeated.
        stdin_reader: Callable returning stdin content.
        fmt: Payload format, see ``parse_content``.

    Returns:
        The merged payload, or None when nothing was provided.
    """
    if strings_arg is None or strings_arg is False:
        return None

    def parse_one(raw: str) -> Payload | None:
        if not raw.strip():
            return None
        return classify_payload(parse_content(raw, fmt))

    if strings_arg is True or strings_arg == "":
        return parse_one(stdin_reader())

    if isinstance(strings_arg, str):
        return parse_one(strings_arg)

    merged: Payload | None = None
    for item in strings_arg:
        parsed = parse_one(stdin_reader() if item == "" else item)
        if parsed is not None:
            merged = merge_payloads(merged, parsed)
    return merged
