"""Adding strings to a catalog, from flags, ``--strings`` payloads or an editor."""

import logging
from dataclasses import dataclass, field
from typing import Callable

from xcstrings_cli.config import AppConfig, load_config
from xcstrings_cli.errors import ArgumentError
from xcstrings_cli.interactive import capture_interactive_strings_input
from xcstrings_cli.languages import languages
from xcstrings_cli.payload import (
    MultiPayload,
    Payload,
    Translation,
    parse_strings_arg,
    read_stdin_to_string,
    resolve_state,
)
from xcstrings_cli.xcstrings import load, save, sort_localizations

logger = logging.getLogger(__name__)

MULTI_KEY_CONFLICT = (
    "When adding multiple strings via {source}, omit --key, --comment, --text, and --language."
)
KEY_REQUIRED = "--key is required unless the {source} contains multiple keys."


@dataclass
class SupportedLanguages:
    """Lazily computed set of languages the project supports.

    Discovery may parse Xcode project files, so it runs at most once per
    instance no matter how many languages are checked.
    """

    xcstrings_path: str
    config: AppConfig | None = None
    _languages: set[str] | None = field(default=None, init=False, repr=False)

    def get(self) -> set[str]:
        if self._languages is None:
            self._languages = set(languages(self.xcstrings_path, self.config))
        return self._languages

    def __contains__(self, language: str) -> bool:
        return language in self.get()


@dataclass
class AddResult:
    """Outcome of an add command."""

    kind: str
    keys: list[str] = field(default_factory=list)


def _warn_unsupported(language: str) -> None:
    logger.warning(
        'Language "%s" is not supported. Skipped adding its translation (missingLanguagePolicy=skip).',
        language,
    )


def _as_translation(value: Translation | str) -> Translation:
    if isinstance(value, str):
        return Translation(value=value)
    return value


def _string_unit(state: str, value: str) -> dict:
    return {"stringUnit": {"state": state, "value": value}}


def add(
    path: str,
    key: str,
    comment: str | None = None,
    translations: dict[str, Translation | str] | None = None,
    config_path: str | None = None,
    default_text: str | None = None,
    language: str | None = None,
    state: str | None = None,
    supported_languages: SupportedLanguages | None = None,
) -> None:
    """Add or update one key of a catalog.

    The entry keeps whatever it already had, is marked as manually extracted,
    and receives the new comment and localizations. Languages that the
    project does not support are skipped with a warning unless the config's
    ``missingLanguagePolicy`` is ``include``.

    Args:
        path: Catalog file.
        key: Catalog key to add or update.
        comment: Developer comment for translators.
        translations: Translations by language, as strings or Translation.
        config_path: Explicit config file; discovered when omitted.
        default_text: Text for ``language`` (the source language by default).
            It overrides the same language in ``translations``.
        language: Language of ``default_text``.
        state: State for localizations without their own; ``translated``
            when omitted.
        supported_languages: Shared lookup, created for this call if omitted.

    Raises:
        ValueError: If the catalog has no ``sourceLanguage`` or ``state`` is
            invalid.
    """
    data = load(path)

    source_language = data.get("sourceLanguage")
    if not source_language:
        raise ValueError('The xcstrings file is missing "sourceLanguage".')

    if data.get("strings") is None:
        data["strings"] = {}
    strings = data["strings"]

    config = load_config(config_path)
    policy = config.missing_language_policy if config else "skip"
    if supported_languages is None:
        supported_languages = SupportedLanguages(path, config)

    def is_supported(lang: str) -> bool:
        return policy == "include" or lang in supported_languages

    default_state = resolve_state(state)

    unit = dict(strings.get(key) or {})
    unit["extractionState"] = "manual"
    if comment:
        unit["comment"] = comment

    localizations = dict(unit.get("localizations") or {})
    touched = "localizations" in unit

    target_language = language or source_language
    pending = {lang: _as_translation(value) for lang, value in (translations or {}).items()}

    if default_text is not None:
        if is_supported(target_language):
            payload = pending.get(target_language)
            localizations[target_language] = _string_unit(
                payload.state if payload and payload.state else default_state,
                default_text,
            )
            touched = True
        else:
            _warn_unsupported(target_language)

    for lang, payload in pending.items():
        if default_text is not None and lang == target_language:
            continue
        if lang == source_language or is_supported(lang):
            localizations[lang] = _string_unit(payload.state or default_state, payload.value)
            touched = True
        else:
            _warn_unsupported(lang)

    if touched:
        unit["localizations"] = sort_localizations(localizations)

    strings[key] = unit
    save(path, data)
    logger.debug("Saved key %s to %s", key, path)


def _add_payload(
    path: str,
    parsed: Payload | None,
    source: str,
    key: str | None,
    comment: str | None,
    default_text: str | None,
    language: str | None,
    config_path: str | None,
    state: str,
) -> AddResult:
    """Route a parsed payload to one or many ``add`` calls."""
    supported = SupportedLanguages(path, load_config(config_path))

    if isinstance(parsed, MultiPayload):
        if key or comment or default_text is not None or language:
            raise ArgumentError(MULTI_KEY_CONFLICT.format(source=source))
        added: list[str] = []
        for entry_key, entry in parsed.entries.items():
            add(
                path,
                entry_key,
                entry.comment,
                entry.translations,
                config_path,
                state=state,
                supported_languages=supported,
            )
            added.append(entry_key)
        return AddResult(kind="multi", keys=added)

    if not key:
        raise ArgumentError(KEY_REQUIRED.format(source=source))

    translations = parsed.translations if parsed is not None else None
    payload_comment = parsed.comment if parsed is not None else None
    add(
        path,
        key,
        comment if comment is not None else payload_comment,
        translations,
        config_path,
        default_text,
        language,
        state,
        supported_languages=supported,
    )
    return AddResult(kind="single", keys=[key])


def run_interactive_add(
    path: str,
    key: str | None = None,
    comment: str | None = None,
    default_text: str | None = None,
    language: str | None = None,
    config_path: str | None = None,
    state: str = "translated",
    editor: Callable[[], str] = capture_interactive_strings_input,
) -> AddResult:
    """Add strings from a payload typed into the user's editor.

    Raises:
        ValueError: If the editor returned nothing or unparsable text.
    """
    raw = editor()
    if not raw.strip():
        raise ValueError("Interactive input was empty. Provide YAML or JSON payload.")

    try:
        parsed = parse_strings_arg(raw, lambda: "", "auto")
    except ValueError as e:
        raise ValueError(f"Failed to parse interactive input. {e}") from e

    if parsed is None:
        raise ValueError("Interactive input was empty. Provide YAML or JSON payload.")

    return _add_payload(
        path,
        parsed,
        "interactive payload",
        key,
        comment,
        default_text,
        language,
        config_path,
        state,
    )


def run_add_command(
    path: str,
    key: str | None = None,
    comment: str | None = None,
    strings_arg: str | list[str] | bool | None = None,
    strings_format: str = "auto",
    default_text: str | None = None,
    language: str | None = None,
    stdin_reader: Callable[[], str] = read_stdin_to_string,
    config_path: str | None = None,
    state: str | None = None,
    interactive: bool = False,
) -> AddResult:
    """Entry point behind ``xcstrings add``.

    Args:
        path: Catalog file.
        key: ``--key``; required unless the payload holds several keys.
        comment: ``--comment``; wins over a comment inside the payload.
        strings_arg: ``--strings`` value(s), see ``parse_strings_arg``.
        strings_format: ``--strings-format``.
        default_text: ``--text``.
        language: ``--language``.
        stdin_reader: Source of stdin content.
        config_path: ``--config``.
        state: ``--state``.
        interactive: ``--interactive``.

    Returns:
        Which keys were added and whether the payload was multi-key.

    Raises:
        ArgumentError: For conflicting or missing flags.
        ValueError: For invalid states or unparsable payloads.
    """
    resolved_state = resolve_state(state)

    if interactive:
        if strings_arg is not None:
            raise ArgumentError("--interactive cannot be combined with --strings input.")
        return run_interactive_add(
            path,
            key=key,
            comment=comment,
            default_text=default_text,
            language=language,
            config_path=config_path,
            state=resolved_state,
        )

    parsed = parse_strings_arg(strings_arg, stdin_reader, strings_format)
    return _add_payload(
        path,
        parsed,
        "--strings payload",
        key,
        comment,
        default_text,
        language,
        config_path,
        resolved_state,
    )
