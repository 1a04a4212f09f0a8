"""Import/export utilities for Nudge settings.

Handles the JSON document users share between devices. Export writes every
field of every item; import accepts documents from any app version (missing
keys get defaults, unknown keys are ignored) but never hands the engines a
half-parsed item: a document either builds completely or raises.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo

import voluptuous as vol

from .. import const
from ..data_builders import SETTINGS_SCHEMA, build_settings, settings_to_data
from ..models import NotificationSettings


class SettingsImportError(Exception):
    """Raised when a settings document cannot be imported.

    Wraps the underlying JSON or schema error, available as ``__cause__``.
    """


def _read_text_file(path: str | Path) -> str:
    """Read a UTF-8 text file from disk."""
    return Path(path).read_text(encoding=const.STORAGE_ENCODING)


def _write_text_file(path: str | Path, content: str) -> None:
    """Write UTF-8 text content to disk."""
    Path(path).write_text(content, encoding=const.STORAGE_ENCODING)


def export_settings_json(
    settings: NotificationSettings,
    *,
    tz: ZoneInfo | None = None,
    indent: int | None = const.EXPORT_JSON_INDENT,
) -> str:
    """Serialize settings to a JSON document.

    Args:
        settings: Settings to export
        tz: Optional timezone for calendar day → epoch millis conversion
        indent: JSON indent (None for compact output)

    Returns:
        JSON string with a top-level "items" list
    """
    return json.dumps(
        settings_to_data(settings, tz=tz), indent=indent, ensure_ascii=False
    )


def _decode_document(json_str: str) -> dict[str, Any]:
    """Parse JSON and require a top-level object."""
    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as err:
        raise SettingsImportError(f"Invalid JSON: {err}") from err
    if not isinstance(data, dict):
        raise SettingsImportError("Settings document must be a JSON object")
    return data


def import_settings_json(
    json_str: str, *, tz: ZoneInfo | None = None
) -> NotificationSettings:
    """Parse and validate a settings document.

    Args:
        json_str: JSON document
        tz: Optional timezone for epoch millis → calendar day conversion

    Returns:
        The imported settings

    Raises:
        SettingsImportError: If the JSON is malformed or fails the schema
    """
    data = _decode_document(json_str)
    try:
        settings = build_settings(data, tz=tz)
    except vol.Invalid as err:
        raise SettingsImportError(f"Invalid settings: {err}") from err

    const.LOGGER.debug("Imported %s notification item(s)", len(settings.items))
    return settings


def validate_settings_json(json_str: str) -> bool:
    """Validate a settings document without building it.

    Args:
        json_str: JSON string to validate

    Returns:
        True if the JSON parses and matches SETTINGS_SCHEMA.
        False if JSON is malformed or violates the schema.
    """
    try:
        SETTINGS_SCHEMA(_decode_document(json_str))
    except SettingsImportError as ex:
        const.LOGGER.debug("Invalid settings JSON: %s", ex)
        return False
    except vol.Invalid as ex:
        const.LOGGER.debug("Settings JSON failed schema validation: %s", ex)
        return False
    return True


def export_settings_file(
    settings: NotificationSettings, path: str | Path, *, tz: ZoneInfo | None = None
) -> None:
    """Write an export document to a file."""
    _write_text_file(path, export_settings_json(settings, tz=tz))


def import_settings_file(
    path: str | Path, *, tz: ZoneInfo | None = None
) -> NotificationSettings:
    """Read and import an export document from a file.

    Raises:
        SettingsImportError: If the file content cannot be imported,
            including content that is not UTF-8
        OSError: If the file cannot be read
    """
    try:
        content = _read_text_file(path)
    except UnicodeDecodeError as err:
        raise SettingsImportError(f"Settings file is not UTF-8: {err}") from err
    return import_settings_json(content, tz=tz)
