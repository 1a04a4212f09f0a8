# File: store.py
"""Handles persistent storage of Nudge settings.

Stores the settings document as one JSON file. Writes go to a temporary file
in the same directory which then replaces the target, so a crash never
leaves a truncated document behind. The store assumes a single writer.
"""

from __future__ import annotations

from collections.abc import Callable
import json
import os
from pathlib import Path
import tempfile
from zoneinfo import ZoneInfo

import voluptuous as vol

from . import const
from .data_builders import build_settings
from .helpers.export_helpers import (
    SettingsImportError,
    export_settings_json,
    import_settings_json,
)
from .models import NotificationItem, NotificationSettings


class SettingsStore:
    """Handles persistent storage operations for Nudge settings.

    Thin wrapper around a JSON file with the item-level operations the editor
    needs. Every mutating call loads the current document, applies the change,
    saves, and returns the new settings.
    """

    def __init__(self, path: str | Path, *, tz: ZoneInfo | None = None) -> None:
        """Initialize the store.

        Args:
            path: JSON file path. A directory path stores STORAGE_FILE_NAME in it.
            tz: Optional timezone for epoch millis ↔ calendar day conversion.
        """
        path = Path(path)
        if path.is_dir():
            path = path / const.STORAGE_FILE_NAME
        self._path = path
        self._tz = tz

    @property
    def path(self) -> Path:
        """Location of the settings document."""
        return self._path

    @staticmethod
    def get_default_structure() -> NotificationSettings:
        """Return the settings of a fresh installation (one default item)."""
        return NotificationSettings()

    def load(self) -> NotificationSettings:
        """Load settings from disk.

        A missing file yields default settings. A corrupt file is logged and
        also yields default settings; it is left in place untouched.
        """
        return self._load_or(self.get_default_structure)

    def _load_or(
        self, fallback: Callable[[], NotificationSettings]
    ) -> NotificationSettings:
        if not self._path.exists():
            const.LOGGER.debug("SettingsStore: No settings at %s, using defaults", self._path)
            return fallback()
        try:
            data = json.loads(self._path.read_text(encoding=const.STORAGE_ENCODING))
            if not isinstance(data, dict):
                raise vol.Invalid("settings document must be a JSON object")
            return build_settings(data, tz=self._tz)
        except (
            OSError,
            UnicodeDecodeError,
            json.JSONDecodeError,
            vol.Invalid,
        ) as err:
            const.LOGGER.warning(
                "SettingsStore: Could not read %s, using defaults: %s", self._path, err
            )
            return fallback()

    def save(self, settings: NotificationSettings) -> None:
        """Write settings to disk atomically."""
        self._write(export_settings_json(settings, tz=self._tz, indent=None))
        const.LOGGER.debug(
            "SettingsStore: Saved %s item(s) to %s", len(settings.items), self._path
        )

    def _write(self, content: str) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self._path.name}.", suffix=".tmp", dir=self._path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding=const.STORAGE_ENCODING) as tmp_file:
                tmp_file.write(content)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    # -------------------------------------------------------------------------------------
    # Item operations
    # -------------------------------------------------------------------------------------

    def add_item(self) -> NotificationSettings:
        """Append a new default item named "Notification N+1".

        Counts from an empty list when nothing is stored yet.
        """
        current = self._load_or(lambda: NotificationSettings(items=()))
        item = NotificationItem.create_default(
            name=f"{const.DEFAULT_ITEM_NAME} {len(current.items) + 1}"
        )
        updated = NotificationSettings(items=(*current.items, item))
        self.save(updated)
        return updated

    def delete_item(self, item_id: str) -> NotificationSettings:
        """Remove the item with the given id (no-op if absent)."""
        current = self.load()
        updated = NotificationSettings(
            items=tuple(item for item in current.items if item.id != item_id)
        )
        self.save(updated)
        return updated

    def update_item(self, item: NotificationItem) -> NotificationSettings:
        """Replace the stored item with the same id (no-op if absent)."""
        current = self.load()
        updated = NotificationSettings(
            items=tuple(item if stored.id == item.id else stored for stored in current.items)
        )
        self.save(updated)
        return updated

    # -------------------------------------------------------------------------------------
    # Import / export
    # -------------------------------------------------------------------------------------

    def export_json(self) -> str:
        """Export the stored settings (defaults if nothing is stored)."""
        return export_settings_json(self.load(), tz=self._tz)

    def import_json(self, json_str: str) -> bool:
        """Replace stored settings with an imported document.

        Returns:
            True on success. False if the document is invalid; stored
            settings are then left unchanged.
        """
        try:
            settings = import_settings_json(json_str, tz=self._tz)
        except SettingsImportError as err:
            const.LOGGER.warning("SettingsStore: Import rejected: %s", err)
            return False
        self.save(settings)
        return True
