"""Settings file management with validation and change notifications."""

from __future__ import annotations

import os
import sys
from copy import deepcopy
from pathlib import Path
from typing import Any, Optional

from jsonschema import ValidationError

from ..config import APP_DIR_NAME
from ..errors import GeoPhotoError, SettingsLoadError, SettingsValidationError
from ..events.bus import EventBus
from ..events.map_events import SettingChangedEvent
from ..utils.jsonio import read_json, write_json
from ..utils.logging import get_logger
from .schema import DEFAULT_SETTINGS, merge_with_defaults, validate_settings

LOGGER = get_logger(__name__)


def default_settings_path() -> Path:
    """Return the default settings.json location for the current platform."""

    if os.name == "nt":
        base = os.environ.get("APPDATA")
        if base:
            return Path(base) / APP_DIR_NAME / "settings.json"
        return Path.home() / "AppData" / "Roaming" / APP_DIR_NAME / "settings.json"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_DIR_NAME / "settings.json"
    base = os.environ.get("XDG_CONFIG_HOME")
    if base:
        return Path(base) / APP_DIR_NAME / "settings.json"
    return Path.home() / ".config" / APP_DIR_NAME / "settings.json"


class SettingsManager:
    """Load, validate and persist user settings for the application."""

    def __init__(self, path: Path | None = None, event_bus: Optional[EventBus] = None) -> None:
        self._path = path
        self._events = event_bus
        self._data: dict[str, Any] = deepcopy(DEFAULT_SETTINGS)

    @property
    def path(self) -> Path | None:
        return self._path

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def load(self) -> None:
        """Load the settings JSON from disk, creating defaults if missing."""

        path = self._path or default_settings_path()
        self._path = path
        if path.exists():
            try:
                payload = read_json(path)
            except GeoPhotoError as exc:
                raise SettingsLoadError(str(exc)) from exc
            if not isinstance(payload, dict):
                raise SettingsLoadError(f"Settings file must contain a JSON object: {path}")
        else:
            payload = None
        try:
            self._data = merge_with_defaults(payload)
        except ValidationError as exc:
            raise SettingsValidationError(exc.message) from exc
        self._write()
        LOGGER.debug("Loaded settings from %s", path)

    def get(self, key: str, default: Any | None = None) -> Any:
        """Return the value for *key*, supporting dotted access for nested keys."""

        target = self._data
        parts = key.split(".")
        for index, part in enumerate(parts):
            if not isinstance(target, dict) or part not in target:
                return default
            value = target[part]
            if index == len(parts) - 1:
                return deepcopy(value)
            target = value
        return default

    def set(self, key: str, value: Any) -> None:
        """Update *key* with *value*, validate, persist and announce the change."""

        if isinstance(value, Path):
            value = str(value)

        candidate = deepcopy(self._data)
        parts = key.split(".")
        target: dict[str, Any] = candidate
        for part in parts[:-1]:
            branch = target.get(part)
            if not isinstance(branch, dict):
                branch = {}
                target[part] = branch
            target = branch
        target[parts[-1]] = value
        try:
            validate_settings(candidate)
        except ValidationError as exc:
            raise SettingsValidationError(f"{key}: {exc.message}") from exc

        self._data = candidate
        self._write()
        if self._events is not None:
            self._events.publish(SettingChangedEvent(key=key, value=deepcopy(value)))

    def as_dict(self) -> dict[str, Any]:
        return deepcopy(self._data)

    def _write(self) -> None:
        if self._path is None:
            return
        try:
            write_json(self._path, self._data)
        except GeoPhotoError as exc:
            # Settings stay usable in memory even when the disk is read-only.
            LOGGER.warning("Unable to persist settings to %s: %s", self._path, exc)


__all__ = ["SettingsManager", "default_settings_path"]
