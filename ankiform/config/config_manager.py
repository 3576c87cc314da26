"""Persistent settings store backed by a JSON key-value file."""

import json
import os
import uuid
from pathlib import Path
from threading import Lock
from typing import Any, Dict, Optional

from ..errors import ConfigLoadError
from ..utils.logger import setup_logger
from .note_settings import DEFAULT_SETTINGS, NoteSettings, normalize
from .settings import Config

logger = setup_logger(__name__)


class SettingsManager:
    """
    Loads and saves NoteSettings as a named blob in a local JSON file.

    The file maps blob names to JSON values, so other named blobs can live
    next to the settings. Loading never fails: a missing or corrupt file
    yields the defaults.

    Usage:
        store = SettingsManager()
        settings = store.load()
        store.save(settings.with_changes(deck_name="Spanish"))
    """

    def __init__(self, settings_file: Optional[str] = None, key: Optional[str] = None) -> None:
        """
        Initialize the settings store.

        Args:
            settings_file: Path to the JSON file (defaults to Config.SETTINGS_FILE)
            key: Blob name holding the settings (defaults to Config.SETTINGS_KEY)
        """
        self._settings_file: Path = Path(settings_file or Config.SETTINGS_FILE)
        self._key: str = key or Config.SETTINGS_KEY
        self._file_lock: Lock = Lock()

    @property
    def settings_file(self) -> Path:
        return self._settings_file

    def _read_blobs(self) -> Dict[str, Any]:
        """Read every blob from disk. Raises ConfigLoadError on any problem."""
        if not self._settings_file.exists():
            raise ConfigLoadError(f"{self._settings_file} does not exist")
        try:
            with open(self._settings_file, "r", encoding="utf-8") as f:
                blobs = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
            raise ConfigLoadError(f"could not read {self._settings_file}: {e}") from e
        if not isinstance(blobs, dict):
            raise ConfigLoadError(f"{self._settings_file} does not hold a JSON object")
        return blobs

    def load_json(self, key: str, fallback: Any) -> Any:
        """
        Load a named blob, returning `fallback` when it cannot be read.

        Args:
            key: Blob name
            fallback: Value returned when the file or blob is unavailable
        """
        try:
            blobs = self._read_blobs()
        except ConfigLoadError as e:
            logger.warning("Using defaults for '%s': %s", key, e)
            return fallback
        if key not in blobs:
            return fallback
        return blobs[key]

    def save_json(self, key: str, value: Any) -> None:
        """Write a named blob, keeping the others. Atomic: temp file + rename."""
        with self._file_lock:
            try:
                blobs = self._read_blobs()
            except ConfigLoadError:
                blobs = {}
            blobs[key] = value

            self._settings_file.parent.mkdir(parents=True, exist_ok=True)
            temp_file = f"{self._settings_file}.{uuid.uuid4().hex[:8]}.tmp"
            try:
                with open(temp_file, "w", encoding="utf-8") as f:
                    json.dump(blobs, f, indent=2, ensure_ascii=False)
                os.replace(temp_file, self._settings_file)
            finally:
                if os.path.exists(temp_file):
                    os.remove(temp_file)

    def load(self) -> NoteSettings:
        """Load the stored settings, normalized. Falls back to defaults."""
        raw = self.load_json(self._key, None)
        if raw is None:
            return DEFAULT_SETTINGS
        if not isinstance(raw, dict):
            logger.warning("Stored settings are not an object, using defaults")
            return DEFAULT_SETTINGS
        return normalize(raw)

    def save(self, settings: NoteSettings) -> NoteSettings:
        """
        Normalize and persist settings.

        Returns:
            The normalized settings that were written
        """
        normalized = normalize(settings.to_dict())
        self.save_json(self._key, normalized.to_dict())
        logger.info("Settings saved to %s", self._settings_file)
        return normalized

    def reset(self) -> NoteSettings:
        """Overwrite the stored settings with the defaults."""
        return self.save(DEFAULT_SETTINGS)
