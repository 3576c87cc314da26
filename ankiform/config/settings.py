"""Global settings and configuration."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

from dotenv import load_dotenv

# Load from project root
_env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(_env_path)


def _env_float(key: str, default: float) -> float:
    """Read a float from the environment, falling back on bad values."""
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


@dataclass
class Config:
    """Application-wide configuration."""

    # AnkiConnect endpoint
    ANKI_CONNECT_URL: str = os.environ.get("ANKI_CONNECT_URL", "http://127.0.0.1:8765")
    ANKI_CONNECT_VERSION: int = 6

    # Timeouts (seconds)
    REQUEST_TIMEOUT: float = _env_float("ANKI_REQUEST_TIMEOUT", 5.0)
    PROBE_TIMEOUT: float = 2.0
    PROBE_INTERVAL: float = _env_float("ANKI_PROBE_INTERVAL", 5.0)

    # Media
    MEDIA_PREFIX: str = "_"
    MAX_MEDIA_BYTES: int = 50 * 1024 * 1024

    # Every note created by this client carries this tag
    NOTE_TAGS: Tuple[str, ...] = ("web-creator",)

    # Cross-platform paths using pathlib
    BASE_DIR: Path = Path(__file__).parent.parent.parent.resolve()

    # Local key-value store for persisted settings
    SETTINGS_FILE: str = os.environ.get(
        "ANKIFORM_SETTINGS_FILE", str(BASE_DIR / "data" / "storage.json")
    )
    SETTINGS_KEY: str = "anki_settings_v1"

    LOG_LEVEL: str = os.environ.get("ANKIFORM_LOG_LEVEL", "INFO")
