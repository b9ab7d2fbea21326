"""Persistent user preferences.

Settings live in a JSON file in the OS-appropriate config directory and
are read once per session.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .constants import EditorConstants

logger = logging.getLogger(__name__)

DEFAULTS: Dict[str, Any] = {
    "quit_times": EditorConstants.QUIT_TIMES,
    "message_timeout": EditorConstants.MESSAGE_TIMEOUT,
}


class Settings:
    """User preferences read from ``settings.json``.

    Values that fail validation fall back to the defaults.
    """

    def __init__(self, config_dir: Optional[Path] = None):
        self._config_dir = config_dir or Path(platformdirs.user_config_dir("quill"))
        self._cache: Optional[Dict[str, Any]] = None

    @property
    def path(self) -> Path:
        return self._config_dir / "settings.json"

    def _load(self) -> Dict[str, Any]:
        """Load settings from disk, once.

        Returns an empty dict if the file doesn't exist or can't be read.
        """
        if self._cache is not None:
            return self._cache

        if not self.path.exists():
            self._cache = {}
            return self._cache

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Could not load settings from {self.path}: {e}")
            self._cache = {}
            return self._cache

        if not isinstance(data, dict):
            logger.warning("Settings file has invalid format (not a dict), ignoring")
            data = {}
        self._cache = data
        return self._cache

    def get(self, key: str) -> Any:
        """Return a setting, or its default if unset or invalid."""
        value = self._load().get(key, DEFAULTS.get(key))
        if not self.validate(key, value):
            logger.warning(f"Invalid value {value!r} for setting {key}, using default")
            return DEFAULTS.get(key)
        return value

    @staticmethod
    def validate(key: str, value: Any) -> bool:
        """Check a value against the allowed range for its key."""
        if value is None:
            return key not in DEFAULTS
        if key == "quit_times":
            return isinstance(value, int) and not isinstance(value, bool) and 1 <= value <= 10
        if key == "message_timeout":
            return (isinstance(value, (int, float)) and not isinstance(value, bool)
                    and 1 <= value <= 60)
        # Unknown settings are considered valid (forward compatibility)
        return True

    @property
    def quit_times(self) -> int:
        return self.get("quit_times")

    @property
    def message_timeout(self) -> float:
        return self.get("message_timeout")


# Global instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the shared Settings instance used by the command line entry point."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
