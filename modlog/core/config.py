"""Configuration persistence using JSON format.

Settings are stored at ``~/.modlog/config.json`` and deep-merged over
:data:`DEFAULT_CONFIG`, so keys added in newer versions get their defaults.
Log entries themselves are never persisted.
"""

from __future__ import annotations

import copy
import json
import logging
from pathlib import Path
from typing import Any

from .constants import (
    MAX_NUMBER_LINES,
    PREVIEW_LENGTH,
    SHORT_TITLE,
    TIME_FORMAT,
    TITLE,
    TRIM_BATCH,
)

log = logging.getLogger(__name__)


# Default configuration schema
DEFAULT_CONFIG = {
    "version": "1.0",
    "log": {
        "max_lines": MAX_NUMBER_LINES,
        "trim_batch": TRIM_BATCH,  # rendered lines dropped per trim
        "preview_length": PREVIEW_LENGTH,  # deleted-message preview chars
        "time_format": TIME_FORMAT,
    },
    "window": {
        "geometry": None,  # QByteArray base64
    },
    "ui": {
        "title": TITLE,
        "short_title": SHORT_TITLE,
    },
}


class ConfigManager:
    """Manages user configuration with JSON persistence."""

    def __init__(self, config_dir: Path | None = None) -> None:
        """Initialize config manager.

        Args:
            config_dir: Custom config directory. If None, uses ~/.modlog/
        """
        if config_dir is None:
            config_dir = Path.home() / ".modlog"
        self.config_dir = config_dir
        self.config_file = config_dir / "config.json"
        self._config: dict[str, Any] = {}
        self._load()

    def _load(self) -> None:
        """Load config from disk or create default."""
        self.config_dir.mkdir(parents=True, exist_ok=True)

        if self.config_file.exists():
            try:
                with open(self.config_file, encoding="utf-8") as f:
                    loaded = json.load(f)
                self._config = self._merge_defaults(loaded)
            except (json.JSONDecodeError, OSError) as e:
                log.warning("Failed to load config: %s. Using defaults.", e)
                self._config = copy.deepcopy(DEFAULT_CONFIG)
        else:
            self._config = copy.deepcopy(DEFAULT_CONFIG)
            self._save()

    def _merge_defaults(self, loaded: dict) -> dict:
        """Recursively merge loaded config with defaults."""
        def deep_merge(base: dict, override: dict) -> dict:
            merged = copy.deepcopy(base)
            for key, value in override.items():
                if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
                    merged[key] = deep_merge(merged[key], value)
                else:
                    merged[key] = value
            return merged

        if not isinstance(loaded, dict):
            log.warning("Config root is not an object. Using defaults.")
            return copy.deepcopy(DEFAULT_CONFIG)
        return deep_merge(DEFAULT_CONFIG, loaded)

    def _save(self) -> None:
        """Write config to disk."""
        try:
            with open(self.config_file, "w", encoding="utf-8") as f:
                json.dump(self._config, f, indent=2, ensure_ascii=False)
        except OSError as e:
            log.warning("Failed to save config: %s", e)

    def get(self, key_path: str, default: Any = None) -> Any:
        """Get config value using dot notation.

        Example:
            config.get("log.max_lines")
            config.get("window.geometry", None)
        """
        keys = key_path.split(".")
        value = self._config
        for key in keys:
            if isinstance(value, dict):
                value = value.get(key)
                if value is None:
                    return default
            else:
                return default
        return value

    def get_positive_int(self, key_path: str) -> int:
        """Get a count setting, falling back to its default when not a positive int."""
        default = self._default_for(key_path)
        value = self.get(key_path)
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            log.warning("Invalid %s in config: %r. Using %d.", key_path, value, default)
            return default
        return value

    @staticmethod
    def _default_for(key_path: str) -> Any:
        value: Any = DEFAULT_CONFIG
        for key in key_path.split("."):
            value = value[key]
        return value

    def set(self, key_path: str, value: Any) -> None:
        """Set config value using dot notation and save."""
        keys = key_path.split(".")
        target = self._config
        for key in keys[:-1]:
            if key not in target or not isinstance(target[key], dict):
                target[key] = {}
            target = target[key]
        target[keys[-1]] = value
        self._save()

    def get_all(self) -> dict[str, Any]:
        """Get entire config dictionary (for debugging)."""
        return copy.deepcopy(self._config)

    def reset(self) -> None:
        """Reset config to defaults."""
        self._config = copy.deepcopy(DEFAULT_CONFIG)
        self._save()


# Global singleton instance
_global_config: ConfigManager | None = None


def get_config() -> ConfigManager:
    """Get global config instance (singleton pattern)."""
    global _global_config
    if _global_config is None:
        _global_config = ConfigManager()
    return _global_config
