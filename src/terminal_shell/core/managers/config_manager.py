# src/terminal_shell/core/managers/config_manager.py
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from terminal_shell.core.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Deep merge of two settings trees; `override` wins on leaves."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _read_settings(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            loaded = json.load(f)
    except (OSError, ValueError) as e:
        logger.error("Failed to load settings from %s: %s", path, e, exc_info=True)
        return {}
    if not isinstance(loaded, dict):
        logger.warning("Ignoring %s: top-level value is not an object.", path)
        return {}
    return loaded


class ConfigManager:
    """
    Singleton holding the shell settings.

    The packaged settings.json provides the defaults; an optional
    ~/.terminal_shell/settings.json overrides individual keys.
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(ConfigManager, cls).__new__(cls)
            cls._instance._config = {}
            cls._instance.reset()
        return cls._instance

    def get_all(self) -> Dict[str, Any]:
        return self._config

    def get_nested(self, key_path: str, default: Optional[Any] = None) -> Any:
        """Looks up a dotted key ('jobs.check_interval_seconds'); missing keys give `default`."""
        node: Any = self._config
        for key in key_path.split('.'):
            if not isinstance(node, dict) or key not in node:
                return default
            node = node[key]
        return default if node is None else node

    def reset(self) -> None:
        """Reloads the packaged defaults and the user's overrides from disk."""
        defaults_path = PathUtils.get_settings_file()
        if not defaults_path.exists():
            logger.warning("settings.json not found at %s. Using empty config.", defaults_path)
        self._config = _merge(_read_settings(defaults_path), _read_settings(PathUtils.get_user_settings_file()))
        logger.debug("Configuration (re)loaded from %s", defaults_path)


# The global singleton instance that the entire application will use.
config_manager = ConfigManager()
