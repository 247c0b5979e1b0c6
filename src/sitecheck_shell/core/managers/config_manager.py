# src/sitecheck_shell/core/managers/config_manager.py
import json
import logging
from typing import Any, Dict, Optional

from sitecheck_shell.core.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)


class ConfigManager:
    """
    Process-wide settings for the checks.

    Values come from settings.json and can be overridden in memory by command
    line options. Keys are addressed with dotted paths, e.g. 'notes.index'.
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(ConfigManager, cls).__new__(cls)
            cls._instance._config = {}
            cls._instance.reset()
        return cls._instance

    def get_nested(self, key_path: str, default: Optional[Any] = None) -> Any:
        """Returns the value at key_path, or default when any part of the path is missing."""
        value: Any = self._config
        for key in key_path.split('.'):
            if not isinstance(value, dict):
                return default
            value = value.get(key)
        return default if value is None else value

    def set_nested(self, key_path: str, value: Any) -> bool:
        """
        Sets a value in memory, creating intermediate sections as needed.
        Scalars are cast to the type of the value they replace ('3' -> 3).
        """
        *parents, leaf = key_path.split('.')
        section = self._config
        for key in parents:
            section = section.setdefault(key, {})
            if not isinstance(section, dict):
                logger.error("Cannot set '%s': '%s' is not a section.", key_path, key)
                return False

        current = section.get(leaf)
        if isinstance(current, (str, int, float)) and not isinstance(current, bool):
            try:
                value = type(current)(value)
            except (ValueError, TypeError):
                logger.warning("Could not cast '%s' to %s; storing as given.", key_path, type(current).__name__)

        section[leaf] = value
        logger.debug("Configuration updated: %s = %s", key_path, value)
        return True

    def apply_overrides(self, overrides: Dict[str, Any]) -> None:
        """Applies command line overrides; options that were not given (None/False) are skipped."""
        for key_path, value in overrides.items():
            if value is None or value is False:
                continue
            self.set_nested(key_path, value)

    def reset(self) -> None:
        """Reloads settings.json, dropping every in-memory override."""
        config_path = PathUtils.get_settings_file()
        if not config_path.exists():
            logger.warning("settings.json not found at %s. Using built-in defaults.", config_path)
            self._config = {}
            return
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                self._config = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error("Failed to load settings.json: %s", e)
            self._config = {}
            return
        logger.debug("Configuration loaded from %s", config_path)


# The global singleton instance that the entire application will use.
config_manager = ConfigManager()
