# src/matcher_shell/core/managers/config_manager.py
import json
import logging
from typing import Any, Dict, Optional

from matcher_shell.core.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)

_TRUE_STRINGS = {"1", "true", "yes", "on"}
_FALSE_STRINGS = {"0", "false", "no", "off"}


class ConfigManager:
    """
    Session settings for the matcher shell.

    Defaults come from the packaged settings.json (debug level, loader and suite
    options). `config set` changes them for the running session only; `reset`
    goes back to the file.
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(ConfigManager, cls).__new__(cls)
            cls._instance._initialize()
        return cls._instance

    def _initialize(self):
        self._config: Dict[str, Any] = {}
        self.reset()
        logger.debug("Matcher shell settings ready.")

    def get_all(self) -> Dict[str, Any]:
        return self._config

    def get_nested(self, key_path: str, default: Optional[Any] = None) -> Any:
        """Looks up a dotted setting such as 'suite.workers'; missing keys give `default`."""
        value = self._config
        for key in key_path.split('.'):
            if not isinstance(value, dict):
                return default
            value = value.get(key)
        return value if value is not None else default

    def set_nested(self, key_path: str, value: Any) -> bool:
        """
        Overrides a dotted setting for this session.

        Values typed at the prompt arrive as text; an existing setting keeps its
        type, so 'suite.workers 4' stores 4 and 'loader.trim_text off' stores False.
        Returns False when the path runs through a non-section value.
        """
        *sections, leaf = key_path.split('.')
        section = self._config
        for name in sections:
            section = section.setdefault(name, {})
            if not isinstance(section, dict):
                logger.error("Cannot set '%s': '%s' is a value, not a section.", key_path, name)
                return False

        current = section.get(leaf)
        if current is not None:
            try:
                value = self._cast_like(current, value)
            except (ValueError, TypeError):
                logger.warning(
                    "'%s' expects %s; keeping %r as text.",
                    key_path, type(current).__name__, value
                )

        section[leaf] = value
        logger.info("Setting changed: %s = %s", key_path, value)
        return True

    @staticmethod
    def _cast_like(original: Any, value: Any) -> Any:
        if isinstance(original, bool):
            if isinstance(value, bool):
                return value
            text = str(value).strip().lower()
            if text in _TRUE_STRINGS:
                return True
            if text in _FALSE_STRINGS:
                return False
            raise ValueError(f"Not a boolean: {value!r}")
        return type(original)(value)

    def reset(self):
        """Drops session overrides and reloads settings.json."""
        settings_file = PathUtils.get_settings_file()
        if not settings_file.exists():
            logger.warning("No settings file at %s; running with an empty configuration.", settings_file)
            self._config = {}
            return
        try:
            with open(settings_file, "r", encoding="utf-8") as f:
                self._config = json.load(f)
        except (OSError, ValueError) as e:
            logger.error("Could not read %s: %s", settings_file, e, exc_info=True)
            self._config = {}
            return
        logger.info("Settings loaded from %s.", settings_file)


config_manager = ConfigManager()
