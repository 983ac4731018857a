# src/matcher_shell/core/utils/path_utils.py
import logging
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)


class PathUtils:
    """
    A central utility for reliably retrieving important package and user paths.
    """

    # --- Package specific paths

    @staticmethod
    def get_shell_package_root() -> Path:
        """Returns the directory of the matcher_shell package (where settings.json lives)."""
        return Path(__file__).resolve().parents[2]

    @staticmethod
    def get_settings_file() -> Path:
        return PathUtils.get_shell_package_root() / "settings.json"

    @staticmethod
    def get_handlers_dir() -> Path:
        return PathUtils.get_shell_package_root() / "core" / "handlers"

    # --- User specific paths ---

    @staticmethod
    def get_shell_history_file() -> Path:
        """
        Returns the path to the shell history file in the user's home directory.
        (e.g., ~/.matcher_shell_history)
        """
        return Path.home() / ".matcher_shell_history"

    # --- Helper methods ---

    @staticmethod
    def resolve_user_path(path: Union[str, Path]) -> Path:
        """Expands '~' and makes a user supplied path absolute (relative to the CWD)."""
        return Path(path).expanduser().resolve()
