# src/terminal_shell/core/utils/path_utils.py
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class PathUtils:
    """
    A central utility for reliably retrieving important package and user paths.
    """

    # --- Package specific paths

    @staticmethod
    def get_shell_package_root() -> Path:
        return Path(__file__).resolve().parents[2]

    @staticmethod
    def get_handlers_dir() -> Path:
        return PathUtils.get_shell_package_root() / "handlers"

    @staticmethod
    def get_settings_file() -> Path:
        return PathUtils.get_shell_package_root() / "settings.json"

    # --- User specific paths ---

    @staticmethod
    def get_user_config_dir() -> Path:
        """
        Returns the path to the user's .terminal_shell config directory.
        (e.g., ~/.terminal_shell/)
        """
        return Path.home() / ".terminal_shell"

    @staticmethod
    def get_user_settings_file() -> Path:
        """Optional per-user overrides of the packaged settings.json."""
        return PathUtils.get_user_config_dir() / "settings.json"

    @staticmethod
    def get_shell_history_file() -> Path:
        """
        Returns the path to the shell history file in the user's home directory.
        (e.g., ~/.terminal_shell_history)
        """
        return Path.home() / ".terminal_shell_history"

    @staticmethod
    def get_storage_file(filename: str = "storage.json") -> Path:
        """Returns the path of the local key-value storage file."""
        return PathUtils.get_user_config_dir() / filename

    @staticmethod
    def get_user_documents_dir() -> Path:
        """
        Returns the absolute path to the current user's Documents directory.
        """
        return Path.home() / "Documents"
