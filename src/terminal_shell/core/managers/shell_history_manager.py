import logging
from pathlib import Path
from typing import Optional

from prompt_toolkit.history import FileHistory

from terminal_shell.core.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)


class ClearableFileHistory(FileHistory):
    """FileHistory whose in-memory copy can be dropped together with the file."""

    def clear(self) -> None:
        self._loaded_strings = []
        self._loaded = True


class ShellHistoryManager:
    """Manages the prompt_toolkit FileHistory file that stores typed input lines."""

    def __init__(self, history_file: Optional[Path] = None):
        self.history_file = Path(history_file) if history_file else PathUtils.get_shell_history_file()
        self.history = ClearableFileHistory(str(self.history_file))

    def count(self) -> int:
        """Returns the number of stored input lines."""
        if not self.history_file.exists():
            return 0
        with open(self.history_file, "r", encoding="utf-8") as f:
            return sum(1 for line in f if line.startswith("+"))

    def clear(self) -> int:
        """
        Truncates the history file and empties the prompt's loaded history, so
        up-arrow recall stops offering cleared lines. Returns the number of
        removed entries.
        """
        removed = self.count()
        if self.history_file.exists():
            self.history_file.write_text("", encoding="utf-8")
        self.history.clear()
        logger.info("Cleared %d history entries from %s", removed, self.history_file)
        return removed
