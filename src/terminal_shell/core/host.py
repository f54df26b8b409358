# src/terminal_shell/core/host.py
import logging
from typing import Optional

from terminal_shell.core.managers.shell_history_manager import ShellHistoryManager

logger = logging.getLogger(__name__)


class ConsoleHost:
    """
    The host application lifecycle as seen by the interpreter: visibility
    and input history. The REPL stops prompting once the host is hidden.
    """

    def __init__(self, history_manager: Optional[ShellHistoryManager] = None):
        self.history_manager = history_manager or ShellHistoryManager()
        self.visible = True

    def hide(self) -> None:
        logger.debug("Host hide requested.")
        self.visible = False

    def clean_input_history(self) -> int:
        return self.history_manager.clear()
