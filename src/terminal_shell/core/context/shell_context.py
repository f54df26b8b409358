# src/terminal_shell/core/context/shell_context.py
from __future__ import annotations

import copy
import logging
from typing import TYPE_CHECKING, Any, Dict, Optional

from terminal_shell.core.host import ConsoleHost
from terminal_shell.core.managers.export_manager import ExportRegistry, export_registry
from terminal_shell.core.parser import ParameterGenerator
from terminal_shell.core.screen import Screen
from terminal_shell.core.services.file_save_service import FileSaveService
from terminal_shell.core.services.resource_loader_service import HttpResourceLoader, ResourceLoader

# Prevent circular imports during runtime, but retain type hinting for static analysis
if TYPE_CHECKING:
    from terminal_shell.core.xngine import ExecuteEngine

logger = logging.getLogger(__name__)


class TerminalContext:
    """The user's terminal context dictionary. Lives for the session, never persisted."""

    def __init__(self, values: Optional[Dict[str, Any]] = None):
        self._values: Dict[str, Any] = dict(values or {})

    def read(self) -> Dict[str, Any]:
        return self._values

    def write(self, values: Dict[str, Any]) -> Dict[str, Any]:
        """Merges `values` into the context."""
        self._values.update(values)
        return self._values

    def set(self, values: Dict[str, Any]) -> Dict[str, Any]:
        """Replaces the whole context."""
        self._values = dict(values)
        return self._values


class ShellContext:
    """
    The execution context handed to every command callback.

    Holds the collaborators a command may use. Composition commands derive
    variants of it (another output sink, a fresh generator) with the
    `with_*` helpers; everything else stays shared between the copies.
    """

    def __init__(
            self,
            screen: Screen,
            host: Optional[ConsoleHost] = None,
            loader: Optional[ResourceLoader] = None,
            file_sink: Optional[FileSaveService] = None,
            terminal_context: Optional[TerminalContext] = None,
            exports: Optional[ExportRegistry] = None,
    ):
        self.engine: Optional["ExecuteEngine"] = None  # Attached by create_shell()
        self.screen = screen
        self.host = host or ConsoleHost()
        self.loader = loader or HttpResourceLoader()
        self.file_sink = file_sink or FileSaveService()
        self.terminal_context = terminal_context or TerminalContext()
        self.exports = exports if exports is not None else export_registry
        self.generator = ParameterGenerator()

    def with_screen(self, screen: Screen) -> "ShellContext":
        """Returns a copy of this context that writes to another screen."""
        clone = copy.copy(self)
        clone.screen = screen
        return clone

    def for_submission(self) -> "ShellContext":
        """Returns a copy with a fresh parameter generator for a new top-level command."""
        clone = copy.copy(self)
        clone.generator = ParameterGenerator()
        return clone

    def __repr__(self) -> str:
        return f"<ShellContext screen={type(self.screen).__name__} context_keys={len(self.terminal_context.read())}>"
