# src/terminal_shell/core/managers/export_manager.py
import itertools
import logging
import threading
from typing import Any, Dict

logger = logging.getLogger(__name__)


class ExportRegistry:
    """
    Process-wide named values published by the 'export' command.

    Names are generated from a prefix and a counter ('term1', 'term2', ...),
    are never reused, and values live for the whole session.
    """

    def __init__(self, prefix: str = "term"):
        self.prefix = prefix
        self._ids = itertools.count(1)
        self._values: Dict[str, Any] = {}
        self._lock = threading.Lock()

    def publish(self, value: Any) -> str:
        with self._lock:
            name = f"{self.prefix}{next(self._ids)}"
            self._values[name] = value
        logger.debug("Published export '%s'", name)
        return name

    def get(self, name: str, default: Any = None) -> Any:
        with self._lock:
            return self._values.get(name, default)


# The global registry shared by every shell in the process.
export_registry = ExportRegistry()
