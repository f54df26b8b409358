# src/terminal_shell/core/managers/storage_manager.py
import json
import logging
import os
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union

logger = logging.getLogger(__name__)


class LocalStorage:
    """
    A small persistent key-value store backed by a single JSON file.

    Values must be JSON serializable. Every `set_item` rewrites the whole
    file atomically (temp file + os.replace).
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._data: Optional[Dict[str, Any]] = None

    def get_item(self, key: str, default: Any = None) -> Any:
        return self._load().get(key, default)

    def set_item(
            self,
            key: str,
            value: Any,
            on_error: Optional[Callable[[Exception], None]] = None,
    ) -> bool:
        """
        Stores `value` under `key` and flushes the file.

        On failure the in-memory value is kept; `on_error` receives the
        exception if given, otherwise the exception is re-raised.
        """
        data = self._load()
        data[key] = value
        try:
            self._save(data)
            return True
        except (OSError, TypeError, ValueError) as e:
            logger.error("Failed to persist storage key '%s' to %s: %s", key, self.path, e, exc_info=True)
            if on_error is None:
                raise
            on_error(e)
            return False

    def _load(self) -> Dict[str, Any]:
        if self._data is not None:
            return self._data
        self._data = {}
        if self.path.exists():
            try:
                loaded = json.loads(self.path.read_text(encoding="utf-8") or "{}")
                if isinstance(loaded, dict):
                    self._data = loaded
                else:
                    logger.warning("Ignoring storage file %s: top-level value is not an object.", self.path)
            except (OSError, ValueError) as e:
                logger.error("Failed to read storage file %s: %s", self.path, e)
        return self._data

    def _save(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(data, indent=2, ensure_ascii=False)
        temp_path = self.path.with_suffix(".tmp")
        temp_path.write_text(payload, encoding="utf-8")
        os.replace(temp_path, self.path)
