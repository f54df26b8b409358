# src/terminal_shell/core/managers/alias_manager.py
import logging
import re
from typing import Dict, List, Optional

from terminal_shell.core.command_registry import CommandRegistry
from terminal_shell.core.errors import InvalidNameError, PersistenceError
from terminal_shell.core.managers.storage_manager import LocalStorage
from terminal_shell.core.parser import tokenize

logger = logging.getLogger(__name__)

ALIASES_STORAGE_KEY = "terminal_aliases"
# Positional placeholders inside an alias definition: $1, $2, ...
_POSITIONAL_PATTERN = re.compile(r"\$(\d+)")


class AliasManager:
    """
    Manages user defined aliases (name -> command line) persisted in the
    local key-value storage. The mapping is loaded lazily on first access.
    """

    def __init__(self, storage: LocalStorage, registry: CommandRegistry, storage_key: str = ALIASES_STORAGE_KEY):
        self._storage = storage
        self._registry = registry
        self._storage_key = storage_key
        self._aliases: Optional[Dict[str, str]] = None

    def all(self) -> Dict[str, str]:
        return dict(sorted(self._load().items()))

    def get(self, name: str) -> Optional[str]:
        return self._load().get(name)

    def set(self, name: str, definition: str) -> bool:
        """
        Creates, updates or (with an empty definition) deletes an alias.

        Returns True when the alias exists afterwards, False when it was removed.

        Raises:
            InvalidNameError: If `name` is empty or a registered command name.
            PersistenceError: If saving failed. The in-memory change is kept.
        """
        if not name or name in self._registry:
            raise InvalidNameError("Invalid alias name")

        aliases = self._load()
        definition = (definition or "").strip()
        if definition:
            aliases[name] = definition
            logger.debug("Alias '%s' set to '%s'", name, definition)
        else:
            aliases.pop(name, None)
            logger.debug("Alias '%s' removed", name)

        errors: List[Exception] = []
        self._storage.set_item(self._storage_key, dict(aliases), on_error=errors.append)
        if errors:
            raise PersistenceError(f"Alias could not be saved: {errors[0]}") from errors[0]
        return bool(definition)

    def expand(self, raw_input: str) -> str:
        """
        Expands the first token of `raw_input` if it names an alias,
        substituting $1..$N with the trailing tokens. Placeholders without a
        matching token stay literal. The result is never expanded again.
        """
        tokens = tokenize(raw_input)
        if not tokens:
            return raw_input
        definition = self.get(tokens[0])
        if definition is None:
            return raw_input

        params = tokens[1:]

        def repl(m: re.Match) -> str:
            index = int(m.group(1))
            if 1 <= index <= len(params):
                return params[index - 1]
            return m.group(0)

        expanded = _POSITIONAL_PATTERN.sub(repl, definition)
        logger.debug("Alias expansion: '%s' -> '%s'", raw_input, expanded)
        return expanded

    def _load(self) -> Dict[str, str]:
        if self._aliases is None:
            stored = self._storage.get_item(self._storage_key) or {}
            if not isinstance(stored, dict):
                logger.warning("Stored aliases are not a mapping, ignoring them.")
                stored = {}
            self._aliases = {str(k): str(v) for k, v in stored.items()}
        return self._aliases
