# src/terminal_shell/core/command_registry.py
import logging
from typing import Dict, Iterator, List, NamedTuple, Optional, Tuple

from terminal_shell.core.discovery import discover_command_packs
from terminal_shell.core.errors import DuplicateCommandError, UnknownCommandError
from terminal_shell.core.parser import ArgumentSignature
from terminal_shell.model import CommandDefinition

logger = logging.getLogger(__name__)


class ResolvedCommand(NamedTuple):
    name: str
    definition: CommandDefinition
    via_alias: bool = False


class CommandRegistry:
    """
    Maps command names (and their aliases) to command definitions.

    Registration is append-only: every command pack calls
    `register_command` against the shared instance at startup.
    """

    def __init__(self):
        self._commands: Dict[str, CommandDefinition] = {}
        self._aliases: Dict[str, str] = {}  # alias -> canonical name

    def register_command(self, name: str, definition: CommandDefinition) -> CommandDefinition:
        """
        Adds a command to the registry.

        Raises:
            DuplicateCommandError: If the name or one of its aliases is already taken.
        """
        if not name or any(ch.isspace() for ch in name):
            raise DuplicateCommandError(f"Invalid command name '{name}'")
        if name in self._commands or name in self._aliases:
            raise DuplicateCommandError(f"Command '{name}' already registered")

        for alias in definition.aliases:
            if alias == name or alias in self._commands or alias in self._aliases:
                raise DuplicateCommandError(f"Alias '{alias}' of '{name}' conflicts with an existing name")
        if len(set(definition.aliases)) != len(definition.aliases):
            raise DuplicateCommandError(f"Command '{name}' declares the same alias twice")

        # Fail at registration time on a malformed signature
        try:
            ArgumentSignature.from_spec(definition.args)
        except ValueError as e:
            raise DuplicateCommandError(f"Command '{name}' has an invalid signature: {e}") from e

        self._commands[name] = definition
        for alias in definition.aliases:
            self._aliases[alias] = name
        logger.debug("Registered command '%s' (aliases: %s)", name, definition.aliases)
        return definition

    def resolve(self, name: str) -> ResolvedCommand:
        """
        Looks up a command by its name, falling back to the alias table.

        Raises:
            UnknownCommandError: If neither a command nor an alias matches.
        """
        definition = self._commands.get(name)
        if definition is not None:
            return ResolvedCommand(name, definition)

        resolved = self.resolve_by_alias(name)
        if resolved is None:
            raise UnknownCommandError(name)
        return resolved

    def resolve_by_alias(self, alias: str) -> Optional[ResolvedCommand]:
        """Returns the canonical command for an alias (flagged as deprecated), or None."""
        canonical = self._aliases.get(alias)
        if canonical is None:
            return None
        return ResolvedCommand(canonical, self._commands[canonical], via_alias=True)

    def list_commands(self) -> List[Tuple[str, CommandDefinition]]:
        return sorted(self._commands.items())

    def names(self) -> List[str]:
        return sorted(self._commands)

    def aliases(self) -> Dict[str, str]:
        return dict(self._aliases)

    def __contains__(self, name: str) -> bool:
        return name in self._commands

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __len__(self) -> int:
        return len(self._commands)


def register_all_commands(registry: CommandRegistry) -> CommandRegistry:
    """Discovers every command pack and lets it register its commands."""
    logger.debug("Discovering command packs...")
    for pack_name, register in discover_command_packs():
        before = len(registry)
        register(registry)
        logger.debug("Command pack '%s' registered %d command(s)", pack_name, len(registry) - before)

    logger.debug("Successfully registered %d commands.", len(registry))
    return registry
