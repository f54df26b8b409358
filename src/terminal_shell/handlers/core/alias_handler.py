# src/terminal_shell/handlers/core/alias_handler.py
import logging
from html import escape
from typing import Dict, Optional

from terminal_shell.core.command_registry import CommandRegistry
from terminal_shell.core.context.shell_context import ShellContext
from terminal_shell.core.errors import InvalidNameError, PersistenceError
from terminal_shell.core.parser import stringify
from terminal_shell.model import CommandDefinition

logger = logging.getLogger(__name__)


def validate_alias(ctx: ShellContext, name: Optional[str] = None, *defcall: str) -> None:
    if name and name in ctx.engine.registry:
        raise InvalidNameError("Invalid alias name")


async def handle_alias(ctx: ShellContext, name: Optional[str] = None, *defcall: str) -> Dict[str, str]:
    """
    Lists aliases (no arguments), defines/updates one (name + definition)
    or removes one (name only). Returns the resulting alias mapping.
    """
    aliases = ctx.engine.aliases

    if not name:
        defined = aliases.all()
        if not defined:
            ctx.screen.print("No aliases defined.")
        for alias_name, definition in defined.items():
            ctx.screen.print_html(f" - {escape(alias_name)}  <i>{escape(definition)}</i>")
        return defined

    definition = stringify(defcall) if any(defcall) else ""
    try:
        exists = aliases.set(name, definition)
    except PersistenceError as e:
        # The alias still works for this session
        exists = bool(definition)
        ctx.screen.print_error(str(e))

    ctx.screen.print("Alias created successfully" if exists else "Alias removed successfully")
    return aliases.all()


def register_commands(registry: CommandRegistry) -> None:
    registry.register_command("alias", CommandDefinition(
        definition="Create aliases",
        callback=handle_alias,
        validator=validate_alias,
        detail=(
            "Define aliases to run commands easy.\n"
            "WARNING: Aliases are persisted in the local storage file, "
            "readable by other users of this computer. Don't use sensitive data.\n"
            "Can use positional parameters ($1,$2,$3,$N...)"
        ),
        syntax="[STRING: ALIAS] [STRING: DEFINITION]",
        args="?s*",
        sanitized=False,
        generators=False,
        example='myalias print "Hello, $1!"',
    ))
