# src/terminal_shell/handlers/core/clear_handler.py
import logging

from terminal_shell.core.command_registry import CommandRegistry
from terminal_shell.core.context.shell_context import ShellContext
from terminal_shell.model import CommandDefinition

logger = logging.getLogger(__name__)


async def handle_clear(ctx: ShellContext, section: str = "screen") -> None:
    """Clears the input history ('history') or the screen (anything else)."""
    if section == "history":
        removed = ctx.host.clean_input_history()
        logger.debug("Input history cleared (%d entries).", removed)
    else:
        ctx.screen.clean()


def register_commands(registry: CommandRegistry) -> None:
    registry.register_command("clear", CommandDefinition(
        definition="Clean terminal section (screen by default)",
        callback=handle_clear,
        detail="Available sections: screen (default), history.",
        syntax="[STRING: SECTION]",
        args="?s",
        example="history",
    ))
