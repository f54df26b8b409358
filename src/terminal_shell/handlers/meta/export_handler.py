# src/terminal_shell/handlers/meta/export_handler.py
import logging

from terminal_shell.core.command_registry import CommandRegistry
from terminal_shell.core.context.shell_context import ShellContext
from terminal_shell.handlers.meta.nested import muted, nested_validator, run_nested, validate_nested
from terminal_shell.model import CommandDefinition

logger = logging.getLogger(__name__)


async def handle_export(ctx: ShellContext, *defcall: str) -> str:
    """
    Runs a command muted and publishes its value under a fresh name in the
    export registry. Returns that name.
    """
    quiet_ctx = muted(ctx)
    parsed, definition = validate_nested(quiet_ctx, defcall)
    result = await run_nested(quiet_ctx, parsed, definition)

    name = ctx.exports.publish(result)
    logger.info("Exported result of '%s' as '%s'", parsed.command_text, name)
    ctx.screen.print(f"Command result exported! now you can use '{name}' to retrieve it")
    return name


def register_commands(registry: CommandRegistry) -> None:
    registry.register_command("export", CommandDefinition(
        definition="Exports the command result to a session variable",
        callback=handle_export,
        validator=nested_validator,
        detail=(
            "Exports the command result to a session variable. "
            "Variable names are never reused during the session."
        ),
        syntax="<STRING: COMMAND>",
        args="*",
        aliases=["exportvar"],
        sanitized=False,
        generators=False,
        example="context_term read",
    ))
