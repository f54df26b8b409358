# src/terminal_shell/handlers/meta/mute_handler.py
from typing import Any

from terminal_shell.core.command_registry import CommandRegistry
from terminal_shell.core.context.shell_context import ShellContext
from terminal_shell.handlers.meta.nested import muted, nested_validator, run_nested, validate_nested
from terminal_shell.model import CommandDefinition


async def handle_mute(ctx: ShellContext, *defcall: str) -> Any:
    """
    Runs a command with its regular output dropped. Errors are still shown
    and still propagate; the command's value is returned.
    """
    quiet_ctx = muted(ctx)
    parsed, definition = validate_nested(quiet_ctx, defcall)
    return await run_nested(quiet_ctx, parsed, definition)


def register_commands(registry: CommandRegistry) -> None:
    registry.register_command("mute", CommandDefinition(
        definition="Only prints errors",
        callback=handle_mute,
        validator=nested_validator,
        detail="Printing to screen is a slow task, you can improve performance if only errors are printed.",
        syntax="<STRING: COMMAND>",
        args="*",
        sanitized=False,
        generators=False,
        example="repeat 20 print \"Example #$INTITER\"",
    ))
