# src/terminal_shell/handlers/meta/chrono_handler.py
import logging
from typing import Any

from terminal_shell.core.command_registry import CommandRegistry
from terminal_shell.core.context.shell_context import ShellContext
from terminal_shell.core.utils.run_timers import RunTimers
from terminal_shell.handlers.meta.nested import nested_validator, run_nested, validate_nested
from terminal_shell.model import CommandDefinition

logger = logging.getLogger(__name__)


async def handle_chrono(ctx: ShellContext, *defcall: str) -> Any:
    """Runs a command and prints the elapsed seconds. Failures propagate untimed."""
    parsed, definition = validate_nested(ctx, defcall)
    with RunTimers() as timer:
        result = await run_nested(ctx, parsed, definition)
    logger.debug("chrono: '%s' took %.6fs", parsed.command_text, timer.duration)
    ctx.screen.print(f"Time elapsed: '{timer.duration:.3f}' seconds")
    return result


def register_commands(registry: CommandRegistry) -> None:
    registry.register_command("chrono", CommandDefinition(
        definition="Print the time expended executing a command",
        callback=handle_chrono,
        validator=nested_validator,
        detail=(
            "Print the elapsed time in seconds to execute a command.\n"
            "Notice that this time includes the time to format the result!"
        ),
        syntax="<STRING: COMMAND>",
        args="*",
        sanitized=False,
        generators=False,
        example="repeat 100 print hi",
    ))
