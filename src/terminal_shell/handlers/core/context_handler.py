# src/terminal_shell/handlers/core/context_handler.py
import logging
from typing import Any, Dict, Optional

from terminal_shell.core.command_registry import CommandRegistry
from terminal_shell.core.context.shell_context import ShellContext
from terminal_shell.core.errors import ArityError, InvalidOperationError, ParamTypeError
from terminal_shell.model import CommandDefinition

logger = logging.getLogger(__name__)

OPERATIONS = ("read", "write", "set")


def validate_context_term(ctx: ShellContext, operation: str = "read", values: Optional[Any] = None) -> None:
    if operation not in OPERATIONS:
        raise InvalidOperationError("Invalid operation")
    if operation == "read":
        return
    if values is None:
        raise ArityError(f"Operation '{operation}' needs a DICT of values")
    if not isinstance(values, dict):
        raise ParamTypeError(f"Operation '{operation}' needs a DICT, got {type(values).__name__}")


async def handle_context_term(ctx: ShellContext, operation: str = "read", values: Optional[Any] = None) -> Dict[str, Any]:
    """
    Handle `context_term` operations (read, write, set) over the terminal
    context dictionary and print the resulting context.
    """
    validate_context_term(ctx, operation, values)

    # -------------------------------------------------------------- write
    if operation == "write":
        current = ctx.terminal_context.write(values)
    # -------------------------------------------------------------- set
    elif operation == "set":
        current = ctx.terminal_context.set(values)
    # -------------------------------------------------------------- read
    else:
        current = ctx.terminal_context.read()

    ctx.screen.print(current)
    return dict(current)


def register_commands(registry: CommandRegistry) -> None:
    registry.register_command("context_term", CommandDefinition(
        definition="Operations over terminal context dictionary",
        callback=handle_context_term,
        validator=validate_context_term,
        detail=(
            "Operations over terminal context dictionary. "
            "This context only affects to the terminal operations.\n"
            "[OPERATION] can be 'read', 'write' or 'set'. By default is 'read'."
        ),
        syntax='[STRING: OPERATION] "[DICT: VALUES]"',
        args="?sj",
        example="write \"{'the_example': 1}\"",
    ))
