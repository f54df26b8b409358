# src/terminal_shell/handlers/meta/nested.py
"""
Shared plumbing of the composition commands (chrono, repeat, mute, export,
exportfile): each one receives a whole command line as its trailing
arguments and runs it through the engine again, starting at the lookup step
(no alias expansion).
"""
from typing import Any, Sequence, Tuple

from terminal_shell.core.context.shell_context import ShellContext
from terminal_shell.core.errors import MissingNestedCommandError, ShellError
from terminal_shell.core.parser import stringify
from terminal_shell.core.screen import MutedScreen
from terminal_shell.model import CommandDefinition, ParsedCommand


def muted(ctx: ShellContext) -> ShellContext:
    return ctx.with_screen(MutedScreen(ctx.screen))


def dry_run(ctx: ShellContext) -> ShellContext:
    """A muted context with its own generator, for validation-only parses."""
    return muted(ctx.for_submission())


def validate_nested(ctx: ShellContext, defcall: Sequence[str]) -> Tuple[ParsedCommand, CommandDefinition]:
    """
    Rebuilds the nested command line from `defcall`, then looks it up and
    parses it.

    Raises:
        MissingNestedCommandError: If the line is empty or does not validate.
    """
    if not any(defcall):
        raise MissingNestedCommandError()
    line = stringify(defcall)
    try:
        return ctx.engine.validate_command(line, ctx)
    except MissingNestedCommandError:
        raise
    except ShellError as e:
        raise MissingNestedCommandError(f"Need a valid command to execute! ({e})") from e


def nested_validator(ctx: ShellContext, *defcall: str) -> None:
    validate_nested(dry_run(ctx), defcall)


async def run_nested(ctx: ShellContext, parsed: ParsedCommand, definition: CommandDefinition) -> Any:
    return await ctx.engine.process_command_job(parsed, definition, ctx)
