# src/terminal_shell/handlers/core/help_handler.py
from typing import Optional

from terminal_shell.core.command_registry import CommandRegistry
from terminal_shell.core.context.shell_context import ShellContext
from terminal_shell.core.errors import UnknownCommandError
from terminal_shell.core.utils.helptext import (
    HELP_LEGEND,
    render_deprecated,
    render_help_detailed,
    render_help_simple,
)
from terminal_shell.model import CommandDefinition


def _print_detailed(ctx: ShellContext, cmd: str, definition: CommandDefinition) -> None:
    for line in render_help_detailed(cmd, definition):
        ctx.screen.print(line)


def validate_help(ctx: ShellContext, cmd: Optional[str] = None) -> None:
    registry = ctx.engine.registry
    if cmd is not None and cmd not in registry and registry.resolve_by_alias(cmd) is None:
        raise UnknownCommandError(cmd)


async def handle_help(ctx: ShellContext, cmd: Optional[str] = None) -> None:
    """
    Without arguments lists every command with its summary. With a command
    name prints its detailed help; old names (aliases) get a deprecation
    notice first.
    """
    registry = ctx.engine.registry
    if cmd is None:
        for name, definition in registry.list_commands():
            ctx.screen.print_html(render_help_simple(name, definition))
        return

    if cmd in registry:
        _print_detailed(ctx, cmd, registry.resolve(cmd).definition)
        return

    resolved = registry.resolve_by_alias(cmd)
    if resolved is None:
        raise UnknownCommandError(cmd)
    ctx.screen.print_html(render_deprecated(cmd, resolved.name))
    _print_detailed(ctx, resolved.name, resolved.definition)


def register_commands(registry: CommandRegistry) -> None:
    registry.register_command("help", CommandDefinition(
        definition="Print this help or command detailed info",
        callback=handle_help,
        validator=validate_help,
        detail=f"Show commands and a quick definition.\n{HELP_LEGEND}",
        syntax="[STRING: COMMAND]",
        args="?s",
        example="repeat",
    ))
