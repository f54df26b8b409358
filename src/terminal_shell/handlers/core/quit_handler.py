# src/terminal_shell/handlers/core/quit_handler.py
from terminal_shell.core.command_registry import CommandRegistry
from terminal_shell.core.context.shell_context import ShellContext
from terminal_shell.model import CommandDefinition


async def handle_quit(ctx: ShellContext) -> None:
    """Asks the host to hide the terminal. Running jobs are not interrupted."""
    ctx.host.hide()


def register_commands(registry: CommandRegistry) -> None:
    registry.register_command("quit", CommandDefinition(
        definition="Close terminal",
        callback=handle_quit,
        detail="Close the terminal.",
    ))
