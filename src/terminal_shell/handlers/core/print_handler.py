# src/terminal_shell/handlers/core/print_handler.py
from terminal_shell.core.command_registry import CommandRegistry
from terminal_shell.core.context.shell_context import ShellContext
from terminal_shell.model import CommandDefinition


async def handle_print(ctx: ShellContext, *text: str) -> str:
    """Prints the arguments joined by single spaces and returns the printed text."""
    to_print = " ".join(text)
    ctx.screen.print(to_print)
    return to_print


def register_commands(registry: CommandRegistry) -> None:
    registry.register_command("print", CommandDefinition(
        definition="Print a message",
        callback=handle_print,
        detail="Eval parameters and print the result.",
        syntax="<STRING: MSG>",
        args="*",
        aliases=["echo"],
        example="This is a example",
    ))
