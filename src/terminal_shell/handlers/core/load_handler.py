# src/terminal_shell/handlers/core/load_handler.py
import logging
from typing import Any
from urllib.parse import urlparse

from terminal_shell.core.command_registry import CommandRegistry
from terminal_shell.core.context.shell_context import ShellContext
from terminal_shell.core.errors import InvalidFileTypeError
from terminal_shell.model import CommandDefinition

logger = logging.getLogger(__name__)

# URL path suffix -> kind of resource
RESOURCE_KINDS = {
    ".js": "script",
    ".css": "stylesheet",
}


def resource_kind(url: str) -> str:
    """
    Returns the kind of resource a URL points to, from its path suffix.

    Raises:
        InvalidFileTypeError: For any suffix other than .js or .css.
    """
    path = urlparse(url).path.lower()
    for suffix, kind in RESOURCE_KINDS.items():
        if path.endswith(suffix):
            return kind
    raise InvalidFileTypeError("Invalid file type")


def validate_load(ctx: ShellContext, url: str) -> None:
    resource_kind(url)


async def handle_load(ctx: ShellContext, url: str) -> Any:
    """Loads an external script (.js) or injects a stylesheet (.css)."""
    if resource_kind(url) == "script":
        logger.debug("Loading script %s", url)
        return await ctx.loader.load_script(url)

    ctx.loader.inject_stylesheet(url)
    return None


def register_commands(registry: CommandRegistry) -> None:
    registry.register_command("load", CommandDefinition(
        definition="Load external resource",
        callback=handle_load,
        validator=validate_load,
        detail="Load external source (javascript & css)",
        syntax="<STRING: URL>",
        args="s",
        example="https://example.com/libs/term_extra.js",
    ))
