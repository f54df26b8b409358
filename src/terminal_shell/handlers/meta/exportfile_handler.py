# src/terminal_shell/handlers/meta/exportfile_handler.py
import logging
import time

from terminal_shell.core.command_registry import CommandRegistry
from terminal_shell.core.context.shell_context import ShellContext
from terminal_shell.core.services.json_service import to_json
from terminal_shell.handlers.meta.nested import muted, nested_validator, run_nested, validate_nested
from terminal_shell.model import CommandDefinition

logger = logging.getLogger(__name__)

EXPORT_MIME_TYPE = "text/json"


def build_export_filename(cmd: str) -> str:
    """<command>_<epoch milliseconds>.json"""
    return f"{cmd}_{int(time.time() * 1000)}.json"


async def handle_exportfile(ctx: ShellContext, *defcall: str) -> str:
    """Runs a command muted and saves its value as a JSON file. Returns the file path."""
    quiet_ctx = muted(ctx)
    parsed, definition = validate_nested(quiet_ctx, defcall)
    filename = build_export_filename(parsed.cmd)
    result = await run_nested(quiet_ctx, parsed, definition)

    output_file = ctx.file_sink.save(filename, EXPORT_MIME_TYPE, to_json(result))
    ctx.screen.print(f"Command result exported to '{output_file.name}' file")
    return str(output_file)


def register_commands(registry: CommandRegistry) -> None:
    registry.register_command("exportfile", CommandDefinition(
        definition="Exports the command result to a text/json file",
        callback=handle_exportfile,
        validator=nested_validator,
        detail="Exports the command result to a text/json file in the export directory.",
        syntax="<STRING: COMMAND>",
        args="*",
        sanitized=False,
        generators=False,
        example="context_term read",
    ))
