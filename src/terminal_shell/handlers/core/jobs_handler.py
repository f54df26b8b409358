# src/terminal_shell/handlers/core/jobs_handler.py
from html import escape
from typing import List

from terminal_shell.core.command_registry import CommandRegistry
from terminal_shell.core.context.shell_context import ShellContext
from terminal_shell.model import CommandDefinition

UNHEALTHY_WARNING = "<ansiyellow>This job is taking a long time</ansiyellow>"


async def handle_jobs(ctx: ShellContext) -> List[str]:
    """Prints one line per running job and returns their command texts."""
    jobs = ctx.engine.jobs.list_jobs()
    for job in jobs:
        line = f"{escape(job.parsed.cmd)} <i>{escape(job.parsed.raw_params)}</i>"
        if not job.healthy:
            line = f"{line} {UNHEALTHY_WARNING}"
        ctx.screen.print_html(line)
    return [job.parsed.command_text for job in jobs]


def register_commands(registry: CommandRegistry) -> None:
    registry.register_command("jobs", CommandDefinition(
        definition="Display running jobs",
        callback=handle_jobs,
        detail="Display running jobs. Jobs running for too long get a warning.",
        sanitized=False,
        generators=False,
    ))
