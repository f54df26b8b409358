# src/terminal_shell/handlers/meta/repeat_handler.py
import asyncio
import logging
from typing import Any, List, Tuple

from terminal_shell.core.command_registry import CommandRegistry
from terminal_shell.core.context.shell_context import ShellContext
from terminal_shell.core.errors import RepeatFailedError, TimesError
from terminal_shell.handlers.meta.nested import dry_run, run_nested, validate_nested
from terminal_shell.model import CommandDefinition

logger = logging.getLogger(__name__)


def _check_times(times: int) -> None:
    if times < 0:
        raise TimesError("'Times' parameter must be positive")


def validate_repeat(ctx: ShellContext, times: int, *defcall: str) -> None:
    _check_times(times)
    validate_nested(dry_run(ctx), defcall)


async def handle_repeat(ctx: ShellContext, times: int, *defcall: str) -> List[Any]:
    """
    Runs a command `times` times, one after another. The line is parsed again
    for every call so generators such as $INTITER advance.

    A failing call does not stop the loop: it is reported right away and,
    once all calls are done, a RepeatFailedError carrying every failure is
    raised. Returns the values of the calls otherwise.
    """
    _check_times(times)
    # Fresh generator: validating must not consume an $INTITER value
    template, definition = validate_nested(ctx.for_submission(), defcall)

    results: List[Any] = []
    failures: List[Tuple[int, Exception]] = []
    for iteration in range(1, times + 1):
        try:
            parsed = ctx.engine.parse(template.cmd, template.raw_params, definition, ctx)
            results.append(await run_nested(ctx, parsed, definition))
        except Exception as e:
            logger.debug("repeat: call #%d of '%s' failed: %s", iteration, template.command_text, e)
            failures.append((iteration, e))
            ctx.screen.print_error(f"Repeat #{iteration} failed: {e}")
        # Let other jobs (and the health monitor) run between calls
        await asyncio.sleep(0)

    summary = f"<i>** Repeat finished: command called {times} times</i>"
    if failures:
        summary = f"<i>** Repeat finished: command called {times} times, {len(failures)} failed</i>"
    ctx.screen.print_html(summary)

    if failures:
        raise RepeatFailedError(times, failures)
    return results


def register_commands(registry: CommandRegistry) -> None:
    registry.register_command("repeat", CommandDefinition(
        definition="Repeat a command N times",
        callback=handle_repeat,
        validator=validate_repeat,
        detail="Repeat a command N times. Calls run one after another.",
        syntax="<INT: TIMES> <STRING: COMMAND>",
        args="i*",
        sanitized=False,
        generators=False,
        example="20 print \"Example Partner #$INTITER\"",
    ))
