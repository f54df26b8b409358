from __future__ import annotations

import inspect
import logging
from typing import Any, List, Optional, Tuple

from terminal_shell.core.command_registry import CommandRegistry
from terminal_shell.core.context.shell_context import ShellContext
from terminal_shell.core.errors import ShellError, UnknownCommandError
from terminal_shell.core.managers.alias_manager import AliasManager
from terminal_shell.core.managers.job_manager import JobManager
from terminal_shell.core.parser import ArgumentSignature, ParameterReader
from terminal_shell.core.utils.helptext import render_deprecated
from terminal_shell.model import CommandDefinition, ParsedCommand


class ExecuteEngine:
    """
    Core engine responsible for command dispatch.

    A submitted line goes through alias expansion, lookup, parsing and
    validation before a job is registered; only then is the command callback
    invoked. Validation errors therefore never create a job. Composition
    commands re-enter the pipeline at the lookup step through
    `validate_command` + `process_command_job`.
    """

    def __init__(
            self,
            *,
            registry: CommandRegistry,
            job_manager: JobManager,
            alias_manager: Optional[AliasManager] = None,
            parameter_reader: Optional[ParameterReader] = None,
            logger: Optional[logging.Logger] = None,
    ) -> None:
        self.registry = registry
        self.jobs = job_manager
        self.aliases = alias_manager
        self.reader = parameter_reader or ParameterReader()
        self._log = logger or logging.getLogger(__name__)

    async def submit(self, raw_line: str, ctx: ShellContext) -> Any:
        """
        Runs one command line and returns the command's value.
        Empty input is a no-op. Errors propagate to the caller.
        """
        line = (raw_line or "").strip()
        if not line:
            return None

        ctx = ctx.for_submission()
        if self.aliases is not None:
            line = self.aliases.expand(line)

        parsed, definition = self.validate_command(line, ctx)
        return await self.process_command_job(parsed, definition, ctx)

    async def run_line(self, raw_line: str, ctx: ShellContext) -> int:
        """
        Host entry point: submits a line and reports any failure on the
        context's screen. Returns 0 on success, 1 on failure.
        """
        try:
            await self.submit(raw_line, ctx)
            return 0
        except ShellError as e:
            self._log.debug("Command '%s' failed: %s", raw_line, e)
            ctx.screen.print_error(str(e))
            return 1
        except Exception as e:
            self._log.error("Command '%s' raised an unexpected error: %s", raw_line, e, exc_info=True)
            ctx.screen.print_error(f"{type(e).__name__}: {e}")
            return 1

    def validate_command(self, line: str, ctx: ShellContext) -> Tuple[ParsedCommand, CommandDefinition]:
        """
        Looks up and parses a command line, then runs the command's validator.

        Raises:
            UnknownCommandError: If the first token names no command.
            ShellError: Any arity, type or command specific validation error.
        """
        parts = (line or "").strip().split(None, 1)
        if not parts:
            raise UnknownCommandError("")
        name = parts[0]
        raw_params = parts[1] if len(parts) > 1 else ""

        resolved = self.registry.resolve(name)
        if resolved.via_alias:
            self._log.info("Deprecated command name '%s' used for '%s'", name, resolved.name)
            ctx.screen.print_html(render_deprecated(name, resolved.name))

        parsed = self.parse(resolved.name, raw_params, resolved.definition, ctx)
        if resolved.definition.validator is not None:
            resolved.definition.validator(ctx, *self.call_args(parsed, resolved.definition))
        return parsed, resolved.definition

    def parse(self, cmd: str, raw_params: str, definition: CommandDefinition, ctx: ShellContext) -> ParsedCommand:
        return self.reader.parse(cmd, raw_params, definition, ctx.generator)

    async def process_command_job(self, parsed: ParsedCommand, definition: CommandDefinition, ctx: ShellContext) -> Any:
        """Registers a job, invokes the callback and settles the job whatever the outcome."""
        job = self.jobs.track(parsed)
        error: Optional[BaseException] = None
        try:
            result = definition.callback(ctx, *self.call_args(parsed, definition))
            if inspect.isawaitable(result):
                result = await result
            return result
        except BaseException as e:
            error = e
            raise
        finally:
            self.jobs.release(job, error)

    @staticmethod
    def call_args(parsed: ParsedCommand, definition: CommandDefinition) -> List[Any]:
        """Spreads the variadic tail (if any) into trailing positional arguments."""
        params = list(parsed.params)
        if params and ArgumentSignature.from_spec(definition.args).variadic:
            return params[:-1] + list(params[-1])
        return params
