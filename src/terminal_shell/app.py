from __future__ import annotations

import asyncio
import logging
import sys
from concurrent.futures import TimeoutError as FutureTimeoutError

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import Completer
from prompt_toolkit.document import Document
from prompt_toolkit.patch_stdout import patch_stdout

from terminal_shell.core.core import create_shell
from terminal_shell.core.host import ConsoleHost
from terminal_shell.core.loop_runner import ensure_background_loop, stop_background_loop, submit_on_main_loop
from terminal_shell.core.managers.completion_manager import CompletionManager
from terminal_shell.core.managers.config_manager import config_manager
from terminal_shell.core.managers.shell_history_manager import ShellHistoryManager
from terminal_shell.core.screen import ConsoleScreen
from terminal_shell.core.utils.configure_logging import configure_logger
from terminal_shell.core.utils.helptext import WELCOME_TEXT

# Initialize logging based on configuration
DEBUG_LEVEL = config_manager.get_nested("debug.level", "WARNING")
configure_logger(DEBUG_LEVEL, silenced_loggers={"asyncio": "WARNING", "aiohttp": "WARNING"})
logger = logging.getLogger(__name__)


def _setup_windows_event_loop_if_needed() -> None:
    """Installs Windows compatible asyncio policy if possible."""
    if not sys.platform.startswith("win"):
        return
    try:
        asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())
        logger.info("Using WindowsSelectorEventLoopPolicy for asyncio on Windows.")
    except AttributeError as exc:  # pragma: no cover
        logger.warning("Could not set WindowsSelectorEventLoopPolicy: %s", exc)


class PromptToolkitCompleter(Completer):
    """Adapts the CompletionManager to prompt_toolkit's Completer interface."""

    def __init__(self, manager: CompletionManager):
        self.manager = manager

    def get_completions(self, document: Document, complete_event):
        yield from self.manager.generate_completions(document)


def start_shell() -> None:
    """
    Starts the interactive REPL. Each line is submitted as a job on the
    background loop; the prompt only waits a short while for it, so long
    running commands keep going while new lines are typed.
    """
    _setup_windows_event_loop_if_needed()
    loop = ensure_background_loop()
    logger.debug("Background asyncio event loop is running.")

    history_manager = ShellHistoryManager()
    ctx = create_shell(screen=ConsoleScreen(), host=ConsoleHost(history_manager))
    engine = ctx.engine
    engine.jobs.start_health_monitor(loop)

    ctx.screen.print_html(WELCOME_TEXT)

    session = PromptSession(
        history=history_manager.history,
        completer=PromptToolkitCompleter(CompletionManager(engine.registry, engine.aliases)),
        complete_while_typing=True,
    )
    prompt = config_manager.get_nested("shell.prompt", "terminal> ")
    wait_seconds = float(config_manager.get_nested("shell.foreground_wait_seconds", 1.0))
    logger.info("Shell startup; history file at: %s", history_manager.history_file)

    try:
        with patch_stdout():
            while ctx.host.visible:
                try:
                    line = session.prompt(prompt).strip()
                except (EOFError, KeyboardInterrupt):
                    break

                if not line:
                    continue

                future = submit_on_main_loop(engine.run_line(line, ctx))
                try:
                    future.result(timeout=wait_seconds)
                except FutureTimeoutError:
                    logger.debug("'%s' keeps running in the background.", line)
    finally:
        engine.jobs.stop_health_monitor()
        stop_background_loop()
        print("Bye!")


def main(argv: list[str] | None = None) -> int:
    """Entrypoint for running the shell from the command line."""
    start_shell()
    return 0


if __name__ == "__main__":
    sys.exit(main())
