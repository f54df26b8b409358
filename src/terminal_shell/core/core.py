# src/terminal_shell/core/core.py
from __future__ import annotations

import logging
from typing import Optional

from terminal_shell.core.command_registry import CommandRegistry, register_all_commands
from terminal_shell.core.context.shell_context import ShellContext
from terminal_shell.core.host import ConsoleHost
from terminal_shell.core.managers.alias_manager import ALIASES_STORAGE_KEY, AliasManager
from terminal_shell.core.managers.config_manager import config_manager
from terminal_shell.core.managers.job_manager import JobManager
from terminal_shell.core.managers.storage_manager import LocalStorage
from terminal_shell.core.screen import ConsoleScreen, Screen
from terminal_shell.core.services.file_save_service import FileSaveService
from terminal_shell.core.services.resource_loader_service import ResourceLoader
from terminal_shell.core.utils.path_utils import PathUtils
from terminal_shell.core.xngine import ExecuteEngine

logger = logging.getLogger(__name__)


def create_shell(
        *,
        screen: Optional[Screen] = None,
        host: Optional[ConsoleHost] = None,
        storage: Optional[LocalStorage] = None,
        loader: Optional[ResourceLoader] = None,
        file_sink: Optional[FileSaveService] = None,
        registry: Optional[CommandRegistry] = None,
        job_manager: Optional[JobManager] = None,
) -> ShellContext:
    """
    Assembles a ready-to-use interpreter: registry with every discovered
    command pack, alias store, job supervisor and engine. Returns the root
    ShellContext; `ctx.engine.submit(line, ctx)` runs commands.
    """
    if registry is None:
        registry = register_all_commands(CommandRegistry())

    if storage is None:
        storage = LocalStorage(PathUtils.get_storage_file(config_manager.get_nested("storage.filename", "storage.json")))

    alias_manager = AliasManager(
        storage,
        registry,
        storage_key=config_manager.get_nested("storage.aliases_key", ALIASES_STORAGE_KEY),
    )
    engine = ExecuteEngine(
        registry=registry,
        job_manager=job_manager or JobManager(),
        alias_manager=alias_manager,
        logger=logger,
    )

    ctx = ShellContext(
        screen=screen or ConsoleScreen(),
        host=host,
        loader=loader,
        file_sink=file_sink,
    )
    ctx.engine = engine
    logger.debug("Shell created with %d commands.", len(registry))
    return ctx


__all__ = ["create_shell"]
