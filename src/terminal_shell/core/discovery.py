import importlib
import logging
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from terminal_shell.core.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)

RegisterFn = Callable[..., None]


def discover_command_packs(
        handlers_dir: Optional[Path] = None,
        base_module_path: str = "terminal_shell.handlers",
) -> List[Tuple[str, RegisterFn]]:
    """
    Scans the handler directory for command pack modules (*_handler.py),
    imports them and returns (module name, register_commands) pairs in a
    stable, sorted order.
    """
    handlers_dir = handlers_dir or PathUtils.get_handlers_dir()
    packs: List[Tuple[str, RegisterFn]] = []

    logger.debug("Scanning for command packs in: '%s'", handlers_dir)
    if not handlers_dir.is_dir():
        logger.warning("Handlers directory not found, skipping: %s", handlers_dir)
        return packs

    for file_path in sorted(handlers_dir.glob("**/*_handler.py")):
        relative_path = file_path.relative_to(handlers_dir).with_suffix("")
        module_name = ".".join([base_module_path, *relative_path.parts])
        try:
            module = importlib.import_module(module_name)
        except Exception as e:
            logger.error("Failed to load command pack %s: %s", file_path.name, e, exc_info=True)
            continue

        register = getattr(module, "register_commands", None)
        if not callable(register):
            logger.warning("Command pack %s has no register_commands(), skipping.", module_name)
            continue
        packs.append((module_name, register))
        logger.debug("Discovered command pack '%s'", module_name)

    return packs
