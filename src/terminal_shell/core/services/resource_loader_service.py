# src/terminal_shell/core/services/resource_loader_service.py
import abc
import inspect
import logging
from typing import Any, Callable, List, Optional, Tuple

import aiohttp

from terminal_shell.core.managers.config_manager import config_manager
from terminal_shell.model import StylesheetLink

logger = logging.getLogger(__name__)

ScriptExecutor = Callable[[str, str], Any]


class ResourceLoader(metaclass=abc.ABCMeta):
    """Loads external resources (scripts and stylesheets) into the host."""

    @abc.abstractmethod
    async def load_script(self, url: str) -> Any:
        raise NotImplementedError

    @abc.abstractmethod
    def inject_stylesheet(self, url: str) -> StylesheetLink:
        raise NotImplementedError


class HttpResourceLoader(ResourceLoader):
    """
    Fetches scripts over HTTP with aiohttp and hands their source to the
    host's script executor. Stylesheets are recorded as link elements of the
    host document head.
    """

    def __init__(self, script_executor: Optional[ScriptExecutor] = None, timeout: Optional[float] = None):
        self.script_executor = script_executor
        self.timeout = float(timeout if timeout is not None else config_manager.get_nested("loader.timeout_seconds", 30))
        self.head: List[StylesheetLink] = []
        self.loaded_scripts: List[Tuple[str, str]] = []

    async def fetch(self, url: str) -> str:
        timeout_obj = aiohttp.ClientTimeout(total=self.timeout)
        async with aiohttp.ClientSession(timeout=timeout_obj) as session:
            async with session.get(url) as response:
                response.raise_for_status()
                return await response.text()

    async def load_script(self, url: str) -> Any:
        source = await self.fetch(url)
        self.loaded_scripts.append((url, source))
        logger.info("Loaded script %s (%d bytes)", url, len(source))
        if self.script_executor is None:
            return None
        result = self.script_executor(url, source)
        if inspect.isawaitable(result):
            result = await result
        return result

    def inject_stylesheet(self, url: str) -> StylesheetLink:
        link = StylesheetLink(url=url)
        self.head.append(link)
        logger.info("Injected stylesheet link: %s", url)
        return link
