# tests/core/conftest.py
import asyncio
from typing import Any, List

import pytest

from terminal_shell.core.core import create_shell
from terminal_shell.core.host import ConsoleHost
from terminal_shell.core.managers.shell_history_manager import ShellHistoryManager
from terminal_shell.core.managers.storage_manager import LocalStorage
from terminal_shell.core.screen import RecordingScreen
from terminal_shell.core.services.file_save_service import FileSaveService
from terminal_shell.core.services.resource_loader_service import ResourceLoader
from terminal_shell.model import StylesheetLink


class FakeLoader(ResourceLoader):
    """Records what would have been loaded instead of going to the network."""

    def __init__(self):
        self.scripts: List[str] = []
        self.stylesheets: List[str] = []

    async def load_script(self, url: str) -> Any:
        self.scripts.append(url)
        return f"loaded {url}"

    def inject_stylesheet(self, url: str) -> StylesheetLink:
        self.stylesheets.append(url)
        return StylesheetLink(url=url)


@pytest.fixture
def loader():
    return FakeLoader()


@pytest.fixture
def ctx(tmp_path, loader):
    """A fully wired shell writing to a RecordingScreen, isolated in tmp_path."""
    return create_shell(
        screen=RecordingScreen(),
        host=ConsoleHost(ShellHistoryManager(tmp_path / ".history")),
        storage=LocalStorage(tmp_path / "storage.json"),
        loader=loader,
        file_sink=FileSaveService(tmp_path / "exports"),
    )


@pytest.fixture
def run(ctx):
    """Submits a line synchronously and returns the command's value."""
    def _run(line: str):
        return asyncio.run(ctx.engine.submit(line, ctx))
    return _run
