# tests/core/test_history_management.py
import pytest
from prompt_toolkit.history import FileHistory

from terminal_shell.core.host import ConsoleHost
from terminal_shell.core.managers.shell_history_manager import ShellHistoryManager
from terminal_shell.core.utils.path_utils import PathUtils

HISTORY_COMMANDS = [f"print {i}" for i in range(1, 10)] + ["print 1"]


@pytest.fixture
def history_file(tmp_path):
    """A FileHistory file with 10 entries, written the way the prompt writes them."""
    path = tmp_path / ".test_history"
    history = FileHistory(str(path))
    for cmd in HISTORY_COMMANDS:
        history.store_string(cmd)
    return path


def test_count(history_file):
    assert ShellHistoryManager(history_file).count() == 10


def test_count_missing_file(tmp_path):
    assert ShellHistoryManager(tmp_path / "missing").count() == 0


def test_clear(history_file):
    manager = ShellHistoryManager(history_file)
    assert manager.clear() == 10
    assert manager.count() == 0
    assert history_file.read_text() == ""


def test_default_history_file(tmp_path, monkeypatch):
    monkeypatch.setattr(PathUtils, 'get_shell_history_file', lambda: tmp_path / ".default_history")
    assert ShellHistoryManager().history_file == tmp_path / ".default_history"


def test_host_cleans_input_history(history_file):
    host = ConsoleHost(ShellHistoryManager(history_file))
    assert host.clean_input_history() == 10
    assert ShellHistoryManager(history_file).count() == 0


def test_host_visibility(history_file):
    host = ConsoleHost(ShellHistoryManager(history_file))
    assert host.visible
    host.hide()
    assert not host.visible


def test_clear_empties_the_loaded_prompt_history(tmp_path):
    manager = ShellHistoryManager(tmp_path / ".test_history")
    manager.history.append_string("print one")
    manager.history.append_string("print two")
    assert manager.history.get_strings() == ["print one", "print two"]

    assert manager.clear() == 2
    assert manager.history.get_strings() == []
    assert ShellHistoryManager(tmp_path / ".test_history").history.get_strings() == []
