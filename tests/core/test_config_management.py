# tests/core/test_config_management.py
import json

import pytest

from terminal_shell.core.managers.config_manager import ConfigManager
from terminal_shell.core.managers.job_manager import JobManager
from terminal_shell.core.services.file_save_service import FileSaveService
from terminal_shell.core.utils.path_utils import PathUtils

# A predictable configuration for the tests
MOCK_SETTINGS_CONTENT = {
    "debug": {
        "level": "WARNING"
    },
    "jobs": {
        "health_threshold_seconds": 30,
        "check_interval_seconds": 2
    },
    "exportfile": {
        "directory": ""
    }
}


@pytest.fixture
def config_env(tmp_path, monkeypatch):
    """
    Points the ConfigManager singleton at a temporary settings.json and
    reloads the real settings afterwards.
    """
    package_root = tmp_path / "terminal_shell"
    package_root.mkdir()
    settings_file = package_root / "settings.json"
    settings_file.write_text(json.dumps(MOCK_SETTINGS_CONTENT))

    monkeypatch.setattr(PathUtils, 'get_shell_package_root', lambda: package_root)
    monkeypatch.setattr(PathUtils, 'get_user_config_dir', lambda: tmp_path / "user")

    manager = ConfigManager()
    manager.reset()  # Force a reload from the mock file

    yield manager, settings_file

    monkeypatch.undo()
    manager.reset()


def test_config_manager_is_a_singleton():
    assert ConfigManager() is ConfigManager()


def test_config_manager_load(config_env):
    manager, _ = config_env
    config = manager.get_all()
    assert config["debug"]["level"] == "WARNING"
    assert config["jobs"]["health_threshold_seconds"] == 30


def test_config_manager_get_nested(config_env):
    manager, _ = config_env
    assert manager.get_nested("jobs.check_interval_seconds") == 2
    assert manager.get_nested("non.existent.key", "default") == "default"
    assert manager.get_nested("debug.level.deeper", "default") == "default"


def write_user_settings(tmp_path, settings):
    user_dir = tmp_path / "user"
    user_dir.mkdir(exist_ok=True)
    (user_dir / "settings.json").write_text(json.dumps(settings))


def test_config_manager_reset(config_env, tmp_path):
    manager, _ = config_env
    write_user_settings(tmp_path, {"debug": {"level": "DEBUG"}})
    manager.reset()
    assert manager.get_nested("debug.level") == "DEBUG"

    (tmp_path / "user" / "settings.json").unlink()
    manager.reset()
    assert manager.get_nested("debug.level") == "WARNING"


def test_config_manager_invalid_file(config_env):
    manager, settings_file = config_env
    settings_file.write_text("{not json")
    manager.reset()
    assert manager.get_all() == {}


def test_user_settings_override_defaults(config_env, tmp_path):
    manager, _ = config_env
    write_user_settings(tmp_path, {"jobs": {"health_threshold_seconds": 60}})
    manager.reset()

    assert manager.get_nested("jobs.health_threshold_seconds") == 60
    # Keys the user file does not mention keep their default
    assert manager.get_nested("jobs.check_interval_seconds") == 2


def test_job_manager_defaults_come_from_config(config_env):
    jobs = JobManager()
    assert jobs.health_threshold == 30.0
    assert jobs.check_interval == 2.0

    explicit = JobManager(health_threshold=1, check_interval=1)
    assert explicit.health_threshold == 1.0


def test_export_directory_from_config(config_env, tmp_path):
    manager, _ = config_env
    write_user_settings(tmp_path, {"exportfile": {"directory": str(tmp_path / "out")}})
    manager.reset()
    assert FileSaveService().directory == tmp_path / "out"


def test_export_directory_defaults_to_documents(config_env, monkeypatch, tmp_path):
    monkeypatch.setattr(PathUtils, "get_user_documents_dir", lambda: tmp_path / "Documents")
    assert FileSaveService().directory == tmp_path / "Documents"
