# src/terminal_shell/core/services/file_save_service.py
import logging
from pathlib import Path
from typing import Optional, Union

from terminal_shell.core.managers.config_manager import config_manager
from terminal_shell.core.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)


class FileSaveService:
    """Saves exported command results as files in the export directory."""

    def __init__(self, directory: Optional[Union[str, Path]] = None):
        configured = directory or config_manager.get_nested("exportfile.directory") or None
        self.directory = Path(configured) if configured else PathUtils.get_user_documents_dir()

    def save(self, filename: str, mime_type: str, content: str) -> Path:
        """
        Writes `content` to `<directory>/<filename>` and returns the path.
        Only the base name of `filename` is used.
        """
        self.directory.mkdir(parents=True, exist_ok=True)
        output_file = self.directory / Path(filename).name
        output_file.write_text(content, encoding="utf-8")
        logger.info("Saved %s file: %s (%d chars)", mime_type, output_file, len(content))
        return output_file
