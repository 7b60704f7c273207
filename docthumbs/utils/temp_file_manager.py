# docthumbs/utils/temp_file_manager.py
"""
Temporary File Management Utilities

Provides scoped temporary files for format normalisation and frame
extraction. Every file handed out by the manager is removed when its scope
exits, whether the work inside succeeded or raised.
"""

import os
import shutil
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator, Optional, Union

from ..enums import LoggerName
from ..services.logger import get_service_logger

logger = get_service_logger(LoggerName.SYSTEM)

COPY_CHUNK_SIZE = 64 * 1024


def delete_quietly(path: Optional[Union[str, Path]]) -> None:
    """
    Remove a file if it exists, logging (not raising) on failure.

    Args:
        path: File to remove; None is ignored
    """
    if path is None:
        return
    try:
        Path(path).unlink(missing_ok=True)
    except OSError as e:
        logger.warning(f"Failed to remove temporary file {path}: {e}")


class TempFileManager:
    """
    Manager for temporary file operations with guaranteed cleanup.

    Handles creation and removal of the temporary files the pipeline needs
    while handing binary content to external engines.
    """

    def __init__(self, base_temp_dir: Optional[Union[str, Path]] = None):
        """
        Initialize temporary file manager.

        Args:
            base_temp_dir: Base directory for temporary files (defaults to system temp)
        """
        self.base_temp_dir = (
            Path(base_temp_dir) if base_temp_dir else Path(tempfile.gettempdir())
        )
        self.base_temp_dir.mkdir(parents=True, exist_ok=True)

    def create_temp_path(self, prefix: str, suffix: Optional[str] = None) -> Path:
        """
        Create an empty temporary file and return its path.

        The caller owns the file and must remove it (see delete_quietly).
        """
        fd, name = tempfile.mkstemp(
            prefix=prefix, suffix=suffix or "", dir=str(self.base_temp_dir)
        )
        os.close(fd)
        return Path(name)

    @contextmanager
    def temporary_file(
        self, prefix: str, suffix: Optional[str] = None
    ) -> Iterator[Path]:
        """
        Yield a fresh temporary file path, removing the file on exit.

        Args:
            prefix: File name prefix
            suffix: Optional file name suffix (e.g. ".jpg")
        """
        path = self.create_temp_path(prefix, suffix)
        try:
            yield path
        finally:
            delete_quietly(path)

    @contextmanager
    def materialize(
        self, stream: BinaryIO, prefix: str, suffix: Optional[str] = None
    ) -> Iterator[Path]:
        """
        Copy a binary stream into a scoped temporary file.

        Args:
            stream: Readable binary stream (consumed, not closed)
            prefix: File name prefix
            suffix: Optional file name suffix

        Yields:
            Path of the temporary copy, removed on exit
        """
        with self.temporary_file(prefix, suffix) as path:
            with open(path, "wb") as out:
                shutil.copyfileobj(stream, out, COPY_CHUNK_SIZE)
            yield path
