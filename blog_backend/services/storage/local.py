"""
Local filesystem storage implementation.

Files live under the configured uploads directory. Stored paths may be
given relative to that directory, prefixed with it (``uploads/covers/a.jpg``)
or in the served form (``/uploads/covers/a.jpg``).
"""

from pathlib import Path, PurePosixPath

import aiofiles.os

from blog_backend.configs.settings import settings
from blog_backend.errors.storage import StorageError
from blog_backend.monitoring import get_logger

logger = get_logger(__name__)


class LocalStorage:
    """Local filesystem storage implementation."""

    def __init__(self, uploads_dir: Path | None = None) -> None:
        self.uploads_dir = uploads_dir or settings.UPLOADS_DIR

    def _get_file_path(self, path: str) -> Path | None:
        """
        Map a stored path onto the uploads directory.

        Returns None when the path points outside of it.
        """
        parts = PurePosixPath(path.lstrip("/")).parts
        if parts and parts[0] == self.uploads_dir.name:
            parts = parts[1:]
        if not parts:
            return None

        root = self.uploads_dir.resolve()
        file_path = root.joinpath(*parts).resolve()
        if not file_path.is_relative_to(root):
            return None
        return file_path

    async def release(self, path: str) -> bool:
        """
        Delete a file from the uploads directory.

        Args:
            path: Stored path of the file

        Returns:
            bool: True if the file was deleted, False if it did not exist

        Raises:
            StorageError: If the file exists but cannot be removed
        """
        file_path = self._get_file_path(path)
        if file_path is None:
            logger.warning(f"Refusing to release file outside uploads directory: {path}")
            return False

        try:
            await aiofiles.os.remove(file_path)
        except FileNotFoundError:
            logger.info(f"File already removed: {path}")
            return False
        except OSError as e:
            logger.exception(f"Failed to remove file {path}")
            raise StorageError(path=path) from e

        logger.info(f"Released file: {path}")
        return True
