"""
Base storage protocol for uploaded files.

Uploads themselves happen outside this service; blogs and users only store
the resulting path. What the application needs from a backend is the
ability to release a file once nothing references it anymore.
"""

from abc import abstractmethod
from typing import Protocol


class FileReleaser(Protocol):
    """Removes a stored file that no row references anymore."""

    @abstractmethod
    async def release(self, path: str) -> bool:
        """
        Release a stored file.

        Args:
            path: Path as stored on the blog or user row

        Returns:
            bool: True if a file was removed, False if it was already gone
        """
        ...
