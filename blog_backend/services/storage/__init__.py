"""
Storage services package.

Only a local filesystem backend exists; the protocol keeps repositories
independent of it so tests can hand in a mock.
"""

from blog_backend.services.storage.base import FileReleaser
from blog_backend.services.storage.local import LocalStorage


def get_storage_service() -> FileReleaser:
    """
    Get the configured storage service.

    Returns:
        FileReleaser: Storage backend used to release orphaned files
    """
    return LocalStorage()


__all__ = [
    "FileReleaser",
    "LocalStorage",
    "get_storage_service",
]
