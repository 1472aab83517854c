"""Errors raised while managing uploaded files on disk."""

from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR

from blog_backend.errors.base import BaseAppError, create_exception_handler
from blog_backend.monitoring import get_logger

logger = get_logger(__name__)


class StorageError(BaseAppError):
    """Raised when an uploaded file cannot be removed."""

    def __init__(
        self,
        path: str,
        detail: str = "We couldn't clean up an uploaded file.",
    ) -> None:
        super().__init__(detail=detail, status_code=HTTP_500_INTERNAL_SERVER_ERROR)
        self.path = path


storage_exception_handler = create_exception_handler(logger)
