from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR

from blog_backend.errors.base import BaseAppError, create_exception_handler
from blog_backend.monitoring import get_logger

logger = get_logger(__name__)


class PasswordHashingError(BaseAppError):
    """Base error for password hasher module."""

    def __init__(self, detail: str = "Password hashing failed") -> None:
        super().__init__(detail, HTTP_500_INTERNAL_SERVER_ERROR)


password_hashing_exception_handler = create_exception_handler(logger)
