"""Authentication and authorization errors."""

from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_403_FORBIDDEN,
    HTTP_409_CONFLICT,
)

from blog_backend.errors.base import BaseAppError, create_exception_handler
from blog_backend.monitoring import get_logger

logger = get_logger(__name__)


class UserAuthenticationError(BaseAppError):
    """Base class for authentication errors."""

    def __init__(
        self,
        detail: str = "Authentication failed",
        status_code: int = HTTP_401_UNAUTHORIZED,
    ) -> None:
        super().__init__(detail, status_code)


class InvalidCredentialsError(UserAuthenticationError):
    """Raised when credentials are invalid."""

    def __init__(self) -> None:
        super().__init__("Invalid email or password", HTTP_401_UNAUTHORIZED)


class InvalidTokenError(UserAuthenticationError):
    """Raised when an access or refresh token cannot be validated."""

    def __init__(self, detail: str = "Could not validate credentials") -> None:
        super().__init__(detail, HTTP_401_UNAUTHORIZED)


class UserNotFoundError(UserAuthenticationError):
    """Raised when a token refers to a user that no longer exists."""

    def __init__(self) -> None:
        super().__init__("User not found", HTTP_401_UNAUTHORIZED)


class InvalidResetTokenError(UserAuthenticationError):
    """Raised when a password reset token is unknown or expired."""

    def __init__(self) -> None:
        super().__init__("Password reset token is invalid or has expired", HTTP_400_BAD_REQUEST)


class EmailAlreadyRegisteredError(UserAuthenticationError):
    """Raised on signup with an email that already has an account."""

    def __init__(self) -> None:
        super().__init__("Email is already registered", HTTP_409_CONFLICT)


class PermissionDeniedError(BaseAppError):
    """Raised when the current user does not own the target resource."""

    def __init__(self, detail: str = "You do not have permission to modify this resource") -> None:
        super().__init__(detail, HTTP_403_FORBIDDEN)


auth_exception_handler = create_exception_handler(logger)
