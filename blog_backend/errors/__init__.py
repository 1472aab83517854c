from blog_backend.errors.auth import (
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    InvalidResetTokenError,
    InvalidTokenError,
    PermissionDeniedError,
    UserAuthenticationError,
    UserNotFoundError,
    auth_exception_handler,
)
from blog_backend.errors.base import BaseAppError, create_exception_handler
from blog_backend.errors.database import (
    DatabaseError,
    DuplicateEntryError,
    RecordNotFoundError,
    database_exception_handler,
)
from blog_backend.errors.password_hasher import (
    PasswordHashingError,
    password_hashing_exception_handler,
)
from blog_backend.errors.storage import StorageError, storage_exception_handler
from blog_backend.errors.validation import validation_exception_handler

__all__ = [
    "BaseAppError",
    "DatabaseError",
    "DuplicateEntryError",
    "EmailAlreadyRegisteredError",
    "InvalidCredentialsError",
    "InvalidResetTokenError",
    "InvalidTokenError",
    "PasswordHashingError",
    "PermissionDeniedError",
    "RecordNotFoundError",
    "StorageError",
    "UserAuthenticationError",
    "UserNotFoundError",
    "auth_exception_handler",
    "create_exception_handler",
    "database_exception_handler",
    "password_hashing_exception_handler",
    "storage_exception_handler",
    "validation_exception_handler",
]
