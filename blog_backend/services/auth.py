"""Authentication service: signup, signin, password reset and token refresh."""

import secrets
from datetime import UTC, timedelta

from blog_backend.configs import settings
from blog_backend.configs.settings import RESET_DONE_MESSAGE, RESET_REQUESTED_MESSAGE
from blog_backend.errors.auth import (
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    InvalidResetTokenError,
    InvalidTokenError,
    UserNotFoundError,
)
from blog_backend.errors.database import DuplicateEntryError
from blog_backend.managers.password_manager import hash_password, verify_password
from blog_backend.managers.token_manager import (
    create_access_token,
    create_refresh_token,
    decode_refresh_token,
)
from blog_backend.models import UserDB
from blog_backend.monitoring import get_logger
from blog_backend.repositories import UserRepository
from blog_backend.schemas.auth import (
    AuthResult,
    MessageResponse,
    PasswordResetIssued,
    SignupRequest,
)
from blog_backend.schemas.user import UserResponse
from blog_backend.utils.helpers import hash_token, utc_now

logger = get_logger(__name__)


class AuthService:
    """
    Service for handling user authentication.

    Tokens are stateless JWTs; logout is handled by clearing the auth cookie
    and needs nothing from this service.
    """

    def __init__(self, user_repo: UserRepository) -> None:
        """
        Initialize the auth service.

        Args:
            user_repo: User repository for database operations
        """
        self.user_repo = user_repo

    def create_token_for_user(self, user: UserDB) -> AuthResult:
        """
        Issue an access and refresh token pair for a user.

        Args:
            user: User entity

        Returns:
            AuthResult: Token pair together with the user's public profile
        """
        access_token = create_access_token(user_id=user.id, email=user.email)
        refresh_token = create_refresh_token(user_id=user.id, email=user.email)
        return AuthResult(
            access_token=access_token,
            refresh_token=refresh_token,
            user=UserResponse.model_validate(user),
        )

    async def signup(self, data: SignupRequest) -> AuthResult:
        """
        Register a new account and sign it in.

        Raises:
            EmailAlreadyRegisteredError: If the email already has an account
        """
        if await self.user_repo.get_by_email(data.email):
            raise EmailAlreadyRegisteredError

        password_hash = await hash_password(data.password.get_secret_value())
        try:
            user = await self.user_repo.create(data, password_hash)
        except DuplicateEntryError as e:
            # Lost a race with a concurrent signup for the same email
            raise EmailAlreadyRegisteredError from e

        return self.create_token_for_user(user)

    async def signin(self, email: str, password: str) -> AuthResult:
        """
        Authenticate by email and password.

        Raises:
            InvalidCredentialsError: If the email is unknown or the password is wrong
        """
        user = await self.user_repo.get_by_email(email)
        password_hash = user.password_hash if user else None

        if not await verify_password(password, password_hash) or user is None:
            logger.warning("Failed signin attempt")
            raise InvalidCredentialsError

        return self.create_token_for_user(user)

    async def forgot_password(self, email: str) -> PasswordResetIssued:
        """
        Issue a password reset token.

        Only the SHA-256 digest of the token is stored. The response is the
        same whether or not the email belongs to an account; the raw token is
        included only when ``EXPOSE_RESET_TOKEN`` is enabled.
        """
        user = await self.user_repo.get_by_email(email)
        if user is None:
            return PasswordResetIssued(message=RESET_REQUESTED_MESSAGE)

        reset_token = secrets.token_urlsafe(32)
        expires_at = utc_now() + timedelta(minutes=settings.PASSWORD_RESET_EXPIRE_MINUTES)
        await self.user_repo.set_reset_token(user, hash_token(reset_token), expires_at)
        logger.info(f"Password reset token issued for user {user.id}")

        return PasswordResetIssued(
            message=RESET_REQUESTED_MESSAGE,
            reset_token=reset_token if settings.EXPOSE_RESET_TOKEN else None,
        )

    async def reset_password(self, reset_token: str, new_password: str) -> MessageResponse:
        """
        Set a new password using a reset token.

        Raises:
            InvalidResetTokenError: If the token is unknown or expired
        """
        user = await self.user_repo.get_by_reset_token_hash(hash_token(reset_token))
        if user is None or user.password_reset_expires_at is None:
            raise InvalidResetTokenError

        expires_at = user.password_reset_expires_at
        if expires_at.tzinfo is None:
            # SQLite hands timestamps back without a zone
            expires_at = expires_at.replace(tzinfo=UTC)
        if expires_at <= utc_now():
            raise InvalidResetTokenError

        password_hash = await hash_password(new_password)
        await self.user_repo.set_password(user, password_hash)
        logger.info(f"Password reset for user {user.id}")
        return MessageResponse(message=RESET_DONE_MESSAGE)

    async def refresh_access_token(self, refresh_token: str) -> AuthResult:
        """
        Exchange a valid refresh token for a new token pair.

        Raises:
            InvalidTokenError: If the refresh token is invalid or expired
            UserNotFoundError: If the user no longer exists
        """
        token_data = decode_refresh_token(refresh_token)
        if token_data is None:
            raise InvalidTokenError("Invalid or expired refresh token")

        user = await self.user_repo.get_by_id(token_data.user_id)
        if user is None:
            raise UserNotFoundError

        return self.create_token_for_user(user)
