"""Token manager for issuing and verifying JWT access and refresh tokens."""

from datetime import UTC, datetime, timedelta
from typing import Literal
from uuid import UUID, uuid4

from jose import JWTError, jwt

from blog_backend.configs import settings
from blog_backend.schemas.auth import TokenData

type TokenType = Literal["access", "refresh"]


def _encode(user_id: UUID, email: str, token_type: TokenType, expire: datetime) -> str:
    now = datetime.now(UTC)
    to_encode = {
        "sub": str(user_id),
        "email": email,
        "jti": str(uuid4()),
        "iat": now,
        "exp": expire,
        "iss": settings.JWT_ISSUER,
        "aud": settings.JWT_AUDIENCE,
        "type": token_type,
    }
    return jwt.encode(
        to_encode,
        settings.SECRET_KEY.get_secret_value(),
        algorithm=settings.ALGORITHM,
    )


def create_access_token(
    user_id: UUID,
    email: str,
    expires_delta: timedelta | None = None,
) -> str:
    """
    Create a new access token.

    Args:
        user_id: User's UUID
        email: User's email
        expires_delta: Optional expiration time delta

    Returns:
        str: Encoded JWT access token
    """
    expire = datetime.now(UTC) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    return _encode(user_id, email, "access", expire)


def create_refresh_token(
    user_id: UUID,
    email: str,
    expires_delta: timedelta | None = None,
) -> str:
    """
    Create a new refresh token.

    Args:
        user_id: User's UUID
        email: User's email
        expires_delta: Optional expiration time delta

    Returns:
        str: Encoded JWT refresh token
    """
    expire = datetime.now(UTC) + (
        expires_delta or timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS)
    )
    return _encode(user_id, email, "refresh", expire)


def _decode_token(token: str, expected_type: TokenType) -> TokenData | None:
    """
    Decode and validate a JWT token.

    Args:
        token: JWT token string
        expected_type: Expected token type ('access' or 'refresh')

    Returns:
        TokenData | None: Decoded token data or None if invalid
    """
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY.get_secret_value(),
            algorithms=[settings.ALGORITHM],
            audience=settings.JWT_AUDIENCE,
            issuer=settings.JWT_ISSUER,
        )
    except JWTError:
        return None

    user_id: str | None = payload.get("sub")
    email: str | None = payload.get("email")
    jti: str | None = payload.get("jti")
    token_type: str | None = payload.get("type")

    if not user_id or not email or not jti or token_type != expected_type:
        return None

    try:
        return TokenData(user_id=UUID(user_id), email=email, jti=jti, token_type=token_type)
    except ValueError:
        return None


def decode_access_token(token: str) -> TokenData | None:
    return _decode_token(token, "access")


def decode_refresh_token(token: str) -> TokenData | None:
    return _decode_token(token, "refresh")
