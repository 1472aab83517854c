"""Tests for the JWT token manager."""

from datetime import timedelta
from uuid import uuid4

from jose import jwt

from blog_backend.configs import settings
from blog_backend.managers.token_manager import (
    create_access_token,
    create_refresh_token,
    decode_access_token,
    decode_refresh_token,
)


class TestCreateAccessToken:
    """Test cases for create_access_token function."""

    def test_token_contains_correct_claims(self) -> None:
        """Test that access token decodes back to the user it was issued for."""
        user_id = uuid4()

        token = create_access_token(user_id=user_id, email="jane@example.com")
        token_data = decode_access_token(token)

        assert token_data is not None
        assert token_data.user_id == user_id
        assert token_data.email == "jane@example.com"
        assert token_data.token_type == "access"
        assert token_data.jti

    def test_each_token_gets_a_unique_jti(self) -> None:
        user_id = uuid4()

        first = decode_access_token(create_access_token(user_id=user_id, email="a@b.io"))
        second = decode_access_token(create_access_token(user_id=user_id, email="a@b.io"))

        assert first is not None
        assert second is not None
        assert first.jti != second.jti

    def test_custom_expiration(self) -> None:
        """Test that custom expiration ends up in the exp claim."""
        token = create_access_token(
            user_id=uuid4(),
            email="jane@example.com",
            expires_delta=timedelta(hours=2),
        )

        claims = jwt.get_unverified_claims(token)
        assert abs(claims["exp"] - claims["iat"] - 2 * 60 * 60) <= 1


class TestCreateRefreshToken:
    """Test cases for create_refresh_token function."""

    def test_token_contains_correct_claims(self) -> None:
        user_id = uuid4()

        token_data = decode_refresh_token(create_refresh_token(user_id=user_id, email="a@b.io"))

        assert token_data is not None
        assert token_data.user_id == user_id
        assert token_data.token_type == "refresh"


class TestDecodeToken:
    """Test cases for token validation."""

    def test_refresh_token_is_not_an_access_token(self) -> None:
        token = create_refresh_token(user_id=uuid4(), email="a@b.io")

        assert decode_access_token(token) is None

    def test_access_token_is_not_a_refresh_token(self) -> None:
        token = create_access_token(user_id=uuid4(), email="a@b.io")

        assert decode_refresh_token(token) is None

    def test_expired_token(self) -> None:
        token = create_access_token(
            user_id=uuid4(),
            email="a@b.io",
            expires_delta=timedelta(seconds=-1),
        )

        assert decode_access_token(token) is None

    def test_wrong_signature(self) -> None:
        token = jwt.encode(
            {
                "sub": str(uuid4()),
                "email": "a@b.io",
                "jti": "x",
                "type": "access",
                "iss": settings.JWT_ISSUER,
                "aud": settings.JWT_AUDIENCE,
            },
            "not-the-server-secret",
            algorithm=settings.ALGORITHM,
        )

        assert decode_access_token(token) is None

    def test_garbage(self) -> None:
        assert decode_access_token("not.a.jwt") is None
        assert decode_access_token("") is None

    def test_subject_must_be_a_uuid(self) -> None:
        token = jwt.encode(
            {
                "sub": "42",
                "email": "a@b.io",
                "jti": "x",
                "type": "access",
                "iss": settings.JWT_ISSUER,
                "aud": settings.JWT_AUDIENCE,
            },
            settings.SECRET_KEY.get_secret_value(),
            algorithm=settings.ALGORITHM,
        )

        assert decode_access_token(token) is None
