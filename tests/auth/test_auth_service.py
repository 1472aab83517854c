"""Tests for AuthService against a real user repository."""

from datetime import timedelta
from uuid import uuid4

import pytest
from pydantic import SecretStr
from sqlmodel.ext.asyncio.session import AsyncSession

from blog_backend.configs import settings
from blog_backend.configs.settings import RESET_DONE_MESSAGE, RESET_REQUESTED_MESSAGE
from blog_backend.errors.auth import (
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    InvalidResetTokenError,
    InvalidTokenError,
    UserNotFoundError,
)
from blog_backend.managers.token_manager import (
    create_refresh_token,
    decode_access_token,
)
from blog_backend.repositories import UserRepository
from blog_backend.schemas.auth import SignupRequest
from blog_backend.services.auth import AuthService
from blog_backend.utils.helpers import hash_token, utc_now

PASSWORD = "s3cretpass"


@pytest.fixture
def user_repo(session: AsyncSession) -> UserRepository:
    return UserRepository(session)


@pytest.fixture
def service(user_repo: UserRepository) -> AuthService:
    return AuthService(user_repo)


def signup_request(email: str = "jane@example.com") -> SignupRequest:
    return SignupRequest(name="Jane Doe", email=email, password=SecretStr(PASSWORD))


class TestSignup:
    async def test_returns_tokens_for_new_user(self, service: AuthService) -> None:
        result = await service.signup(signup_request())

        assert result.user.email == "jane@example.com"
        token_data = decode_access_token(result.access_token)
        assert token_data is not None
        assert token_data.user_id == result.user.id

    async def test_stores_a_hash_not_the_password(
        self,
        service: AuthService,
        user_repo: UserRepository,
    ) -> None:
        await service.signup(signup_request())

        stored = await user_repo.get_by_email("jane@example.com")
        assert stored is not None
        assert stored.password_hash != PASSWORD
        assert stored.password_hash.startswith("$argon2")

    async def test_duplicate_email(self, service: AuthService) -> None:
        await service.signup(signup_request())

        with pytest.raises(EmailAlreadyRegisteredError):
            await service.signup(signup_request(email="JANE@example.com"))


class TestSignin:
    async def test_valid_credentials(self, service: AuthService) -> None:
        created = await service.signup(signup_request())

        result = await service.signin("Jane@Example.com", PASSWORD)

        assert result.user.id == created.user.id

    async def test_wrong_password(self, service: AuthService) -> None:
        await service.signup(signup_request())

        with pytest.raises(InvalidCredentialsError):
            await service.signin("jane@example.com", "wrongpass1")

    async def test_unknown_email_gets_the_same_error(self, service: AuthService) -> None:
        with pytest.raises(InvalidCredentialsError) as exc_info:
            await service.signin("nobody@example.com", PASSWORD)

        assert exc_info.value.detail == "Invalid email or password"


class TestPasswordReset:
    async def test_forgot_then_reset(
        self,
        service: AuthService,
        user_repo: UserRepository,
    ) -> None:
        await service.signup(signup_request())

        issued = await service.forgot_password("jane@example.com")
        assert issued.message == RESET_REQUESTED_MESSAGE
        assert issued.reset_token is not None

        stored = await user_repo.get_by_email("jane@example.com")
        assert stored is not None
        assert stored.password_reset_token_hash == hash_token(issued.reset_token)

        done = await service.reset_password(issued.reset_token, "n3wpassword")
        assert done.message == RESET_DONE_MESSAGE

        await service.signin("jane@example.com", "n3wpassword")
        with pytest.raises(InvalidCredentialsError):
            await service.signin("jane@example.com", PASSWORD)

    async def test_token_is_single_use(self, service: AuthService) -> None:
        await service.signup(signup_request())
        issued = await service.forgot_password("jane@example.com")
        assert issued.reset_token is not None

        await service.reset_password(issued.reset_token, "n3wpassword")

        with pytest.raises(InvalidResetTokenError):
            await service.reset_password(issued.reset_token, "an0therpass")

    async def test_unknown_email_looks_the_same(self, service: AuthService) -> None:
        issued = await service.forgot_password("nobody@example.com")

        assert issued.message == RESET_REQUESTED_MESSAGE
        assert issued.reset_token is None

    async def test_token_hidden_unless_exposed(
        self,
        service: AuthService,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setattr(settings, "EXPOSE_RESET_TOKEN", False)
        await service.signup(signup_request())

        issued = await service.forgot_password("jane@example.com")

        assert issued.reset_token is None

    async def test_expired_token(
        self,
        service: AuthService,
        user_repo: UserRepository,
    ) -> None:
        await service.signup(signup_request())
        stored = await user_repo.get_by_email("jane@example.com")
        assert stored is not None
        await user_repo.set_reset_token(
            stored,
            hash_token("stale-token"),
            utc_now() - timedelta(minutes=1),
        )

        with pytest.raises(InvalidResetTokenError):
            await service.reset_password("stale-token", "n3wpassword")

    async def test_unknown_token(self, service: AuthService) -> None:
        with pytest.raises(InvalidResetTokenError):
            await service.reset_password("made-up", "n3wpassword")


class TestRefresh:
    async def test_issues_new_pair(self, service: AuthService) -> None:
        created = await service.signup(signup_request())

        refreshed = await service.refresh_access_token(created.refresh_token)

        assert refreshed.user.id == created.user.id
        assert decode_access_token(refreshed.access_token) is not None

    async def test_rejects_access_token(self, service: AuthService) -> None:
        created = await service.signup(signup_request())

        with pytest.raises(InvalidTokenError):
            await service.refresh_access_token(created.access_token)

    async def test_rejects_garbage(self, service: AuthService) -> None:
        with pytest.raises(InvalidTokenError):
            await service.refresh_access_token("garbage")

    async def test_deleted_user(self, service: AuthService) -> None:
        token = create_refresh_token(user_id=uuid4(), email="gone@example.com")

        with pytest.raises(UserNotFoundError):
            await service.refresh_access_token(token)
