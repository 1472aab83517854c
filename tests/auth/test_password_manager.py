"""Tests for Argon2 password hashing."""

import pytest

from blog_backend.managers.password_manager import (
    PasswordHasher,
    hash_password,
    verify_password,
)


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(memory_cost=1024, time_cost=1, parallelism=1)


class TestPasswordHasher:
    def test_hash_is_argon2id(self, hasher: PasswordHasher) -> None:
        hashed = hasher.hash("s3cretpass")

        assert hashed.startswith("$argon2id$")
        assert hashed != "s3cretpass"

    def test_same_password_gets_different_salts(self, hasher: PasswordHasher) -> None:
        assert hasher.hash("s3cretpass") != hasher.hash("s3cretpass")

    def test_verify(self, hasher: PasswordHasher) -> None:
        hashed = hasher.hash("s3cretpass")

        assert hasher.verify("s3cretpass", hashed) is True
        assert hasher.verify("wrongpass1", hashed) is False

    def test_empty_password_is_rejected(self, hasher: PasswordHasher) -> None:
        with pytest.raises(ValueError, match="empty"):
            hasher.hash("")

    @pytest.mark.parametrize("stored", [None, "", "   "])
    def test_missing_hash_never_verifies(self, hasher: PasswordHasher, stored: str | None) -> None:
        assert hasher.verify("s3cretpass", stored) is False

    def test_corrupted_hash_never_verifies(self, hasher: PasswordHasher) -> None:
        assert hasher.verify("s3cretpass", "not-a-hash") is False


async def test_async_helpers_round_trip() -> None:
    hashed = await hash_password("s3cretpass")

    assert await verify_password("s3cretpass", hashed) is True
    assert await verify_password("other-pass1", hashed) is False
