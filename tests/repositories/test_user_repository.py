# tests/repositories/test_user_repository.py
"""Tests for UserRepository."""

from datetime import timedelta
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
from pydantic import SecretStr
from sqlalchemy import func, select
from sqlmodel.ext.asyncio.session import AsyncSession

from blog_backend.db import commit
from blog_backend.errors.database import DuplicateEntryError
from blog_backend.models import BlogDB, CommentDB, LikeDB, UserDB
from blog_backend.repositories import UserRepository
from blog_backend.schemas.auth import SignupRequest
from blog_backend.schemas.user import UserUpdate
from blog_backend.utils.helpers import hash_token, utc_now


@pytest.fixture
def repo(session: AsyncSession, file_releaser: AsyncMock) -> UserRepository:
    return UserRepository(session, file_releaser=file_releaser)


def signup(email: str = "Jane@Example.com") -> SignupRequest:
    return SignupRequest(name="Jane Doe", email=email, password=SecretStr("s3cretpass"))


async def test_create_normalizes_email(repo: UserRepository) -> None:
    user = await repo.create(signup(), password_hash="hash")

    assert user.email == "jane@example.com"
    assert user.password_hash == "hash"
    assert await repo.get_by_email("JANE@example.com") == user


async def test_create_duplicate_email(repo: UserRepository) -> None:
    await repo.create(signup(), password_hash="hash")

    with pytest.raises(DuplicateEntryError):
        await repo.create(signup(), password_hash="hash")


async def test_get_by_id_missing(repo: UserRepository) -> None:
    assert await repo.get_by_id(uuid4()) is None


async def test_update_only_sent_fields(repo: UserRepository, user: UserDB) -> None:
    updated = await repo.update(user.id, UserUpdate(bio="Writes about food"))

    assert updated is not None
    assert updated.bio == "Writes about food"
    assert updated.name == "Jane Doe"
    assert updated.updated_at is not None


async def test_update_missing_user(repo: UserRepository) -> None:
    assert await repo.update(uuid4(), UserUpdate(name="Nobody")) is None


async def test_reset_token_round_trip(repo: UserRepository, user: UserDB) -> None:
    digest = hash_token("raw-token")
    await repo.set_reset_token(user, digest, utc_now() + timedelta(minutes=30))

    found = await repo.get_by_reset_token_hash(digest)
    assert found is not None
    assert found.id == user.id

    await repo.set_password(found, "new-hash")

    assert found.password_hash == "new-hash"
    assert found.password_reset_token_hash is None
    assert found.password_reset_expires_at is None
    assert await repo.get_by_reset_token_hash(digest) is None


class TestDeleteUser:
    async def test_cascades_and_releases_files(
        self,
        repo: UserRepository,
        session: AsyncSession,
        make_user,
        file_releaser: AsyncMock,
    ) -> None:
        author = await make_user(name="Author")
        reader = await make_user(name="Reader")
        author.profile_image = "uploads/avatars/author.png"
        with_cover = BlogDB(
            user_id=author.id,
            title="With cover",
            content="Body",
            cover_image="uploads/covers/one.jpg",
        )
        without_cover = BlogDB(user_id=author.id, title="No cover", content="Body")
        session.add_all([author, with_cover, without_cover])
        await session.flush()
        session.add_all(
            [
                CommentDB(blog_id=with_cover.id, user_id=reader.id, content="Nice"),
                LikeDB(user_id=reader.id, blog_id=with_cover.id),
            ],
        )
        await session.flush()

        assert await repo.delete(author.id) is True
        file_releaser.release.assert_not_awaited()
        await commit(session)

        released = sorted(call.args[0] for call in file_releaser.release.await_args_list)
        assert released == ["uploads/avatars/author.png", "uploads/covers/one.jpg"]
        for model in (BlogDB, CommentDB, LikeDB):
            assert await session.scalar(select(func.count()).select_from(model)) == 0
        assert await repo.get_by_id(reader.id) is not None

    async def test_missing_user(self, repo: UserRepository, file_releaser: AsyncMock) -> None:
        assert await repo.delete(uuid4()) is False
        file_releaser.release.assert_not_awaited()
