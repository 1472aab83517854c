# tests/conftest.py
"""Root pytest configuration and shared fixtures."""

import os

# Settings are read on first import of the package, so the test
# environment has to be in place before anything from blog_backend loads
os.environ["ENVIRONMENT"] = "testing"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SECRET_KEY"] = "test-secret-key-with-enough-entropy-0123456789"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["AUTH_COOKIE_SECURE"] = "false"
os.environ["EXPOSE_RESET_TOKEN"] = "true"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["ARGON2_MEMORY_COST"] = "1024"
os.environ["ARGON2_TIME_COST"] = "1"
os.environ["ARGON2_PARALLELISM"] = "1"

from collections.abc import AsyncGenerator, Awaitable, Callable  # noqa: E402
from unittest.mock import AsyncMock  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import SQLModel  # noqa: E402
from sqlmodel.ext.asyncio.session import AsyncSession  # noqa: E402

from blog_backend.configs import settings  # noqa: E402
from blog_backend.db import enable_sqlite_foreign_keys, get_session, transaction  # noqa: E402
from blog_backend.dependencies import get_storage  # noqa: E402
from blog_backend.main import app  # noqa: E402
from blog_backend.managers.rate_limiter import limiter  # noqa: E402
from blog_backend.models import BlogDB, CommentDB, LikeDB, UserDB  # noqa: E402, F401

# Placeholder; repository tests never verify passwords
FAKE_PASSWORD_HASH = "$argon2id$v=19$m=1024,t=1,p=1$c29tZXNhbHQ$c29tZWhhc2g"

type UserFactory = Callable[..., Awaitable[UserDB]]


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine]:
    """Fresh in-memory SQLite database with foreign keys enforced."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture
async def session(
    session_maker: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession]:
    async with session_maker() as session:
        yield session


@pytest.fixture
def file_releaser() -> AsyncMock:
    """Stand-in storage backend that records released paths."""
    releaser = AsyncMock()
    releaser.release = AsyncMock(return_value=True)
    return releaser


@pytest.fixture
def make_user(session: AsyncSession) -> UserFactory:
    """Insert users directly, bypassing password hashing."""
    counter = 0

    async def _make_user(name: str = "Jane Doe", email: str | None = None) -> UserDB:
        nonlocal counter
        counter += 1
        user = UserDB(
            name=name,
            email=email or f"user{counter}@example.com",
            password_hash=FAKE_PASSWORD_HASH,
        )
        session.add(user)
        await session.flush()
        return user

    return _make_user


@pytest.fixture
async def user(make_user: UserFactory) -> UserDB:
    return await make_user()


@pytest.fixture
async def client(
    session_maker: async_sessionmaker[AsyncSession],
    file_releaser: AsyncMock,
) -> AsyncGenerator[AsyncClient]:
    """HTTP client bound to the app, the test database and a mocked storage backend."""

    async def override_get_session() -> AsyncGenerator[AsyncSession]:
        async with transaction(session_maker) as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_storage] = lambda: file_releaser
    limiter.enabled = False

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def public_reads(monkeypatch: pytest.MonkeyPatch) -> None:
    """Serve read endpoints without authentication."""
    monkeypatch.setattr(settings, "REQUIRE_AUTH_FOR_READS", False)


@pytest.fixture
def private_reads(monkeypatch: pytest.MonkeyPatch) -> None:
    """Require authentication on read endpoints."""
    monkeypatch.setattr(settings, "REQUIRE_AUTH_FOR_READS", True)
