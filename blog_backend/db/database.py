"""Database engine and session management."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession as SQLModelAsyncSession

from blog_backend.configs import settings
from blog_backend.monitoring import get_logger
from blog_backend.services.storage import FileReleaser

logger = get_logger(__name__)

STATEMENT_TIMEOUT_MS = 30000
PENDING_RELEASES = "pending_releases"


def engine_options(database_url: str) -> dict[str, Any]:
    """
    Build `create_async_engine` keyword arguments for the given backend.

    PostgreSQL (asyncpg) gets a sized pool and server-side timeouts; SQLite
    (aiosqlite) takes neither.
    """
    if make_url(database_url).get_backend_name() == "sqlite":
        return {"echo": settings.DATABASE_ECHO}

    return {
        "echo": settings.DATABASE_ECHO,
        "pool_size": settings.POOL_SIZE,
        "max_overflow": settings.MAX_OVERFLOW,
        "pool_timeout": settings.POOL_TIMEOUT,
        "pool_recycle": settings.POOL_RECYCLE,
        "pool_pre_ping": True,
        "connect_args": {
            "command_timeout": STATEMENT_TIMEOUT_MS / 1000,
            "server_settings": {
                "statement_timeout": str(STATEMENT_TIMEOUT_MS),
                "lock_timeout": str(STATEMENT_TIMEOUT_MS),
            },
        },
    }


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """SQLite ignores ON DELETE CASCADE unless foreign keys are switched on per connection."""
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine.sync_engine, "connect")
    def on_connect(dbapi_connection: Any, connection_record: object) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def _configure_engine_events(engine: AsyncEngine) -> None:
    """Configure connection pool events for debugging."""

    @event.listens_for(engine.sync_engine, "checkout")
    def on_checkout(
        dbapi_connection: object,
        connection_record: object,
        connection_proxy: object,
    ) -> None:
        logger.debug("Connection checked out from pool")

    @event.listens_for(engine.sync_engine, "checkin")
    def on_checkin(dbapi_connection: object, connection_record: object) -> None:
        logger.debug("Connection returned to pool")


engine: AsyncEngine = create_async_engine(
    settings.DATABASE_URL,
    **engine_options(settings.DATABASE_URL),
)
enable_sqlite_foreign_keys(engine)

if settings.DEBUG:
    _configure_engine_events(engine)

async_session_maker: async_sessionmaker[SQLModelAsyncSession] = async_sessionmaker(
    engine,
    class_=SQLModelAsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


def defer_release(session: AsyncSession, file_releaser: FileReleaser, path: str) -> None:
    """Queue a stored file to be released once ``session`` commits."""
    session.info.setdefault(PENDING_RELEASES, []).append((file_releaser, path))


def discard_pending_releases(session: AsyncSession) -> None:
    """Forget queued releases; the rows that referenced the files survive."""
    session.info.pop(PENDING_RELEASES, None)


async def commit(session: AsyncSession) -> None:
    """
    Commit ``session``, then release the files its writes orphaned.

    Nothing is released when the commit raises, so a failed write never
    leaves a row pointing at a deleted file.
    """
    await session.commit()
    pending: list[tuple[FileReleaser, str]] = session.info.pop(PENDING_RELEASES, [])
    for file_releaser, path in pending:
        await file_releaser.release(path)


async def get_session() -> AsyncGenerator[AsyncSession]:
    """
    Dependency for getting async database sessions.

    One session per request; committed when the handler returns, rolled
    back when it raises.

    Yields:
        AsyncSession: Database session
    """
    async with transaction() as session:
        yield session


@asynccontextmanager
async def transaction(
    session_maker: async_sessionmaker[SQLModelAsyncSession] | None = None,
) -> AsyncGenerator[AsyncSession]:
    """
    Context manager for explicit transaction management.

    Files queued with `defer_release` are released after the commit and
    dropped on rollback.

    Args:
        session_maker: Session factory; defaults to the application's

    Yields:
        AsyncSession: Database session within a transaction

    Example:
        ```python
        async with transaction() as session:
            await BlogRepository(session, storage).delete_blog(blog_id)
            # Commits on successful exit, rolls back on exception
        ```
    """
    async with (session_maker or async_session_maker)() as session:
        try:
            yield session
            await commit(session)
        except Exception:
            discard_pending_releases(session)
            await session.rollback()
            logger.exception("Transaction error")
            raise


async def init_db() -> None:
    """
    Create all tables defined in SQLModel models.

    Development convenience; production schemas are managed by Alembic.
    """
    async with engine.begin() as conn:
        # Models must be imported so they register on SQLModel.metadata
        from blog_backend.models import BlogDB, CommentDB, LikeDB, UserDB  # noqa: F401, PLC0415

        await conn.run_sync(SQLModel.metadata.create_all)
        logger.info("Database initialized successfully!")


async def close_db() -> None:
    """Dispose of the engine's connection pool on shutdown."""
    await engine.dispose()
    logger.info("Database connections closed")
