"""Database engine and session helpers."""

from blog_backend.db.database import (
    async_session_maker,
    close_db,
    commit,
    defer_release,
    discard_pending_releases,
    enable_sqlite_foreign_keys,
    engine,
    engine_options,
    get_session,
    init_db,
    transaction,
)

__all__ = [
    "async_session_maker",
    "close_db",
    "commit",
    "defer_release",
    "discard_pending_releases",
    "enable_sqlite_foreign_keys",
    "engine",
    "engine_options",
    "get_session",
    "init_db",
    "transaction",
]
