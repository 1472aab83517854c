from datetime import UTC, datetime
from hashlib import sha256
from math import ceil

from fastapi import Request


def host(request: Request) -> str:
    """Return the host IP address."""
    return request.client.host if request.client else "unknown"


def utc_now() -> datetime:
    """Return the current UTC time truncated to whole seconds."""
    return datetime.now(tz=UTC).replace(microsecond=0)


def today_str() -> str:
    """Return the current local time as a string."""
    return datetime.now(datetime.now().astimezone().tzinfo).strftime("%Y-%m-%d %H:%M:%S")


def page_count(total: int, limit: int) -> int:
    """
    Number of pages needed to show `total` rows, `limit` per page.

    Args:
        total: Total number of distinct rows
        limit: Page size (must be positive)

    Returns:
        int: ceil(total / limit)
    """
    if limit <= 0:
        mssg = "limit must be a positive integer"
        raise ValueError(mssg)
    return ceil(total / limit)


def page_offset(page: int, limit: int) -> int:
    """Translate a 1-based page number into a row offset."""
    return (page - 1) * limit


def hash_token(token: str) -> str:
    """Return the SHA-256 hex digest of an opaque token."""
    return sha256(token.encode("utf-8")).hexdigest()
