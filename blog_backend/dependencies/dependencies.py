"""Application dependencies: repositories, services, authentication and pagination."""

from dataclasses import dataclass
from typing import Annotated
from uuid import UUID

from fastapi import Depends, Query, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from blog_backend.configs import settings
from blog_backend.configs.settings import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from blog_backend.db import get_session
from blog_backend.errors.auth import InvalidTokenError, PermissionDeniedError, UserNotFoundError
from blog_backend.managers.token_manager import decode_access_token
from blog_backend.models import UserDB
from blog_backend.repositories import BlogRepository, CommentRepository, UserRepository
from blog_backend.services.auth import AuthService
from blog_backend.services.storage import FileReleaser, get_storage_service
from blog_backend.utils.helpers import page_offset

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login", auto_error=False)

SessionDep = Annotated[AsyncSession, Depends(get_session)]


def get_storage() -> FileReleaser:
    return get_storage_service()


StorageDep = Annotated[FileReleaser, Depends(get_storage)]


def get_user_repository(session: SessionDep, storage: StorageDep) -> UserRepository:
    """
    Resolve the `UserRepository` dependency.

    Parameters
    ----------
    session : AsyncSession
        Database session.
    storage : FileReleaser
        Storage backend for files orphaned by a user delete.

    Returns
    -------
    UserRepository
        Repository instance bound to the session.
    """
    return UserRepository(session, file_releaser=storage)


UserRepoDep = Annotated[UserRepository, Depends(get_user_repository)]


def get_blog_repository(session: SessionDep, storage: StorageDep) -> BlogRepository:
    """
    Resolve the `BlogRepository` dependency.

    Parameters
    ----------
    session : AsyncSession
        Database session.
    storage : FileReleaser
        Storage backend for orphaned cover images.

    Returns
    -------
    BlogRepository
        Repository instance bound to the session.
    """
    return BlogRepository(session, file_releaser=storage)


BlogRepoDep = Annotated[BlogRepository, Depends(get_blog_repository)]


def get_comment_repository(session: SessionDep) -> CommentRepository:
    return CommentRepository(session)


CommentRepoDep = Annotated[CommentRepository, Depends(get_comment_repository)]


def get_auth_service(user_repo: UserRepoDep) -> AuthService:
    return AuthService(user_repo)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]


def get_access_token(
    request: Request,
    bearer: Annotated[str | None, Depends(oauth2_scheme)],
) -> str | None:
    """
    Read the access token from the auth cookie, or else the Authorization header.

    Returns
    -------
    str | None
        The raw token, or None when the request carries neither.
    """
    return request.cookies.get(settings.AUTH_COOKIE_NAME) or bearer


async def get_optional_user(
    token: Annotated[str | None, Depends(get_access_token)],
    user_repo: UserRepoDep,
) -> UserDB | None:
    """
    Resolve the user behind the access token, if a token was sent.

    A token that is present but invalid is rejected rather than ignored.

    Raises
    ------
    InvalidTokenError
        If the token cannot be verified.
    UserNotFoundError
        If the token's user no longer exists.
    """
    if not token:
        return None

    token_data = decode_access_token(token)
    if token_data is None:
        raise InvalidTokenError

    user = await user_repo.get_by_id(token_data.user_id)
    if user is None:
        raise UserNotFoundError
    return user


async def get_current_user(
    user: Annotated[UserDB | None, Depends(get_optional_user)],
) -> UserDB:
    """
    Require an authenticated user.

    Raises
    ------
    InvalidTokenError
        If the request carries no access token.
    """
    if user is None:
        raise InvalidTokenError("Not authenticated")
    return user


async def verify_read_access(
    user: Annotated[UserDB | None, Depends(get_optional_user)],
) -> None:
    """Router level gate: reads need a user only when `REQUIRE_AUTH_FOR_READS` is on."""
    if settings.REQUIRE_AUTH_FOR_READS and user is None:
        raise InvalidTokenError("Not authenticated")


CurrentUserDep = Annotated[UserDB, Depends(get_current_user)]


def ensure_owner(owner_id: UUID, user: UserDB) -> None:
    """
    Check that ``user`` owns a resource.

    Raises
    ------
    PermissionDeniedError
        If the resource belongs to someone else.
    """
    if owner_id != user.id:
        raise PermissionDeniedError


@dataclass(frozen=True)
class PageQuery:
    """
    Query container for page based pagination.

    Parameters
    ----------
    page : int
        1-based page number.
    limit : int
        Page size.
    """

    page: int = 1
    limit: int = DEFAULT_PAGE_LIMIT

    @property
    def offset(self) -> int:
        return page_offset(self.page, self.limit)


def get_page_query(
    page: Annotated[int, Query(ge=1, description="Page number, starting at 1")] = 1,
    limit: Annotated[
        int,
        Query(ge=1, le=MAX_PAGE_LIMIT, description="Maximum number of items per page"),
    ] = DEFAULT_PAGE_LIMIT,
) -> PageQuery:
    return PageQuery(page=page, limit=limit)


PageQueryDep = Annotated[PageQuery, Depends(get_page_query)]
