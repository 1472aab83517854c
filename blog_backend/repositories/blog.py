"""Blog repository for database operations."""

from dataclasses import dataclass
from uuid import UUID

from sqlalchemy import Select, and_, distinct, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.sql.elements import ColumnElement

from blog_backend.db import defer_release
from blog_backend.errors.database import DatabaseError, DuplicateEntryError
from blog_backend.models.blog import BlogDB
from blog_backend.models.comment import CommentDB
from blog_backend.models.like import LikeDB
from blog_backend.models.user import UserDB
from blog_backend.monitoring import get_logger
from blog_backend.repositories.result import Found, Lookup, NotFound
from blog_backend.schemas.blog import BlogCreate, BlogUpdate
from blog_backend.services.storage import FileReleaser
from blog_backend.utils.helpers import page_count, utc_now

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class BlogDetail:
    """A blog with its author and likes loaded, plus its top-level comment count."""

    blog: BlogDB
    comment_count: int


@dataclass(frozen=True, slots=True)
class BlogPage:
    page_count: int
    blogs: list[BlogDetail]


@dataclass(frozen=True, slots=True)
class LikeToggle:
    """``created`` is True when a like was added and False when one was removed."""

    created: bool


class BlogRepository:
    """
    Repository for Blog database operations.

    Reads always come back as `BlogDetail`: the blog with ``author`` and
    ``likes`` eagerly loaded and the number of top-level comments. Lookups
    of a single blog return `Found` or `NotFound` instead of raising.

    Cover image files are released through the injected ``file_releaser``
    only after the transaction that orphans them commits.
    """

    def __init__(self, session: AsyncSession, file_releaser: FileReleaser | None = None) -> None:
        """
        Initialize repository with database session.

        Args:
            session: Async database session
            file_releaser: Storage backend for orphaned cover images
        """
        self.session = session
        self.file_releaser = file_releaser

    @staticmethod
    def _detail_query() -> Select:
        comment_count = func.count(CommentDB.id).label("comment_count")
        return (
            select(BlogDB, comment_count)
            .outerjoin(
                CommentDB,
                and_(
                    CommentDB.blog_id == BlogDB.id,
                    # pyrefly: ignore [missing-attribute]
                    CommentDB.parent_id.is_(None),
                ),
            )
            .options(
                # pyrefly: ignore [bad-argument-type]
                selectinload(BlogDB.author),
                # pyrefly: ignore [bad-argument-type]
                selectinload(BlogDB.likes),
            )
            .group_by(BlogDB.id)
            .execution_options(populate_existing=True)
        )

    async def _page(
        self,
        *criteria: ColumnElement[bool],
        offset: int,
        limit: int,
    ) -> BlogPage:
        total = await self.session.scalar(
            # pyrefly: ignore [bad-argument-type]
            select(func.count(distinct(BlogDB.id))).where(*criteria),
        )
        query = (
            self._detail_query()
            .where(*criteria)
            # pyrefly: ignore [missing-attribute]
            .order_by(BlogDB.created_at.desc(), BlogDB.id)
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.execute(query)
        blogs = [BlogDetail(blog=blog, comment_count=count) for blog, count in result.all()]
        return BlogPage(page_count=page_count(total or 0, limit), blogs=blogs)

    def _release_after_commit(self, path: str) -> None:
        if self.file_releaser is not None:
            defer_release(self.session, self.file_releaser, path)

    async def _flush(self) -> None:
        try:
            await self.session.flush()
        except IntegrityError as e:
            await self.session.rollback()
            error_msg = str(e.orig) if e.orig else str(e)
            raise DatabaseError(detail=f"Database integrity error: {error_msg}") from e

    async def create_blog(self, user_id: UUID, data: BlogCreate) -> Lookup[BlogDetail]:
        """
        Create a new blog owned by ``user_id``.

        Args:
            user_id: UUID of the author
            data: Validated blog payload

        Returns:
            Lookup[BlogDetail]: The stored blog, or NotFound if the author does not exist

        Raises:
            DatabaseError: If the insert violates a constraint
        """
        if await self.session.get(UserDB, user_id) is None:
            return NotFound(reason=f"User with ID {user_id} not found")

        db_blog = BlogDB(
            user_id=user_id,
            title=data.title,
            content=data.content,
            cover_image=data.cover_image,
        )
        self.session.add(db_blog)
        await self._flush()
        logger.info(f"Blog {db_blog.id} created by user {user_id}")
        return await self.get_blog_by_id(db_blog.id)

    async def get_blog_by_id(self, blog_id: UUID) -> Lookup[BlogDetail]:
        """
        Get one blog with author, likes and top-level comment count.

        Args:
            blog_id: Blog UUID

        Returns:
            Lookup[BlogDetail]: Found with the blog, NotFound if it does not exist
        """
        # pyrefly: ignore [bad-argument-type]
        result = await self.session.execute(self._detail_query().where(BlogDB.id == blog_id))
        row = result.one_or_none()
        if row is None:
            return NotFound(reason=f"Blog with ID {blog_id} not found")
        blog, count = row
        return Found(BlogDetail(blog=blog, comment_count=count))

    async def get_blogs(self, offset: int = 0, limit: int = 10) -> BlogPage:
        """
        Get one page of blogs, newest first.

        Args:
            offset: Number of blogs to skip
            limit: Maximum number of blogs to return

        Returns:
            BlogPage: The blogs and the number of pages of size ``limit``
        """
        return await self._page(offset=offset, limit=limit)

    async def get_user_blogs(self, user_id: UUID, offset: int = 0, limit: int = 10) -> BlogPage:
        """Get one page of the blogs written by ``user_id``, newest first."""
        # pyrefly: ignore [bad-argument-type]
        return await self._page(BlogDB.user_id == user_id, offset=offset, limit=limit)

    async def search_blog_by_title(
        self,
        keyword: str,
        offset: int = 0,
        limit: int = 10,
    ) -> BlogPage:
        """
        Get one page of blogs whose title contains ``keyword``.

        ``%`` and ``_`` in the keyword match literally. Case sensitivity
        follows the database: PostgreSQL compares case sensitively, SQLite
        folds ASCII case.
        """
        return await self._page(
            # pyrefly: ignore [missing-attribute]
            BlogDB.title.contains(keyword, autoescape=True),
            offset=offset,
            limit=limit,
        )

    async def update_blog(self, blog_id: UUID, data: BlogUpdate) -> Lookup[BlogDetail]:
        """
        Apply a partial update to a blog.

        When the cover image changes, the previous file is released once
        the update commits.

        Args:
            blog_id: Blog UUID
            data: Fields to change; unset fields are left alone

        Returns:
            Lookup[BlogDetail]: The updated blog, or NotFound
        """
        db_blog = await self.session.get(BlogDB, blog_id)
        if db_blog is None:
            return NotFound(reason=f"Blog with ID {blog_id} not found")

        previous_cover = db_blog.cover_image
        for key, value in data.model_dump(exclude_unset=True).items():
            setattr(db_blog, key, value)
        db_blog.updated_at = utc_now()

        self.session.add(db_blog)
        await self._flush()

        if previous_cover is not None and previous_cover != db_blog.cover_image:
            self._release_after_commit(previous_cover)

        logger.info(f"Blog {blog_id} updated")
        return await self.get_blog_by_id(blog_id)

    async def delete_blog(self, blog_id: UUID) -> bool:
        """
        Delete a blog; its comments and likes go with it.

        A non-null cover image is released once the delete commits.

        Args:
            blog_id: Blog UUID

        Returns:
            bool: True if the blog was deleted, False if not found
        """
        db_blog = await self.session.get(BlogDB, blog_id)
        if db_blog is None:
            return False

        cover_image = db_blog.cover_image
        await self.session.delete(db_blog)
        await self._flush()

        if cover_image is not None:
            self._release_after_commit(cover_image)

        logger.info(f"Blog {blog_id} deleted")
        return True

    async def update_blog_like(self, user_id: UUID, blog_id: UUID) -> LikeToggle:
        """
        Toggle the like of ``user_id`` on ``blog_id``.

        Args:
            user_id: UUID of the user liking the blog
            blog_id: Blog UUID

        Returns:
            LikeToggle: ``created=True`` if a like was added, False if removed

        Raises:
            DuplicateEntryError: If a concurrent request added the same like first
            DatabaseError: For other integrity errors
        """
        result = await self.session.execute(
            # pyrefly: ignore [bad-argument-type]
            select(LikeDB).where(LikeDB.user_id == user_id, LikeDB.blog_id == blog_id),
        )
        like = result.scalar_one_or_none()

        if like is not None:
            await self.session.delete(like)
            await self.session.flush()
            return LikeToggle(created=False)

        self.session.add(LikeDB(user_id=user_id, blog_id=blog_id))
        try:
            await self.session.flush()
        except IntegrityError as e:
            await self.session.rollback()
            error_msg = str(e.orig) if e.orig else str(e)
            if "unique" in error_msg.lower() or "duplicate" in error_msg.lower():
                raise DuplicateEntryError(detail="Blog is already liked by this user") from e
            raise DatabaseError(detail=f"Database integrity error: {error_msg}") from e
        return LikeToggle(created=True)
