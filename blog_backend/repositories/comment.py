"""Comment repository for database operations."""

from dataclasses import dataclass
from uuid import UUID

from sqlalchemy import Select, distinct, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased, selectinload
from sqlalchemy.sql.elements import ColumnElement

from blog_backend.errors.database import DatabaseError
from blog_backend.models.blog import BlogDB
from blog_backend.models.comment import CommentDB
from blog_backend.monitoring import get_logger
from blog_backend.repositories.result import Found, Lookup, NotFound
from blog_backend.schemas.comment import CommentCreate, CommentUpdate
from blog_backend.utils.helpers import page_count, utc_now

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class CommentDetail:
    comment: CommentDB
    reply_count: int


@dataclass(frozen=True, slots=True)
class CommentPage:
    page_count: int
    comments: list[CommentDetail]


class CommentRepository:
    """
    Repository for Comment database operations.

    Comments are listed oldest first, each with its author loaded and the
    number of direct replies. Deleting a comment removes its replies through
    the ``parent_id`` foreign key.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @staticmethod
    def _detail_query() -> Select:
        reply = aliased(CommentDB)
        return (
            select(CommentDB, func.count(reply.id).label("reply_count"))
            .outerjoin(reply, reply.parent_id == CommentDB.id)
            # pyrefly: ignore [bad-argument-type]
            .options(selectinload(CommentDB.author))
            .group_by(CommentDB.id)
            .execution_options(populate_existing=True)
        )

    async def _page(self, *criteria: ColumnElement[bool], offset: int, limit: int) -> CommentPage:
        total = await self.session.scalar(
            # pyrefly: ignore [bad-argument-type]
            select(func.count(distinct(CommentDB.id))).where(*criteria),
        )
        query = (
            self._detail_query()
            .where(*criteria)
            # pyrefly: ignore [missing-attribute]
            .order_by(CommentDB.created_at.asc(), CommentDB.id)
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.execute(query)
        comments = [CommentDetail(comment=c, reply_count=n) for c, n in result.all()]
        return CommentPage(page_count=page_count(total or 0, limit), comments=comments)

    async def _flush(self) -> None:
        try:
            await self.session.flush()
        except IntegrityError as e:
            await self.session.rollback()
            error_msg = str(e.orig) if e.orig else str(e)
            raise DatabaseError(detail=f"Database integrity error: {error_msg}") from e

    async def create_comment(
        self,
        user_id: UUID,
        blog_id: UUID,
        data: CommentCreate,
    ) -> Lookup[CommentDetail]:
        """
        Add a comment, or a reply when ``data.parent_id`` is set.

        Args:
            user_id: UUID of the author
            blog_id: Blog being commented on
            data: Validated comment payload

        Returns:
            Lookup[CommentDetail]: The stored comment, or NotFound if the blog
            does not exist or the parent comment is not on that blog
        """
        if await self.session.get(BlogDB, blog_id) is None:
            return NotFound(reason=f"Blog with ID {blog_id} not found")

        if data.parent_id is not None:
            parent = await self.session.get(CommentDB, data.parent_id)
            if parent is None or parent.blog_id != blog_id:
                return NotFound(reason=f"Comment with ID {data.parent_id} not found on this blog")

        db_comment = CommentDB(
            blog_id=blog_id,
            user_id=user_id,
            parent_id=data.parent_id,
            content=data.content,
        )
        self.session.add(db_comment)
        await self._flush()
        logger.info(f"Comment {db_comment.id} added to blog {blog_id}")
        return await self.get_comment_by_id(db_comment.id)

    async def get_comment_by_id(self, comment_id: UUID) -> Lookup[CommentDetail]:
        result = await self.session.execute(
            # pyrefly: ignore [bad-argument-type]
            self._detail_query().where(CommentDB.id == comment_id),
        )
        row = result.one_or_none()
        if row is None:
            return NotFound(reason=f"Comment with ID {comment_id} not found")
        comment, count = row
        return Found(CommentDetail(comment=comment, reply_count=count))

    async def get_blog_comments(self, blog_id: UUID, offset: int = 0, limit: int = 10) -> CommentPage:
        """Get one page of the top-level comments of a blog."""
        return await self._page(
            # pyrefly: ignore [bad-argument-type]
            CommentDB.blog_id == blog_id,
            # pyrefly: ignore [missing-attribute]
            CommentDB.parent_id.is_(None),
            offset=offset,
            limit=limit,
        )

    async def get_replies(self, comment_id: UUID, offset: int = 0, limit: int = 10) -> CommentPage:
        """Get one page of the direct replies to a comment."""
        # pyrefly: ignore [bad-argument-type]
        return await self._page(CommentDB.parent_id == comment_id, offset=offset, limit=limit)

    async def update_comment(self, comment_id: UUID, data: CommentUpdate) -> Lookup[CommentDetail]:
        db_comment = await self.session.get(CommentDB, comment_id)
        if db_comment is None:
            return NotFound(reason=f"Comment with ID {comment_id} not found")

        db_comment.content = data.content
        db_comment.updated_at = utc_now()
        self.session.add(db_comment)
        await self._flush()
        return await self.get_comment_by_id(comment_id)

    async def delete_comment(self, comment_id: UUID) -> bool:
        """
        Delete a comment together with its replies.

        Returns:
            bool: True if the comment was deleted, False if not found
        """
        db_comment = await self.session.get(CommentDB, comment_id)
        if db_comment is None:
            return False

        await self.session.delete(db_comment)
        await self._flush()
        logger.info(f"Comment {comment_id} deleted")
        return True
