"""Comment database model using SQLModel."""

from datetime import datetime
from typing import TYPE_CHECKING, cast
from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint, DateTime, Index, Text
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, ForeignKey, Relationship, SQLModel

from blog_backend.utils.helpers import utc_now

if TYPE_CHECKING:
    from blog_backend.models.blog import BlogDB
    from blog_backend.models.user import UserDB


class CommentDB(SQLModel, table=True):
    """
    Comment on a blog, optionally threaded under another comment.

    ``parent_id`` is null for top-level comments. Replies are removed together
    with their parent, their blog or their author.
    """

    __tablename__ = cast("declared_attr[str]", "comments")

    __table_args__ = (
        CheckConstraint("length(content) > 0", name="ck_comments_content_not_empty"),
        Index("ix_comments_blog_parent", "blog_id", "parent_id"),
    )

    id: UUID = Field(
        default_factory=uuid4,
        primary_key=True,
        nullable=False,
        description="Comment ID",
    )
    blog_id: UUID = Field(
        sa_column=Column(
            "blog_id",
            ForeignKey("blogs.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        description="Blog the comment belongs to",
    )
    user_id: UUID = Field(
        sa_column=Column(
            "user_id",
            ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        description="Comment author",
    )
    parent_id: UUID | None = Field(
        default=None,
        sa_column=Column(
            "parent_id",
            ForeignKey("comments.id", ondelete="CASCADE"),
            nullable=True,
            index=True,
        ),
        description="Parent comment for replies (null = top-level)",
    )
    content: str = Field(
        sa_column=Column(Text, nullable=False),
        description="Comment text",
    )

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Creation timestamp",
    )
    updated_at: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True)),
        description="Last update timestamp",
    )

    blog: "BlogDB" = Relationship(back_populates="comments")
    author: "UserDB" = Relationship()
