"""Like database model using SQLModel."""

from datetime import datetime
from typing import TYPE_CHECKING, cast
from uuid import UUID, uuid4

from sqlalchemy import DateTime, UniqueConstraint
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, ForeignKey, Relationship, SQLModel

from blog_backend.utils.helpers import utc_now

if TYPE_CHECKING:
    from blog_backend.models.blog import BlogDB


class LikeDB(SQLModel, table=True):
    """A user likes a blog; at most one row per (user, blog) pair."""

    __tablename__ = cast("declared_attr[str]", "likes")

    __table_args__ = (UniqueConstraint("user_id", "blog_id", name="uq_likes_user_blog"),)

    id: UUID = Field(
        default_factory=uuid4,
        primary_key=True,
        nullable=False,
        description="Like ID",
    )
    user_id: UUID = Field(
        sa_column=Column(
            "user_id",
            ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        description="User who liked the blog",
    )
    blog_id: UUID = Field(
        sa_column=Column(
            "blog_id",
            ForeignKey("blogs.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        description="Liked blog",
    )
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Creation timestamp",
    )

    blog: "BlogDB" = Relationship(back_populates="likes")
