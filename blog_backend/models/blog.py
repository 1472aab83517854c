"""Blog database model using SQLModel."""

from datetime import datetime
from typing import TYPE_CHECKING, cast
from uuid import UUID, uuid4

from pydantic import ConfigDict
from sqlalchemy import CheckConstraint, DateTime, Index, Text
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, ForeignKey, Relationship, SQLModel, String

from blog_backend.configs.settings import MAX_TITLE_LENGTH
from blog_backend.utils.helpers import utc_now

if TYPE_CHECKING:
    from blog_backend.models.comment import CommentDB
    from blog_backend.models.like import LikeDB
    from blog_backend.models.user import UserDB


class BlogDB(SQLModel, table=True):
    """
    Blog database model.

    Invariants held by the schema itself:

    - title and content are never empty (check constraints)
    - a blog belongs to exactly one user and goes away with that user
    - comments and likes go away with their blog

    The cover image file on disk is not covered by the schema; the blog
    repository releases it after a cover change or a delete.
    """

    __tablename__ = cast("declared_attr[str]", "blogs")

    __table_args__ = (
        CheckConstraint("length(title) > 0", name="ck_blogs_title_not_empty"),
        CheckConstraint("length(content) > 0", name="ck_blogs_content_not_empty"),
        Index("ix_blogs_user_created", "user_id", "created_at"),
    )

    id: UUID = Field(
        default_factory=uuid4,
        primary_key=True,
        nullable=False,
        description="Blog ID",
    )

    user_id: UUID = Field(
        sa_column=Column(
            "user_id",
            ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        description="Author ID (foreign key to users.id)",
    )

    title: str = Field(
        sa_column=Column(String(MAX_TITLE_LENGTH), nullable=False, index=True),
        description="Blog title",
    )
    content: str = Field(
        sa_column=Column(Text, nullable=False),
        description="Blog content",
    )
    cover_image: str | None = Field(
        default=None,
        sa_column=Column(String(500)),
        description="Path of the uploaded cover image",
    )

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True),
        description="Creation timestamp",
    )
    updated_at: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True)),
        description="Last update timestamp",
    )

    author: "UserDB" = Relationship(back_populates="blogs")
    likes: list["LikeDB"] = Relationship(
        back_populates="blog",
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "passive_deletes": True},
    )
    comments: list["CommentDB"] = Relationship(
        back_populates="blog",
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "passive_deletes": True},
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "550e8400-e29b-41d4-a716-446655440000",
                "user_id": "123e4567-e89b-12d3-a456-426614174000",
                "title": "Weekend in Lisbon",
                "content": "Three days, two neighbourhoods, one tram...",
                "cover_image": "uploads/covers/lisbon.jpg",
            },
        },
    )
