"""
Blog schemas.

`BlogCreate` and `BlogUpdate` are the only way data reaches the blog
repository, so an empty title or content is rejected here before any row
is written. The check constraints on the ``blogs`` table back this up.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from blog_backend.configs.settings import MAX_TITLE_LENGTH
from blog_backend.schemas.user import AuthorResponse, not_blank


class BlogCreate(BaseModel):
    """Blog creation payload."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(
        ...,
        min_length=1,
        max_length=MAX_TITLE_LENGTH,
        description="Blog title",
        examples=["Weekend in Lisbon"],
    )
    content: str = Field(
        ...,
        min_length=1,
        description="Blog content",
        examples=["Three days, two neighbourhoods, one tram..."],
    )
    cover_image: str | None = Field(
        default=None,
        alias="coverImage",
        max_length=500,
        description="Path of an already uploaded cover image",
        examples=["uploads/covers/lisbon.jpg"],
    )

    @field_validator("title", "content")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        return not_blank(v)


class BlogUpdate(BaseModel):
    """Partial blog update; only fields that are sent are changed."""

    model_config = ConfigDict(populate_by_name=True)

    title: str | None = Field(default=None, min_length=1, max_length=MAX_TITLE_LENGTH)
    content: str | None = Field(default=None, min_length=1)
    cover_image: str | None = Field(default=None, alias="coverImage", max_length=500)

    @field_validator("title", "content")
    @classmethod
    def validate_not_blank(cls, v: str | None) -> str | None:
        # Only reached for an explicit null; the columns are NOT NULL
        if v is None:
            mssg = "must not be null"
            raise ValueError(mssg)
        return not_blank(v)


class LikeResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    user_id: UUID = Field(alias="userId")


class BlogResponse(BaseModel):
    """Blog with author, likes and top-level comment count."""

    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    title: str
    content: str
    cover_image: str | None = Field(default=None, alias="coverImage")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")
    user: AuthorResponse
    likes: list[LikeResponse] = Field(default_factory=list)
    comment_count: int = Field(default=0, ge=0, alias="commentCount")


class BlogPageResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    page: int = Field(ge=1)
    limit: int = Field(ge=1)
    page_count: int = Field(ge=0, alias="pageCount")
    blogs: list[BlogResponse]


class LikeToggleResponse(BaseModel):
    """``liked`` is True when the call added a like, False when it removed one."""

    model_config = ConfigDict(populate_by_name=True)

    blog_id: UUID = Field(alias="blogId")
    liked: bool
