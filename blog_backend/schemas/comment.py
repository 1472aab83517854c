"""Comment schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from blog_backend.configs.settings import MAX_COMMENT_LENGTH
from blog_backend.schemas.user import AuthorResponse, not_blank


class CommentCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    content: str = Field(..., min_length=1, max_length=MAX_COMMENT_LENGTH)
    parent_id: UUID | None = Field(
        default=None,
        alias="parentId",
        description="Comment being replied to (omit for a top-level comment)",
    )

    @field_validator("content")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        return not_blank(v)


class CommentUpdate(BaseModel):
    content: str = Field(..., min_length=1, max_length=MAX_COMMENT_LENGTH)

    @field_validator("content")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        return not_blank(v)


class CommentResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    blog_id: UUID = Field(alias="blogId")
    parent_id: UUID | None = Field(default=None, alias="parentId")
    content: str
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")
    user: AuthorResponse
    reply_count: int = Field(default=0, ge=0, alias="replyCount")


class CommentPageResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    page: int = Field(ge=1)
    limit: int = Field(ge=1)
    page_count: int = Field(ge=0, alias="pageCount")
    comments: list[CommentResponse]
