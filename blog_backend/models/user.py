"""User database model using SQLModel."""

from datetime import date, datetime
from typing import TYPE_CHECKING, cast
from uuid import UUID, uuid4

from pydantic import ConfigDict
from sqlalchemy import Date, DateTime, Text
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, Relationship, SQLModel, String

from blog_backend.utils.helpers import utc_now

if TYPE_CHECKING:
    from blog_backend.models.blog import BlogDB


class UserDB(SQLModel, table=True):
    """
    User database model.

    Deleting a user cascades to the user's blogs, comments and likes. The
    cascade is declared on the foreign keys of the dependent tables; the ORM
    relationship only mirrors it with ``passive_deletes`` so no rows are
    loaded just to be deleted.
    """

    __tablename__ = cast("declared_attr[str]", "users")

    id: UUID = Field(
        default_factory=uuid4,
        primary_key=True,
        nullable=False,
        description="User ID",
    )

    name: str = Field(
        sa_column=Column(String(100), nullable=False),
        description="Display name",
    )
    email: str = Field(
        sa_column=Column(String(255), unique=True, nullable=False, index=True),
        description="Email address (unique)",
    )
    password_hash: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Argon2 password hash",
    )

    birth_date: date | None = Field(
        default=None,
        sa_column=Column(Date),
        description="Date of birth",
    )
    gender: str | None = Field(
        default=None,
        sa_column=Column(String(20)),
        description="Gender",
    )
    bio: str | None = Field(
        default=None,
        sa_column=Column(Text),
        description="Short biography",
    )
    profile_image: str | None = Field(
        default=None,
        sa_column=Column(String(500)),
        description="Path of the uploaded profile image",
    )

    # Password reset; only the SHA-256 digest of the emailed token is stored
    password_reset_token_hash: str | None = Field(
        default=None,
        sa_column=Column(String(64), index=True),
        description="SHA-256 of the pending password reset token",
    )
    password_reset_expires_at: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True)),
        description="Expiry of the pending password reset token",
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

    blogs: list["BlogDB"] = Relationship(
        back_populates="author",
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "passive_deletes": True},
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "name": "Jane Doe",
                "email": "jane@example.com",
                "gender": "female",
                "bio": "Writes about food and travel.",
            },
        },
    )
