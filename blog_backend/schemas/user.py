"""
User schemas for requests and responses.

Password hashes and reset token digests never leave the server; every
response model here is built from `UserDB` with ``from_attributes``.
"""

from datetime import date, datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from blog_backend.configs.settings import MAX_BIO_LENGTH, MAX_NAME_LENGTH

Gender = Literal["male", "female", "other"]


def not_blank(value: str) -> str:
    if not value.strip():
        mssg = "must not be blank"
        raise ValueError(mssg)
    return value.strip()


def not_in_future(value: date | None) -> date | None:
    if value is not None and value > date.today():
        mssg = "birth date cannot be in the future"
        raise ValueError(mssg)
    return value


class AuthorResponse(BaseModel):
    """Author information attached to blogs and comments."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: UUID
    name: str
    profile_image: str | None = Field(default=None, alias="profileImage")


class UserResponse(BaseModel):
    """Public user profile."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: UUID
    name: str
    email: str
    birth_date: date | None = Field(default=None, alias="birthDate")
    gender: str | None = None
    bio: str | None = None
    profile_image: str | None = Field(default=None, alias="profileImage")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")


class UserUpdate(BaseModel):
    """Partial profile update; only fields that are sent are changed."""

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = Field(default=None, min_length=1, max_length=MAX_NAME_LENGTH)
    birth_date: date | None = Field(default=None, alias="birthDate")
    gender: Gender | None = None
    bio: str | None = Field(default=None, max_length=MAX_BIO_LENGTH)
    profile_image: str | None = Field(default=None, alias="profileImage", max_length=500)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        return v if v is None else not_blank(v)

    @field_validator("birth_date")
    @classmethod
    def validate_birth_date(cls, v: date | None) -> date | None:
        return not_in_future(v)
