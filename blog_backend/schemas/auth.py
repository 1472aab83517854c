"""Request and response schemas for the authentication flow."""

from datetime import date
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, SecretStr, field_validator

from blog_backend.configs.settings import MAX_BIO_LENGTH, MAX_NAME_LENGTH, MIN_PASSWORD_LENGTH
from blog_backend.schemas.user import Gender, UserResponse, not_blank, not_in_future


def _validate_password_strength(v: SecretStr) -> SecretStr:
    password = v.get_secret_value()
    if not any(c.isalpha() for c in password) or not any(c.isdigit() for c in password):
        mssg = "Password must contain at least one letter and one digit"
        raise ValueError(mssg)
    return v


class SignupRequest(BaseModel):
    """Signup payload; a constructed instance is already valid."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str = Field(..., min_length=1, max_length=MAX_NAME_LENGTH, examples=["Jane Doe"])
    email: EmailStr = Field(..., examples=["jane@example.com"])
    password: SecretStr = Field(..., min_length=MIN_PASSWORD_LENGTH, examples=["s3cretpass"])
    birth_date: date | None = Field(default=None, alias="birthDate", examples=["1995-04-12"])
    gender: Gender | None = None
    bio: str | None = Field(default=None, max_length=MAX_BIO_LENGTH)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return not_blank(v)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: SecretStr) -> SecretStr:
        return _validate_password_strength(v)

    @field_validator("birth_date")
    @classmethod
    def validate_birth_date(cls, v: date | None) -> date | None:
        return not_in_future(v)


class SigninRequest(BaseModel):
    """Login payload."""

    email: EmailStr
    password: SecretStr

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class ForgotPasswordRequest(BaseModel):
    email: EmailStr

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class ResetPasswordRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    new_password: SecretStr = Field(..., alias="newPassword", min_length=MIN_PASSWORD_LENGTH)

    @field_validator("new_password")
    @classmethod
    def validate_password(cls, v: SecretStr) -> SecretStr:
        return _validate_password_strength(v)


class RefreshTokenRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    refresh_token: str = Field(..., alias="refreshToken", min_length=1)


class Token(BaseModel):
    """Token pair for JWT access and refresh tokens."""

    model_config = ConfigDict(populate_by_name=True)

    access_token: str = Field(alias="accessToken")
    refresh_token: str = Field(alias="refreshToken")
    token_type: str = Field(default="bearer", alias="tokenType")


class TokenData(BaseModel):
    """Claims extracted from a verified token."""

    user_id: UUID
    email: str
    jti: str
    token_type: str


class AuthResult(Token):
    """Result of signup, signin and token refresh."""

    user: UserResponse


class MessageResponse(BaseModel):
    message: str


class PasswordResetIssued(MessageResponse):
    """
    Result of forgot-password.

    ``resetToken`` is only populated when the server runs with
    ``EXPOSE_RESET_TOKEN`` enabled.
    """

    model_config = ConfigDict(populate_by_name=True)

    reset_token: str | None = Field(default=None, alias="resetToken")
