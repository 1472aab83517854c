from blog_backend.schemas.auth import (
    AuthResult,
    ForgotPasswordRequest,
    MessageResponse,
    PasswordResetIssued,
    RefreshTokenRequest,
    ResetPasswordRequest,
    SigninRequest,
    SignupRequest,
    Token,
    TokenData,
)
from blog_backend.schemas.blog import (
    BlogCreate,
    BlogPageResponse,
    BlogResponse,
    BlogUpdate,
    LikeResponse,
    LikeToggleResponse,
)
from blog_backend.schemas.comment import (
    CommentCreate,
    CommentPageResponse,
    CommentResponse,
    CommentUpdate,
)
from blog_backend.schemas.user import AuthorResponse, UserResponse, UserUpdate

__all__ = [
    "AuthResult",
    "AuthorResponse",
    "BlogCreate",
    "BlogPageResponse",
    "BlogResponse",
    "BlogUpdate",
    "CommentCreate",
    "CommentPageResponse",
    "CommentResponse",
    "CommentUpdate",
    "ForgotPasswordRequest",
    "LikeResponse",
    "LikeToggleResponse",
    "MessageResponse",
    "PasswordResetIssued",
    "RefreshTokenRequest",
    "ResetPasswordRequest",
    "SigninRequest",
    "SignupRequest",
    "Token",
    "TokenData",
    "UserResponse",
    "UserUpdate",
]
