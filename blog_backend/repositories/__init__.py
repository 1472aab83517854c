"""Repositories wrapping an `AsyncSession` for each aggregate."""

from blog_backend.repositories.blog import BlogDetail, BlogPage, BlogRepository, LikeToggle
from blog_backend.repositories.comment import CommentDetail, CommentPage, CommentRepository
from blog_backend.repositories.result import Found, Lookup, NotFound, found_or_raise
from blog_backend.repositories.user import UserRepository

__all__ = [
    "BlogDetail",
    "BlogPage",
    "BlogRepository",
    "CommentDetail",
    "CommentPage",
    "CommentRepository",
    "Found",
    "LikeToggle",
    "Lookup",
    "NotFound",
    "UserRepository",
    "found_or_raise",
]
