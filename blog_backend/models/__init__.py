"""Database models for the application."""

from blog_backend.models.blog import BlogDB
from blog_backend.models.comment import CommentDB
from blog_backend.models.like import LikeDB
from blog_backend.models.user import UserDB

__all__ = ["BlogDB", "CommentDB", "LikeDB", "UserDB"]
