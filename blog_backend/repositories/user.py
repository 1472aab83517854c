"""User repository for database operations."""

from datetime import datetime
from typing import cast
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.expression import ColumnElement

from blog_backend.db import defer_release
from blog_backend.errors.database import DatabaseError, DuplicateEntryError
from blog_backend.models.blog import BlogDB
from blog_backend.models.user import UserDB
from blog_backend.monitoring import get_logger
from blog_backend.schemas.auth import SignupRequest
from blog_backend.schemas.user import UserUpdate
from blog_backend.services.storage import FileReleaser
from blog_backend.utils.helpers import utc_now

logger = get_logger(__name__)


class UserRepository:
    """
    Repository for User database operations.

    Password hashing happens in the auth service; this class only stores the
    resulting hash.
    """

    def __init__(self, session: AsyncSession, file_releaser: FileReleaser | None = None) -> None:
        """
        Initialize repository with database session.

        Args:
            session: Async database session
            file_releaser: Storage backend for files orphaned by a user delete
        """
        self.session = session
        self.file_releaser = file_releaser

    async def _save(self, db_user: UserDB) -> UserDB:
        try:
            self.session.add(db_user)
            await self.session.flush()
            await self.session.refresh(db_user)
            return db_user
        except IntegrityError as e:
            await self.session.rollback()
            error_msg = str(e.orig) if e.orig else str(e)
            if "email" in error_msg.lower():
                raise DuplicateEntryError(
                    detail=f"Email '{db_user.email}' already exists",
                ) from e
            raise DatabaseError(detail=f"Database integrity error: {error_msg}") from e

    async def create(self, user: SignupRequest, password_hash: str) -> UserDB:
        """
        Create a new user in the database.

        Args:
            user: Validated signup payload
            password_hash: Argon2 hash of the user's password

        Returns:
            UserDB: Created user database model

        Raises:
            DuplicateEntryError: If the email already exists
            DatabaseError: For other database errors
        """
        db_user = UserDB(
            name=user.name,
            email=user.email,
            password_hash=password_hash,
            birth_date=user.birth_date,
            gender=user.gender,
            bio=user.bio,
        )
        db_user = await self._save(db_user)
        logger.info(f"User {db_user.id} created")
        return db_user

    async def get_by_id(self, user_id: UUID) -> UserDB | None:
        """
        Get user by ID.

        Args:
            user_id: User UUID

        Returns:
            UserDB | None: User if found, None otherwise
        """
        result = await self.session.execute(
            select(UserDB).where(cast(ColumnElement[bool], UserDB.id == user_id)),
        )
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> UserDB | None:
        result = await self.session.execute(
            select(UserDB).where(cast(ColumnElement[bool], UserDB.email == email.lower())),
        )
        return result.scalar_one_or_none()

    async def get_by_reset_token_hash(self, token_hash: str) -> UserDB | None:
        """Get the user with a pending reset token whose SHA-256 digest is ``token_hash``."""
        result = await self.session.execute(
            select(UserDB).where(
                cast(ColumnElement[bool], UserDB.password_reset_token_hash == token_hash),
            ),
        )
        return result.scalar_one_or_none()

    async def update(self, user_id: UUID, user: UserUpdate) -> UserDB | None:
        """
        Update profile fields of a user.

        Args:
            user_id: User UUID
            user: Fields to change; unset fields are left alone

        Returns:
            UserDB | None: Updated user if found, None otherwise
        """
        db_user = await self.get_by_id(user_id)
        if not db_user:
            return None

        for key, value in user.model_dump(exclude_unset=True).items():
            setattr(db_user, key, value)
        db_user.updated_at = utc_now()
        return await self._save(db_user)

    async def set_password(self, db_user: UserDB, password_hash: str) -> UserDB:
        """Store a new password hash and clear any pending reset token."""
        db_user.password_hash = password_hash
        db_user.password_reset_token_hash = None
        db_user.password_reset_expires_at = None
        db_user.updated_at = utc_now()
        return await self._save(db_user)

    async def set_reset_token(
        self,
        db_user: UserDB,
        token_hash: str,
        expires_at: datetime,
    ) -> UserDB:
        """Store the digest and expiry of a freshly issued reset token."""
        db_user.password_reset_token_hash = token_hash
        db_user.password_reset_expires_at = expires_at
        return await self._save(db_user)

    async def delete(self, user_id: UUID) -> bool:
        """
        Delete a user; blogs, comments and likes go with it.

        Cover images of the user's blogs and the profile image are released
        once the delete commits.

        Args:
            user_id: User UUID

        Returns:
            bool: True if user was deleted, False if not found
        """
        db_user = await self.get_by_id(user_id)
        if not db_user:
            return False

        result = await self.session.execute(
            select(BlogDB.cover_image).where(
                cast(ColumnElement[bool], BlogDB.user_id == user_id),
                # pyrefly: ignore [missing-attribute]
                BlogDB.cover_image.is_not(None),
            ),
        )
        orphaned = [path for path in result.scalars().all() if path]
        if db_user.profile_image:
            orphaned.append(db_user.profile_image)

        await self.session.delete(db_user)
        try:
            await self.session.flush()
        except IntegrityError as e:
            await self.session.rollback()
            error_msg = str(e.orig) if e.orig else str(e)
            raise DatabaseError(detail=f"Database integrity error: {error_msg}") from e

        if self.file_releaser is not None:
            for path in orphaned:
                defer_release(self.session, self.file_releaser, path)

        logger.info(f"User {user_id} deleted")
        return True
