"""
User Repository

Database operations for user accounts.
"""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.users.models import User, UserRole

logger = logging.getLogger(__name__)

# Columns the onboarding flow is allowed to write through update_profile
PROFILE_FIELDS = frozenset(
    {
        "username",
        "email",
        "first_name",
        "last_name",
        "phone",
        "city",
        "gender",
        "date_of_birth",
        "profile_image_url",
        "bio",
        "interests",
        "security_question",
        "security_answer_hash",
        "role",
        "school_id",
        "is_onboarding_complete",
    }
)


class UserRepository:
    """Repository for user database operations."""

    @staticmethod
    async def create(
        db: AsyncSession,
        *,
        username: str,
        email: str,
        password_hash: str,
        role: UserRole = UserRole.STUDENT,
    ) -> User:
        """
        Create a new user record.

        Args:
            db: Database session
            username: Unique handle
            email: User's email address (unique)
            password_hash: bcrypt hash of the password
            role: User's role

        Returns:
            Created User instance
        """
        user = User(
            username=username,
            email=email,
            password_hash=password_hash,
            role=role,
            is_active=True,
            is_onboarding_complete=False,
        )

        db.add(user)
        await db.flush()
        await db.refresh(user)

        logger.info(f"Created user: {user.id} - {user.username} ({user.role.value})")
        return user

    @staticmethod
    async def get_by_id(db: AsyncSession, user_id: str | UUID) -> User | None:
        """Get a user by ID."""
        result = await db.execute(select(User).where(User.id == str(user_id)))
        return result.scalar_one_or_none()

    @staticmethod
    async def get_by_email(db: AsyncSession, email: str) -> User | None:
        """Get a user by email address (case-insensitive)."""
        result = await db.execute(select(User).where(func.lower(User.email) == email.lower()))
        return result.scalar_one_or_none()

    @staticmethod
    async def get_by_username(db: AsyncSession, username: str) -> User | None:
        """Get a user by username (case-insensitive)."""
        result = await db.execute(
            select(User).where(func.lower(User.username) == username.lower())
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def username_exists(db: AsyncSession, username: str) -> bool:
        """Check if a username is already taken."""
        user = await UserRepository.get_by_username(db, username)
        return user is not None

    @staticmethod
    async def email_exists(db: AsyncSession, email: str) -> bool:
        """Check if an email address is already registered."""
        user = await UserRepository.get_by_email(db, email)
        return user is not None

    @staticmethod
    async def update_profile(
        db: AsyncSession,
        user_id: str | UUID,
        **fields: Any,
    ) -> User | None:
        """
        Update profile columns of a user.

        ``None`` values are skipped so optional onboarding fields never
        erase existing data.

        Args:
            db: Database session
            user_id: User UUID
            **fields: Columns to update (must be in PROFILE_FIELDS)

        Returns:
            Updated User instance or None if not found

        Raises:
            ValueError: If a field is not an updatable profile column
        """
        unknown = set(fields) - PROFILE_FIELDS
        if unknown:
            raise ValueError(f"Not updatable profile fields: {', '.join(sorted(unknown))}")

        user = await UserRepository.get_by_id(db, user_id)
        if not user:
            return None

        for name, value in fields.items():
            if value is not None:
                setattr(user, name, value)

        await db.flush()
        await db.refresh(user)

        logger.info(f"Updated profile of user {user.id}: {', '.join(sorted(fields))}")
        return user
