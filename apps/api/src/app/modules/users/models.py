"""
User Models

Database models for user accounts and authentication.
"""

from datetime import date
from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Date, ForeignKey, String, Text
from sqlalchemy.dialects.postgresql import ENUM, JSON, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.modules.shared import BaseModel

if TYPE_CHECKING:
    from app.modules.schools.models import School


class UserRole(str, Enum):
    """User roles in the system."""

    STUDENT = "student"
    SCHOOL_ADMIN = "school_admin"


class Gender(str, Enum):
    """Gender options offered during onboarding."""

    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class User(BaseModel):
    """
    User account.

    Created at signup with just a username, email and password; the
    onboarding wizard fills in the profile fields afterwards.

    Students may belong to a school (school_id); a school admin's school_id
    points at the school they registered.
    """

    __tablename__ = "users"

    # ON DELETE SET NULL: users survive the deletion of their school
    school_id: Mapped[str | None] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("schools.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    # Authentication fields
    username: Mapped[str] = mapped_column(
        String(50),
        unique=True,
        index=True,
        nullable=False,
    )
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False,
    )
    password_hash: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    # Profile fields (filled during onboarding)
    first_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(20), nullable=True)
    city: Mapped[str | None] = mapped_column(String(100), nullable=True)
    gender: Mapped[Gender | None] = mapped_column(
        ENUM(Gender, name="gender", create_type=True, values_callable=lambda e: [m.value for m in e]),
        nullable=True,
    )
    date_of_birth: Mapped[date | None] = mapped_column(Date, nullable=True)
    profile_image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    interests: Mapped[list | None] = mapped_column(JSON, nullable=True)

    # Optional account recovery question (answer stored hashed)
    security_question: Mapped[str | None] = mapped_column(String(255), nullable=True)
    security_answer_hash: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Preferences
    language: Mapped[str] = mapped_column(String(10), default="en", nullable=False)
    is_public: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    # Role and status
    role: Mapped[UserRole] = mapped_column(
        ENUM(
            UserRole,
            name="user_role",
            create_type=True,
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        default=UserRole.STUDENT,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    is_onboarding_complete: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )

    # Relationships
    school: Mapped["School | None"] = relationship(
        "School",
        back_populates="users",
        foreign_keys=[school_id],
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username}, role={self.role.value})>"

    @property
    def full_name(self) -> str:
        """Return the user's full name, falling back to the username."""
        name = " ".join(part for part in (self.first_name, self.last_name) if part)
        return name or self.username
