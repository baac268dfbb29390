"""
School Models

Database models for schools registered through onboarding.
"""

from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, ForeignKey, Integer, String, Text
from sqlalchemy.dialects.postgresql import ENUM, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.modules.shared import BaseModel

if TYPE_CHECKING:
    from app.modules.users.models import User


class EducationLevel(str, Enum):
    """Curricula a school teaches."""

    MATRIC = "matric"
    O_LEVEL = "o_level"
    BOTH = "both"


class GenderType(str, Enum):
    """Who a school admits."""

    BOYS = "boys"
    GIRLS = "girls"
    CO_EDUCATION = "co_education"


def _enum_values(enum_cls: type[Enum]) -> list[str]:
    return [member.value for member in enum_cls]


class School(BaseModel):
    """
    School registered by a school admin.

    Students find a school through search during onboarding, or join it
    with its 6-character school code.
    """

    __tablename__ = "schools"

    # Identity
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    registration_number: Mapped[str] = mapped_column(
        String(50),
        unique=True,
        nullable=False,
    )
    established_year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    principal_name: Mapped[str] = mapped_column(String(100), nullable=False)

    # Contact
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    contact_number: Mapped[str] = mapped_column(String(20), nullable=False)
    address: Mapped[str] = mapped_column(Text, nullable=False)
    city: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    website: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Classification
    education_level: Mapped[EducationLevel] = mapped_column(
        ENUM(
            EducationLevel,
            name="education_level",
            create_type=True,
            values_callable=_enum_values,
        ),
        nullable=False,
        default=EducationLevel.BOTH,
    )
    gender_type: Mapped[GenderType] = mapped_column(
        ENUM(GenderType, name="gender_type", create_type=True, values_callable=_enum_values),
        nullable=False,
        default=GenderType.CO_EDUCATION,
    )

    # Documents (public URLs of stored uploads)
    registration_proof_url: Mapped[str] = mapped_column(String(500), nullable=False)
    logo_url: Mapped[str | None] = mapped_column(String(500), nullable=True)

    # Join code handed out to students
    school_code: Mapped[str] = mapped_column(
        String(6),
        unique=True,
        index=True,
        nullable=False,
    )

    is_verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # ON DELETE SET NULL: the school survives the deletion of its admin account
    admin_id: Mapped[str | None] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("users.id", ondelete="SET NULL", use_alter=True),
        nullable=True,
    )

    # Relationships
    users: Mapped[list["User"]] = relationship(
        "User",
        back_populates="school",
        foreign_keys="User.school_id",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<School(id={self.id}, name={self.name}, code={self.school_code})>"
