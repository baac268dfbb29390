"""
Onboarding Models

Database models for the education catalogue tables and student profiles.

``education_boards`` and ``subjects`` are keyed by stable string IDs derived
from the reference catalogue (see scripts/seed_reference_data.py), so they do
not use the UUID base model.
"""

from datetime import date, datetime

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    ForeignKey,
    Index,
    String,
    Text,
    func,
)
from sqlalchemy.dialects.postgresql import ENUM, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base
from app.modules.reference.schemas import BoardType, EducationType


def _enum_values(enum_cls) -> list[str]:
    return [member.value for member in enum_cls]


class EducationBoard(Base):
    """Examining board a student studies under."""

    __tablename__ = "education_boards"

    id: Mapped[str] = mapped_column(String(50), primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    type: Mapped[BoardType] = mapped_column(
        ENUM(BoardType, name="board_type", create_type=True, values_callable=_enum_values),
        nullable=False,
    )
    region: Mapped[str | None] = mapped_column(String(100), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    subjects: Mapped[list["Subject"]] = relationship(
        "Subject", back_populates="board", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<EducationBoard(id={self.id}, type={self.type.value})>"


class Subject(Base):
    """Subject offered by a board for one education track."""

    __tablename__ = "subjects"

    id: Mapped[str] = mapped_column(String(150), primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    code: Mapped[str] = mapped_column(String(150), unique=True, nullable=False)
    board_id: Mapped[str] = mapped_column(
        String(50),
        ForeignKey("education_boards.id", ondelete="CASCADE"),
        nullable=False,
    )
    education_type: Mapped[EducationType] = mapped_column(
        ENUM(
            EducationType,
            name="education_type",
            create_type=True,
            values_callable=_enum_values,
        ),
        nullable=False,
    )
    is_compulsory: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    board: Mapped["EducationBoard"] = relationship("EducationBoard", back_populates="subjects")

    __table_args__ = (
        Index("ix_subjects_board_education_type", "board_id", "education_type"),
    )


class StudentProfile(Base):
    """
    Education profile of a student, created when onboarding completes.

    Shares its primary key with the user row; a user has at most one profile.
    Exactly one of school_id / school_name is set when the student named a
    school, neither when they chose to add it later.
    """

    __tablename__ = "student_profiles"

    id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    date_of_birth: Mapped[date | None] = mapped_column(Date, nullable=True)
    class_grade: Mapped[str] = mapped_column(String(20), nullable=False)
    education_type: Mapped[EducationType] = mapped_column(
        ENUM(
            EducationType,
            name="education_type",
            create_type=False,
            values_callable=_enum_values,
        ),
        nullable=False,
    )
    board_id: Mapped[str | None] = mapped_column(
        String(50),
        ForeignKey("education_boards.id", ondelete="SET NULL"),
        nullable=True,
    )
    school_id: Mapped[str | None] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("schools.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    # Free-text school name when the school is not registered on the platform
    school_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    subjects: Mapped[list["StudentSubject"]] = relationship(
        "StudentSubject",
        back_populates="student",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    @property
    def subject_ids(self) -> list[str]:
        return [link.subject_id for link in self.subjects]

    def __repr__(self) -> str:
        return f"<StudentProfile(id={self.id}, board={self.board_id}, grade={self.class_grade})>"


class StudentSubject(Base):
    """Subject selected by a student."""

    __tablename__ = "student_subjects"

    student_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("student_profiles.id", ondelete="CASCADE"),
        primary_key=True,
    )
    subject_id: Mapped[str] = mapped_column(
        String(150),
        ForeignKey("subjects.id", ondelete="CASCADE"),
        primary_key=True,
    )
    is_elective: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    student: Mapped["StudentProfile"] = relationship("StudentProfile", back_populates="subjects")
