"""create onboarding schema

Revision ID: a1c2e3f4a5b6
Revises:
Create Date: 2026-10-19 12:00:00.000000

This migration:
1. Creates the enum types used by users, schools and the education catalogue
2. Creates users and schools (the users -> schools foreign key is added after
   both tables exist, since each references the other)
3. Creates education_boards and subjects (filled by scripts/seed_reference_data.py)
4. Creates student_profiles and student_subjects
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "a1c2e3f4a5b6"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

ENUMS = {
    "user_role": ("student", "school_admin"),
    "gender": ("male", "female", "other"),
    "education_level": ("matric", "o_level", "both"),
    "gender_type": ("boys", "girls", "co_education"),
    "board_type": ("matric", "o_level", "both"),
    "education_type": ("matric", "o_level"),
}


def _enum(name: str) -> postgresql.ENUM:
    return postgresql.ENUM(*ENUMS[name], name=name, create_type=False)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Create the onboarding tables."""
    bind = op.get_bind()
    for name, values in ENUMS.items():
        postgresql.ENUM(*values, name=name).create(bind, checkfirst=True)

    # Users (school_id foreign key added once schools exists)
    op.create_table(
        "users",
        sa.Column("id", postgresql.UUID(as_uuid=False), nullable=False),
        *_timestamps(),
        sa.Column("school_id", postgresql.UUID(as_uuid=False), nullable=True),
        # Authentication
        sa.Column("username", sa.String(length=50), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.Text(), nullable=False),
        # Profile
        sa.Column("first_name", sa.String(length=100), nullable=True),
        sa.Column("last_name", sa.String(length=100), nullable=True),
        sa.Column("phone", sa.String(length=20), nullable=True),
        sa.Column("city", sa.String(length=100), nullable=True),
        sa.Column("gender", _enum("gender"), nullable=True),
        sa.Column("date_of_birth", sa.Date(), nullable=True),
        sa.Column("profile_image_url", sa.String(length=500), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("interests", postgresql.JSON(astext_type=sa.Text()), nullable=True),
        sa.Column("security_question", sa.String(length=255), nullable=True),
        sa.Column("security_answer_hash", sa.Text(), nullable=True),
        # Preferences
        sa.Column("language", sa.String(length=10), nullable=False, server_default="en"),
        sa.Column("is_public", sa.Boolean(), nullable=False, server_default="true"),
        # Role and status
        sa.Column("role", _enum("user_role"), nullable=False, server_default="student"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column(
            "is_onboarding_complete", sa.Boolean(), nullable=False, server_default="false"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_username"), "users", ["username"], unique=True)
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)
    op.create_index(op.f("ix_users_school_id"), "users", ["school_id"], unique=False)

    # Schools
    op.create_table(
        "schools",
        sa.Column("id", postgresql.UUID(as_uuid=False), nullable=False),
        *_timestamps(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("registration_number", sa.String(length=50), nullable=False),
        sa.Column("established_year", sa.Integer(), nullable=True),
        sa.Column("principal_name", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("contact_number", sa.String(length=20), nullable=False),
        sa.Column("address", sa.Text(), nullable=False),
        sa.Column("city", sa.String(length=100), nullable=False),
        sa.Column("website", sa.String(length=255), nullable=True),
        sa.Column(
            "education_level", _enum("education_level"), nullable=False, server_default="both"
        ),
        sa.Column(
            "gender_type", _enum("gender_type"), nullable=False, server_default="co_education"
        ),
        sa.Column("registration_proof_url", sa.String(length=500), nullable=False),
        sa.Column("logo_url", sa.String(length=500), nullable=True),
        sa.Column("school_code", sa.String(length=6), nullable=False),
        sa.Column("is_verified", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("admin_id", postgresql.UUID(as_uuid=False), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("registration_number", name="uq_schools_registration_number"),
        sa.ForeignKeyConstraint(
            ["admin_id"],
            ["users.id"],
            name="fk_schools_admin_id",
            ondelete="SET NULL",
        ),
    )
    op.create_index(op.f("ix_schools_name"), "schools", ["name"], unique=False)
    op.create_index(op.f("ix_schools_city"), "schools", ["city"], unique=False)
    op.create_index(op.f("ix_schools_school_code"), "schools", ["school_code"], unique=True)

    op.create_foreign_key(
        "fk_users_school_id",
        "users",
        "schools",
        ["school_id"],
        ["id"],
        ondelete="SET NULL",
    )

    # Education catalogue
    op.create_table(
        "education_boards",
        sa.Column("id", sa.String(length=50), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("type", _enum("board_type"), nullable=False),
        sa.Column("region", sa.String(length=100), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "subjects",
        sa.Column("id", sa.String(length=150), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("code", sa.String(length=150), nullable=False),
        sa.Column("board_id", sa.String(length=50), nullable=False),
        sa.Column("education_type", _enum("education_type"), nullable=False),
        sa.Column("is_compulsory", sa.Boolean(), nullable=False, server_default="false"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("code", name="uq_subjects_code"),
        sa.ForeignKeyConstraint(
            ["board_id"],
            ["education_boards.id"],
            name="fk_subjects_board_id",
            ondelete="CASCADE",
        ),
    )
    op.create_index(
        "ix_subjects_board_education_type",
        "subjects",
        ["board_id", "education_type"],
        unique=False,
    )

    # Student profiles
    op.create_table(
        "student_profiles",
        sa.Column("id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("date_of_birth", sa.Date(), nullable=True),
        sa.Column("class_grade", sa.String(length=20), nullable=False),
        sa.Column("education_type", _enum("education_type"), nullable=False),
        sa.Column("board_id", sa.String(length=50), nullable=True),
        sa.Column("school_id", postgresql.UUID(as_uuid=False), nullable=True),
        sa.Column("school_name", sa.String(length=255), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["id"], ["users.id"], name="fk_student_profiles_user_id", ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["board_id"],
            ["education_boards.id"],
            name="fk_student_profiles_board_id",
            ondelete="SET NULL",
        ),
        sa.ForeignKeyConstraint(
            ["school_id"],
            ["schools.id"],
            name="fk_student_profiles_school_id",
            ondelete="SET NULL",
        ),
    )
    op.create_index(
        op.f("ix_student_profiles_school_id"), "student_profiles", ["school_id"], unique=False
    )

    op.create_table(
        "student_subjects",
        sa.Column("student_id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("subject_id", sa.String(length=150), nullable=False),
        sa.Column("is_elective", sa.Boolean(), nullable=False, server_default="false"),
        sa.PrimaryKeyConstraint("student_id", "subject_id"),
        sa.ForeignKeyConstraint(
            ["student_id"],
            ["student_profiles.id"],
            name="fk_student_subjects_student_id",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["subject_id"],
            ["subjects.id"],
            name="fk_student_subjects_subject_id",
            ondelete="CASCADE",
        ),
    )


def downgrade() -> None:
    """Drop the onboarding tables."""
    op.drop_table("student_subjects")
    op.drop_index(op.f("ix_student_profiles_school_id"), table_name="student_profiles")
    op.drop_table("student_profiles")
    op.drop_index("ix_subjects_board_education_type", table_name="subjects")
    op.drop_table("subjects")
    op.drop_table("education_boards")

    op.drop_constraint("fk_users_school_id", "users", type_="foreignkey")
    op.drop_index(op.f("ix_schools_school_code"), table_name="schools")
    op.drop_index(op.f("ix_schools_city"), table_name="schools")
    op.drop_index(op.f("ix_schools_name"), table_name="schools")
    op.drop_table("schools")

    op.drop_index(op.f("ix_users_school_id"), table_name="users")
    op.drop_index(op.f("ix_users_email"), table_name="users")
    op.drop_index(op.f("ix_users_username"), table_name="users")
    op.drop_table("users")

    bind = op.get_bind()
    for name, values in ENUMS.items():
        postgresql.ENUM(*values, name=name).drop(bind, checkfirst=True)
