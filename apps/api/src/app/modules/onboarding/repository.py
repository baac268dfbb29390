"""
Onboarding Repository

Database operations for education boards, subjects and student profiles.
Writes only flush; the request-scoped session commits (see core.database.get_db),
so a profile and its subject links land in one transaction.
"""

from datetime import date

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.reference.schemas import BoardType, EducationType

from .models import EducationBoard, StudentProfile, StudentSubject, Subject


async def list_boards(
    db: AsyncSession, education_type: EducationType | None = None
) -> list[EducationBoard]:
    """
    List education boards.

    With an education type, only boards examining that track (or both
    tracks) are returned.
    """
    stmt = select(EducationBoard)
    if education_type is not None:
        stmt = stmt.where(
            or_(
                EducationBoard.type == BoardType(education_type.value),
                EducationBoard.type == BoardType.BOTH,
            )
        )
    result = await db.execute(stmt.order_by(EducationBoard.name))
    return list(result.scalars().all())


async def get_board(db: AsyncSession, board_id: str) -> EducationBoard | None:
    return await db.get(EducationBoard, board_id)


async def list_subjects(
    db: AsyncSession, board_id: str, education_type: EducationType
) -> list[Subject]:
    """List the subjects a board offers for a track, compulsory ones first."""
    result = await db.execute(
        select(Subject)
        .where(Subject.board_id == board_id, Subject.education_type == education_type)
        .order_by(Subject.is_compulsory.desc(), Subject.name)
    )
    return list(result.scalars().all())


async def get_subjects_by_ids(db: AsyncSession, subject_ids: list[str]) -> list[Subject]:
    if not subject_ids:
        return []
    result = await db.execute(select(Subject).where(Subject.id.in_(subject_ids)))
    return list(result.scalars().all())


async def get_profile(db: AsyncSession, user_id: str) -> StudentProfile | None:
    return await db.get(StudentProfile, user_id)


async def create_profile(
    db: AsyncSession,
    *,
    user_id: str,
    date_of_birth: date | None,
    class_grade: str,
    education_type: EducationType,
    board_id: str,
    subject_ids: list[str],
    school_id: str | None = None,
    school_name: str | None = None,
    bio: str | None = None,
) -> StudentProfile:
    """Create a student profile together with its subject links."""
    profile = StudentProfile(
        id=user_id,
        date_of_birth=date_of_birth,
        class_grade=class_grade,
        education_type=education_type,
        board_id=board_id,
        school_id=school_id,
        school_name=school_name,
        bio=bio,
    )
    profile.subjects = [StudentSubject(subject_id=subject_id) for subject_id in subject_ids]

    db.add(profile)
    await db.flush()
    await db.refresh(profile, ["created_at", "updated_at"])

    return profile


async def set_profile_school(
    db: AsyncSession, profile: StudentProfile, school_id: str
) -> StudentProfile:
    """Point a profile at a registered school, dropping any free-text name."""
    profile.school_id = school_id
    profile.school_name = None
    await db.flush()
    return profile
