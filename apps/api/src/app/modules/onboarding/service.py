"""
Onboarding Service Layer

Business logic behind the onboarding wizard.

This module implements:
1. Reference lookups:
   - Education boards for a track, subjects of a board, school search
   - Username availability for the signup step

2. Student completion:
   - Validate the board, the school and the selected subjects
   - Write identity fields to the user, create the profile and its subject
     links, mark onboarding complete (one transaction)

3. School registration:
   - Reject duplicate registration numbers
   - Store the registration proof and logo uploads
   - Create the school with a unique 6-character join code and make the
     caller its school admin

4. Joining a school:
   - Attach a student (user and profile) to the school owning a join code
"""

import logging
import secrets
import string
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.security import hash_password
from app.core.uploads import Upload, discard_uploads, save_upload
from app.modules.onboarding import repository
from app.modules.onboarding.models import EducationBoard, StudentProfile, Subject
from app.modules.onboarding.schemas import (
    SCHOOL_CODE_LENGTH,
    SchoolRegistrationCreate,
    StudentProfileCreate,
)
from app.modules.reference.schemas import EducationType
from app.modules.schools import School, SchoolRepository
from app.modules.shared.errors import (
    BoardNotFoundError,
    DuplicateSchoolError,
    EmailTakenError,
    InvalidSchoolCodeError,
    InvalidSubjectsError,
    OnboardingServiceError,
    ProfileAlreadyExistsError,
    SchoolNotFoundError,
    UsernameTakenError,
    UserNotFoundError,
)
from app.modules.users import User, UserRepository, UserRole

logger = logging.getLogger(__name__)

# Join codes avoid characters that are easy to misread (0/O, 1/I)
SCHOOL_CODE_ALPHABET = "".join(
    ch for ch in string.ascii_uppercase + string.digits if ch not in "0O1I"
)
SCHOOL_CODE_MAX_ATTEMPTS = 10


def generate_school_code() -> str:
    """Generate a random 6-character join code."""
    return "".join(secrets.choice(SCHOOL_CODE_ALPHABET) for _ in range(SCHOOL_CODE_LENGTH))


async def _unique_school_code(db: AsyncSession) -> str:
    for _ in range(SCHOOL_CODE_MAX_ATTEMPTS):
        code = generate_school_code()
        if not await SchoolRepository.code_exists(db, code):
            return code
    raise OnboardingServiceError(
        message="Could not allocate a school code, please retry",
        error_code="SCHOOL_CODE_UNAVAILABLE",
        status_code=503,
    )


# =============================================================================
# Reference lookups
# =============================================================================


async def is_username_available(db: AsyncSession, username: str) -> bool:
    """Check whether a username is free (case-insensitive)."""
    return not await UserRepository.username_exists(db, username.strip())


async def get_boards(db: AsyncSession, board_type: str | None = None) -> list[EducationBoard]:
    """
    List education boards.

    ``board_type`` is the raw query value: "matric" or "o_level" narrows the
    list, anything else (including "both" and no value) returns every board.
    """
    try:
        education_type = EducationType(board_type) if board_type else None
    except ValueError:
        education_type = None
    return await repository.list_boards(db, education_type)


async def get_subjects(
    db: AsyncSession, board_id: str, education_type: EducationType
) -> list[Subject]:
    return await repository.list_subjects(db, board_id, education_type)


async def search_schools(db: AsyncSession, query: str, city: str | None = None) -> list[School]:
    """Case-insensitive school search by name (and city), top 10 by name."""
    return await SchoolRepository.search(db, query.strip(), city.strip() if city else None)


# =============================================================================
# Shared helpers
# =============================================================================


async def _get_user(db: AsyncSession, user_id: str) -> User:
    user = await UserRepository.get_by_id(db, user_id)
    if not user:
        raise UserNotFoundError()
    return user


async def _claim_identity(
    db: AsyncSession, user: User, username: str | None, email: str | None
) -> dict[str, Any]:
    """
    Return username/email updates for the user, checking they are free.

    Values equal to the current ones (ignoring case) are not updates.

    Raises:
        UsernameTakenError: If another account uses the username
        EmailTakenError: If another account uses the email
    """
    changes: dict[str, Any] = {}

    if username and username.lower() != user.username.lower():
        if await UserRepository.username_exists(db, username):
            raise UsernameTakenError()
        changes["username"] = username

    if email and email.lower() != user.email.lower():
        if await UserRepository.email_exists(db, email):
            raise EmailTakenError()
        changes["email"] = email

    return changes


def _split_name(full_name: str | None) -> tuple[str | None, str | None]:
    if not full_name:
        return None, None
    first, _, last = full_name.strip().partition(" ")
    return first, last.strip() or None


# =============================================================================
# Student completion
# =============================================================================


async def _check_subjects(
    db: AsyncSession,
    subject_ids: list[str],
    board_id: str,
    education_type: EducationType,
) -> None:
    subjects = await repository.get_subjects_by_ids(db, subject_ids)
    valid = {
        subject.id
        for subject in subjects
        if subject.board_id == board_id and subject.education_type == education_type
    }
    invalid = [subject_id for subject_id in subject_ids if subject_id not in valid]
    if invalid:
        raise InvalidSubjectsError(invalid)


async def complete_student_profile(
    db: AsyncSession,
    user_id: str,
    data: StudentProfileCreate,
    profile_image: Upload | None = None,
) -> StudentProfile:
    """
    Complete onboarding for a student.

    Args:
        db: Database session (committed by the caller's request scope)
        user_id: ID of the authenticated user
        data: Validated wizard fields
        profile_image: Optional validated profile picture

    Returns:
        The created StudentProfile

    Raises:
        UserNotFoundError: If the user no longer exists
        ProfileAlreadyExistsError: If the user already has a profile
        UsernameTakenError / EmailTakenError: If the chosen identity is taken
        BoardNotFoundError: If the board doesn't exist
        SchoolNotFoundError: If a registered school was chosen that doesn't exist
        InvalidSubjectsError: If a subject isn't offered by the board for the track
    """
    user = await _get_user(db, user_id)

    if await repository.get_profile(db, user_id) is not None:
        raise ProfileAlreadyExistsError()

    identity = await _claim_identity(db, user, data.username, data.email)

    if await repository.get_board(db, data.board_id) is None:
        raise BoardNotFoundError(data.board_id)

    if data.school_id and await SchoolRepository.get_by_id(db, data.school_id) is None:
        raise SchoolNotFoundError()

    await _check_subjects(db, data.subject_ids, data.board_id, data.education_type)

    answer_hash = None
    if data.security_answer:
        answer_hash = hash_password(data.security_answer.strip().lower())

    image_url = None
    stored: list[str] = []
    try:
        if profile_image is not None:
            image_url = await save_upload(
                profile_image, settings.upload_dir, settings.upload_base_url
            )
            stored.append(image_url)

        first_name, last_name = _split_name(data.full_name)
        await UserRepository.update_profile(
            db,
            user_id,
            **identity,
            first_name=first_name,
            last_name=last_name,
            city=data.city,
            phone=data.phone_number,
            gender=data.gender,
            date_of_birth=data.date_of_birth,
            bio=data.bio,
            interests=data.interests or None,
            profile_image_url=image_url,
            security_question=data.security_question if data.security_answer else None,
            security_answer_hash=answer_hash,
            school_id=data.school_id,
            role=UserRole.STUDENT,
            is_onboarding_complete=True,
        )

        profile = await repository.create_profile(
            db,
            user_id=user_id,
            date_of_birth=data.date_of_birth,
            class_grade=data.class_grade,
            education_type=data.education_type,
            board_id=data.board_id,
            subject_ids=data.subject_ids,
            school_id=data.school_id,
            school_name=data.school_name,
            bio=data.bio,
        )
    except Exception:
        await discard_uploads(stored, settings.upload_dir)
        raise

    logger.info(
        f"Student onboarding completed: user={user_id}, board={data.board_id}, "
        f"subjects={len(data.subject_ids)}"
    )
    return profile


# =============================================================================
# School registration
# =============================================================================


async def register_school(
    db: AsyncSession,
    user_id: str,
    data: SchoolRegistrationCreate,
    registration_proof: Upload,
    logo: Upload | None = None,
) -> School:
    """
    Register a school and make the caller its admin.

    Raises:
        UserNotFoundError: If the user no longer exists
        DuplicateSchoolError: If the registration number is already registered
        UsernameTakenError: If the admin picked a taken username
    """
    user = await _get_user(db, user_id)

    existing = await SchoolRepository.get_by_registration_number(db, data.registration_number)
    if existing is not None:
        logger.warning(
            f"Duplicate school registration rejected: {data.registration_number} "
            f"(existing school {existing.id})"
        )
        raise DuplicateSchoolError(data.registration_number)

    identity = await _claim_identity(db, user, data.username, None)

    code = await _unique_school_code(db)

    stored: list[str] = []
    try:
        proof_url = await save_upload(
            registration_proof, settings.upload_dir, settings.upload_base_url
        )
        stored.append(proof_url)
        logo_url = None
        if logo is not None:
            logo_url = await save_upload(logo, settings.upload_dir, settings.upload_base_url)
            stored.append(logo_url)

        school = await SchoolRepository.create(
            db,
            name=data.name,
            registration_number=data.registration_number,
            established_year=data.established_year,
            principal_name=data.principal_name,
            email=data.email,
            contact_number=data.contact_number,
            address=data.address,
            city=data.city,
            website=data.website,
            education_level=data.education_level,
            gender_type=data.gender_type,
            registration_proof_url=proof_url,
            logo_url=logo_url,
            school_code=code,
            admin_id=user_id,
        )

        first_name, last_name = _split_name(data.full_name)
        await UserRepository.update_profile(
            db,
            user_id,
            **identity,
            first_name=first_name,
            last_name=last_name,
            phone=data.phone_number,
            gender=data.gender,
            date_of_birth=data.date_of_birth,
            city=data.city if not user.city else None,
            role=UserRole.SCHOOL_ADMIN,
            school_id=school.id,
            is_onboarding_complete=True,
        )
    except Exception:
        await discard_uploads(stored, settings.upload_dir)
        raise

    logger.info(f"School registered: {school.id} ({school.name}) by user {user_id}")
    return school


# =============================================================================
# Joining a school
# =============================================================================


async def join_school(db: AsyncSession, user_id: str, school_code: str) -> School:
    """
    Attach a student to the school owning ``school_code``.

    The student's profile (when it exists) is pointed at the school too.

    Raises:
        UserNotFoundError: If the user no longer exists
        InvalidSchoolCodeError: If no school has the code
    """
    await _get_user(db, user_id)

    school = await SchoolRepository.get_by_code(db, school_code)
    if school is None:
        logger.info(f"Join attempt with unknown school code by user {user_id}")
        raise InvalidSchoolCodeError()

    await UserRepository.update_profile(db, user_id, school_id=school.id)

    profile = await repository.get_profile(db, user_id)
    if profile is not None:
        await repository.set_profile_school(db, profile, school.id)

    logger.info(f"User {user_id} joined school {school.id}")
    return school
