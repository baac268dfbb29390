"""
Fixtures for onboarding tests.
"""

from datetime import UTC, date, datetime
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from app.modules.onboarding.models import EducationBoard, StudentProfile, Subject
from app.modules.onboarding.schemas import SchoolRegistrationCreate, StudentProfileCreate
from app.modules.reference.schemas import BoardType, EducationType
from app.modules.schools import EducationLevel, GenderType, School
from app.modules.users import User, UserRole

USER_ID = "6f1c2b9e-1d3a-4b5c-8d7e-9f0a1b2c3d4e"


@pytest.fixture
def mock_db():
    """Create a mock database session."""
    db = AsyncMock()
    db.add = MagicMock()
    return db


@pytest.fixture
def sample_user():
    """A freshly registered student who hasn't completed onboarding."""
    user = MagicMock(spec=User)
    user.id = USER_ID
    user.username = "ali_khan"
    user.email = "ali@example.com"
    user.city = None
    user.role = UserRole.STUDENT
    user.is_onboarding_complete = False
    return user


@pytest.fixture
def sample_board():
    board = MagicMock(spec=EducationBoard)
    board.id = "fbise"
    board.name = "Federal Board of Intermediate and Secondary Education"
    board.type = BoardType.BOTH
    board.region = "Islamabad"
    return board


def _subject(name: str, compulsory: bool = False, board_id: str = "fbise") -> MagicMock:
    slug = name.lower().replace(" ", "-")
    subject = MagicMock(spec=Subject)
    subject.id = f"{board_id}:matric:{slug}"
    subject.name = name
    subject.code = f"{board_id}-matric-{slug}".upper()
    subject.board_id = board_id
    subject.education_type = EducationType.MATRIC
    subject.is_compulsory = compulsory
    return subject


@pytest.fixture
def sample_subjects():
    return [_subject("English", compulsory=True), _subject("Physics"), _subject("Chemistry")]


@pytest.fixture
def foreign_subject():
    """A subject offered by another board."""
    return _subject("Physics", board_id="bise-lahore")


@pytest.fixture
def sample_school():
    school = MagicMock(spec=School)
    school.id = str(uuid4())
    school.name = "Beaconhouse School"
    school.registration_number = "REG-12345"
    school.established_year = 1975
    school.principal_name = "Sara Ahmed"
    school.email = "info@beaconhouse.edu.pk"
    school.contact_number = "+92421234567"
    school.address = "12 Main Boulevard"
    school.city = "Lahore"
    school.website = None
    school.education_level = EducationLevel.BOTH
    school.gender_type = GenderType.CO_EDUCATION
    school.registration_proof_url = "/uploads/proof.pdf"
    school.logo_url = None
    school.school_code = "ABC234"
    school.is_verified = False
    school.admin_id = USER_ID
    school.created_at = datetime.now(UTC)
    return school


@pytest.fixture
def sample_profile(sample_subjects):
    profile = MagicMock(spec=StudentProfile)
    profile.id = USER_ID
    profile.date_of_birth = date(2008, 5, 1)
    profile.class_grade = "grade-9"
    profile.education_type = EducationType.MATRIC
    profile.board_id = "fbise"
    profile.school_id = None
    profile.school_name = None
    profile.bio = None
    profile.subject_ids = [subject.id for subject in sample_subjects[:2]]
    profile.created_at = datetime.now(UTC)
    return profile


@pytest.fixture
def student_fields(sample_subjects):
    """Wire (camelCase) fields of a valid student submission."""
    return {
        "fullName": "Ali Khan",
        "username": "ali_khan",
        "email": "ali@example.com",
        "dateOfBirth": "2008-05-01",
        "gender": "male",
        "city": "Islamabad",
        "phoneNumber": "03001234567",
        "educationType": "matric",
        "boardId": "fbise",
        "classGrade": "grade-9",
        "schoolType": "later",
        "subjectIds": [subject.id for subject in sample_subjects[:2]],
    }


@pytest.fixture
def student_create(student_fields):
    return StudentProfileCreate.model_validate(student_fields)


@pytest.fixture
def school_fields():
    """Wire (camelCase) form fields of a valid school registration."""
    return {
        "name": "Beaconhouse School",
        "registrationNumber": "REG-12345",
        "establishedYear": "1975",
        "principalName": "Sara Ahmed",
        "email": "info@beaconhouse.edu.pk",
        "contactNumber": "+92421234567",
        "address": "12 Main Boulevard",
        "city": "Lahore",
        "educationLevel": "both",
        "genderType": "co_education",
        "fullName": "Sara Ahmed",
    }


@pytest.fixture
def school_create(school_fields):
    return SchoolRegistrationCreate.model_validate(school_fields)
