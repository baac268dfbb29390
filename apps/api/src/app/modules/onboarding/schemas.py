"""
Onboarding Schemas

Pydantic schemas for the onboarding endpoints. Everything on the wire is
camelCase; Python code uses snake_case field names.
"""

from datetime import date, datetime
from enum import Enum

from pydantic import ConfigDict, EmailStr, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

from app.modules.reference.schemas import BoardType, CamelModel, EducationType
from app.modules.schools.models import EducationLevel, GenderType
from app.modules.users.models import Gender

SCHOOL_CODE_LENGTH = 6


def error_field(loc: tuple[int | str, ...]) -> str:
    """
    Wire name for a pydantic error location.

    Pydantic reports defaulted fields under their attribute name rather than
    their alias, so snake_case parts are converted back to camelCase.
    """
    parts = [
        to_camel(part) if isinstance(part, str) and "_" in part else str(part) for part in loc
    ]
    return ".".join(parts)


class SchoolType(str, Enum):
    """How a student identifies their school during onboarding."""

    REGISTERED = "registered"
    NOT_LISTED = "not_listed"
    LATER = "later"


class ORMCamelModel(CamelModel):
    model_config = ConfigDict(from_attributes=True)


# =============================================================================
# Reference lookups
# =============================================================================


class EducationBoardOut(ORMCamelModel):
    id: str
    name: str
    type: BoardType
    region: str | None = None


class SubjectOut(ORMCamelModel):
    id: str
    name: str
    code: str
    board_id: str
    education_type: EducationType
    is_compulsory: bool


class SchoolSummary(ORMCamelModel):
    """School as shown in search results. The join code is never listed."""

    id: str
    name: str
    city: str
    address: str
    education_level: EducationLevel
    gender_type: GenderType
    logo_url: str | None = None
    is_verified: bool


class BoardsResponse(CamelModel):
    boards: list[EducationBoardOut]


class SubjectsResponse(CamelModel):
    subjects: list[SubjectOut]


class SchoolSearchResponse(CamelModel):
    schools: list[SchoolSummary]


class UsernameAvailabilityResponse(CamelModel):
    available: bool


# =============================================================================
# Student profile completion
# =============================================================================


class StudentProfileCreate(CamelModel):
    """
    Request body for POST /onboarding/student/profile.

    Sent as JSON, or as multipart form fields when a profile image is
    attached. Identity fields (name, username, email, ...) are written to
    the user; education fields create the student profile.
    """

    # Identity
    full_name: str = Field(..., min_length=2, max_length=100)
    username: str | None = Field(None, min_length=3, max_length=50)
    email: EmailStr | None = None
    date_of_birth: date
    gender: Gender
    city: str = Field(..., min_length=1, max_length=100)
    phone_number: str = Field(..., min_length=1, max_length=20)
    security_question: str | None = Field(None, max_length=255)
    security_answer: str | None = Field(None, max_length=255)

    # Education
    education_type: EducationType
    board_id: str = Field(..., min_length=1)
    class_grade: str = Field(..., min_length=1, max_length=20)
    school_type: SchoolType = SchoolType.LATER
    school_id: str | None = Field(None, validate_default=True)
    school_name: str | None = Field(None, max_length=255, validate_default=True)
    subject_ids: list[str] = Field(..., min_length=1)

    # Profile
    bio: str | None = Field(None, max_length=500)
    interests: list[str] = Field(default_factory=list)

    @field_validator("full_name", "city", "phone_number", "class_grade")
    @classmethod
    def strip_required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("school_id")
    @classmethod
    def school_id_for_registered(cls, value: str | None, info: ValidationInfo) -> str | None:
        school_type = info.data.get("school_type")
        if school_type == SchoolType.REGISTERED:
            if not value:
                raise ValueError("schoolId is required when schoolType is registered")
            return value
        return None

    @field_validator("school_name")
    @classmethod
    def school_name_for_not_listed(cls, value: str | None, info: ValidationInfo) -> str | None:
        school_type = info.data.get("school_type")
        if school_type == SchoolType.NOT_LISTED:
            if not value or not value.strip():
                raise ValueError("schoolName is required when schoolType is not_listed")
            return value.strip()
        return None

    @field_validator("subject_ids")
    @classmethod
    def unique_subjects(cls, value: list[str]) -> list[str]:
        return list(dict.fromkeys(value))


class StudentProfileOut(ORMCamelModel):
    id: str
    date_of_birth: date | None = None
    class_grade: str
    education_type: EducationType
    board_id: str | None = None
    school_id: str | None = None
    school_name: str | None = None
    bio: str | None = None
    subject_ids: list[str] = Field(default_factory=list)
    created_at: datetime


class StudentProfileResponse(CamelModel):
    profile: StudentProfileOut


# =============================================================================
# School registration
# =============================================================================


class SchoolRegistrationCreate(CamelModel):
    """
    Form fields of POST /onboarding/school/register.

    The registration proof and logo arrive as files next to these fields.
    The admin's identity fields are optional and update the caller's user.
    """

    # School
    name: str = Field(..., min_length=3, max_length=255)
    registration_number: str = Field(..., min_length=3, max_length=50)
    established_year: int | None = Field(None, ge=1900)
    principal_name: str = Field(..., min_length=3, max_length=100)
    email: EmailStr
    contact_number: str = Field(..., min_length=10, max_length=20)
    address: str = Field(..., min_length=5)
    city: str = Field(..., min_length=2, max_length=100)
    website: str | None = Field(None, max_length=255, pattern=r"^https?://\S+$")
    education_level: EducationLevel = EducationLevel.BOTH
    gender_type: GenderType = GenderType.CO_EDUCATION

    # Admin identity
    full_name: str | None = Field(None, min_length=2, max_length=100)
    username: str | None = Field(None, min_length=3, max_length=50)
    phone_number: str | None = Field(None, max_length=20)
    gender: Gender | None = None
    date_of_birth: date | None = None

    @field_validator("established_year")
    @classmethod
    def not_in_future(cls, value: int | None) -> int | None:
        current_year = datetime.now().year
        if value is not None and value > current_year:
            raise ValueError(f"establishedYear cannot be in the future (max: {current_year})")
        return value


class SchoolOut(ORMCamelModel):
    id: str
    name: str
    registration_number: str
    established_year: int | None = None
    principal_name: str
    email: str
    contact_number: str
    address: str
    city: str
    website: str | None = None
    education_level: EducationLevel
    gender_type: GenderType
    registration_proof_url: str
    logo_url: str | None = None
    school_code: str
    is_verified: bool
    admin_id: str | None = None
    created_at: datetime


class SchoolRegistrationResponse(CamelModel):
    school: SchoolOut


# =============================================================================
# Joining a school
# =============================================================================


class JoinSchoolRequest(CamelModel):
    school_code: str = Field(..., min_length=SCHOOL_CODE_LENGTH, max_length=SCHOOL_CODE_LENGTH)

    @field_validator("school_code")
    @classmethod
    def normalize_code(cls, value: str) -> str:
        return value.strip().upper()


class JoinSchoolResponse(CamelModel):
    school: SchoolSummary
    message: str


# =============================================================================
# Errors
# =============================================================================


class FieldError(CamelModel):
    field: str
    message: str
