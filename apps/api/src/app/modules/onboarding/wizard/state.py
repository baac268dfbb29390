"""
Wizard State

The state of one onboarding session: the current step, the chosen user
type, the accumulated form record and the current validation errors.

A state is created when the wizard starts and dropped after a successful
submission. Form records are frozen dataclasses; they are only changed
through the reducers below, which replace them with updated copies.
"""

from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Any

from pydantic.alias_generators import to_camel

from app.core.uploads import Upload

SCHOOL_ERROR_PREFIX = "schoolData."


class UserType(str, Enum):
    """Signup path chosen on the first screen of the wizard."""

    STUDENT = "student"
    SCHOOL = "school"


@dataclass(frozen=True)
class SchoolDetails:
    """School record filled in by a school admin."""

    name: str = ""
    registration_number: str = ""
    established_year: int | None = None
    principal_name: str = ""
    contact_number: str = ""
    address: str = ""
    website: str = ""
    education_level: str = "both"
    gender_type: str = "co_education"
    registration_proof: Upload | None = None
    logo: Upload | None = None


@dataclass(frozen=True)
class FormData:
    """Everything entered across all steps, for either user type."""

    # Identity
    full_name: str = ""
    username: str = ""
    email: str = ""
    password: str = ""
    confirm_password: str = ""
    date_of_birth: str = ""
    gender: str = ""
    city: str = ""
    phone_number: str = ""
    security_question: str = ""
    security_answer: str = ""

    # Education (students)
    education_type: str | None = None
    board_id: str = ""
    class_grade: str = ""
    school_type: str | None = None
    school_id: str | None = None
    school_name: str = ""
    subjects: tuple[str, ...] = ()

    # Profile (students)
    profile_picture: Upload | None = None
    bio: str = ""
    interests: tuple[str, ...] = ()

    # School admins
    school: SchoolDetails = field(default_factory=SchoolDetails)


@dataclass
class OnboardingState:
    """Mutable session state owned by one wizard."""

    current_step: int = 1
    user_type: UserType | None = None
    form: FormData = field(default_factory=FormData)
    errors: dict[str, str] = field(default_factory=dict)
    submitting: bool = False

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)


def error_key(field_name: str) -> str:
    """Wire name used as the error key of a form field."""
    return to_camel(field_name)


def school_error_key(field_name: str) -> str:
    return SCHOOL_ERROR_PREFIX + to_camel(field_name)


_FORM_FIELDS = frozenset(f.name for f in fields(FormData)) - {"school"}
_SCHOOL_FIELDS = frozenset(f.name for f in fields(SchoolDetails))
_SCHOOL_WIRE_FIELDS = frozenset(error_key(name) for name in _SCHOOL_FIELDS)


def school_field_errors(errors: dict[str, str]) -> dict[str, str]:
    """Key server errors of a school registration the way the school step does."""
    return {
        SCHOOL_ERROR_PREFIX + field if field in _SCHOOL_WIRE_FIELDS else field: message
        for field, message in errors.items()
    }

# Changing these makes other fields required or optional
_DEPENDENT_ERRORS = {"school_type": ("schoolId", "schoolName")}


def _check_names(changes: dict[str, Any], allowed: frozenset[str], record: str) -> None:
    unknown = sorted(set(changes) - allowed)
    if unknown:
        raise TypeError(f"Unknown {record} fields: {', '.join(unknown)}")


def update_form(state: OnboardingState, **changes: Any) -> None:
    """
    Apply changes to the top-level form record.

    Only the errors of the changed fields (and of fields whose requiredness
    depends on them) are cleared; errors of untouched fields stay visible.

    Raises:
        TypeError: If a change names a field the form doesn't have
    """
    _check_names(changes, _FORM_FIELDS, "form")

    for name in ("subjects", "interests"):
        if name in changes:
            changes[name] = tuple(changes[name])

    state.form = replace(state.form, **changes)

    for name in changes:
        state.errors.pop(error_key(name), None)
        for dependent in _DEPENDENT_ERRORS.get(name, ()):
            state.errors.pop(dependent, None)


def update_school(state: OnboardingState, **changes: Any) -> None:
    """
    Apply changes to the school sub-record.

    Raises:
        TypeError: If a change names a field the school record doesn't have
    """
    _check_names(changes, _SCHOOL_FIELDS, "school")

    state.form = replace(state.form, school=replace(state.form.school, **changes))

    for name in changes:
        state.errors.pop(school_error_key(name), None)


def toggle_subject(state: OnboardingState, subject_id: str) -> None:
    """Select a subject, or deselect it when already selected."""
    subjects = state.form.subjects
    if subject_id in subjects:
        update_form(state, subjects=[s for s in subjects if s != subject_id])
    else:
        update_form(state, subjects=[*subjects, subject_id])
