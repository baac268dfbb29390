"""
Wizard Steps

Lookup of what each step shows: its title and the form fields rendered for
a ``(user type, step)`` pair. Field names are the wire (camelCase) names, the
same keys validation errors use.

Students go through three steps (identity, education, profile); school
admins through two (admin identity, school details and documents).
"""

from dataclasses import dataclass

from app.modules.onboarding.wizard.state import FormData, UserType


@dataclass(frozen=True)
class StepDefinition:
    user_type: UserType
    number: int
    title: str
    fields: tuple[str, ...]


_IDENTITY_FIELDS = (
    "fullName",
    "username",
    "email",
    "phoneNumber",
    "password",
    "confirmPassword",
    "dateOfBirth",
    "gender",
    "city",
    "securityQuestion",
    "securityAnswer",
)

STEPS: dict[tuple[UserType, int], StepDefinition] = {
    (UserType.STUDENT, 1): StepDefinition(
        UserType.STUDENT, 1, "Basic Information", _IDENTITY_FIELDS
    ),
    (UserType.STUDENT, 2): StepDefinition(
        UserType.STUDENT,
        2,
        "Education Details",
        (
            "educationType",
            "boardId",
            "classGrade",
            "schoolType",
            "schoolId",
            "schoolName",
        ),
    ),
    (UserType.STUDENT, 3): StepDefinition(
        UserType.STUDENT,
        3,
        "Complete Your Profile",
        ("profilePicture", "bio", "subjects", "interests"),
    ),
    (UserType.SCHOOL, 1): StepDefinition(
        UserType.SCHOOL,
        1,
        "Admin Information",
        tuple(f for f in _IDENTITY_FIELDS if not f.startswith("security")),
    ),
    (UserType.SCHOOL, 2): StepDefinition(
        UserType.SCHOOL,
        2,
        "School Information",
        (
            "schoolData.name",
            "schoolData.registrationNumber",
            "schoolData.establishedYear",
            "schoolData.educationLevel",
            "schoolData.genderType",
            "schoolData.principalName",
            "schoolData.contactNumber",
            "schoolData.address",
            "schoolData.website",
            "schoolData.logo",
            "schoolData.registrationProof",
        ),
    ),
}

TOTAL_STEPS = {UserType.STUDENT: 3, UserType.SCHOOL: 2}


def total_steps(user_type: UserType) -> int:
    return TOTAL_STEPS[user_type]


def get_step(user_type: UserType, step: int) -> StepDefinition:
    """
    Return the definition of a step.

    Raises:
        ValueError: If the user type has no such step
    """
    try:
        return STEPS[(user_type, step)]
    except KeyError:
        raise ValueError(f"{user_type.value} onboarding has no step {step}") from None


def visible_fields(user_type: UserType, step: int, form: FormData) -> tuple[str, ...]:
    """
    Fields to render for the step given what has been entered so far.

    The school picker only appears for a registered school and the free-text
    school name only for a school that isn't listed.
    """
    hidden = set()
    if form.school_type != "registered":
        hidden.add("schoolId")
    if form.school_type != "not_listed":
        hidden.add("schoolName")
    return tuple(f for f in get_step(user_type, step).fields if f not in hidden)
