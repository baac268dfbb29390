"""
Wizard Step Validation

One pure function per ``(user type, step)``. Each takes a form snapshot and
returns a map of field key -> message; an empty map means the step is valid.
Validators never raise and never look at fields of other steps.
"""

import re
from collections.abc import Callable

from app.modules.onboarding.wizard.state import FormData, UserType

Errors = dict[str, str]
Validator = Callable[[FormData], Errors]

EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")
MIN_PASSWORD_LENGTH = 8


def validate_identity(form: FormData) -> Errors:
    """Basic information, shared by students and school admins."""
    errors: Errors = {}

    if not form.full_name.strip():
        errors["fullName"] = "Full name is required"
    if not form.username.strip():
        errors["username"] = "Username is required"

    if not form.email:
        errors["email"] = "Email is required"
    elif not EMAIL_PATTERN.search(form.email):
        errors["email"] = "Invalid email format"

    if not form.password:
        errors["password"] = "Password is required"
    elif len(form.password) < MIN_PASSWORD_LENGTH:
        errors["password"] = f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
    if form.password != form.confirm_password:
        errors["confirmPassword"] = "Passwords do not match"

    if not form.date_of_birth:
        errors["dateOfBirth"] = "Date of birth is required"
    if not form.gender:
        errors["gender"] = "Gender is required"
    if not form.city:
        errors["city"] = "City is required"
    if not form.phone_number:
        errors["phoneNumber"] = "Phone number is required"

    return errors


def validate_student_education(form: FormData) -> Errors:
    errors: Errors = {}

    if not form.education_type:
        errors["educationType"] = "Please select education type"
    if not form.board_id:
        errors["boardId"] = "Please select a board"
    if not form.class_grade:
        errors["classGrade"] = "Please select your class/grade"

    if form.school_type is None:
        errors["schoolType"] = "Please select an option"
    elif form.school_type == "registered" and not form.school_id:
        errors["schoolId"] = "Please select your school"
    elif form.school_type == "not_listed" and not form.school_name.strip():
        errors["schoolName"] = "Please enter your school name"

    return errors


def validate_student_profile(form: FormData) -> Errors:
    if not form.subjects:
        return {"subjects": "Please select at least one subject"}
    return {}


def validate_school_details(form: FormData) -> Errors:
    school = form.school
    errors: Errors = {}

    if not school.name:
        errors["schoolData.name"] = "School name is required"
    if not school.registration_number:
        errors["schoolData.registrationNumber"] = "Registration number is required"
    if not school.principal_name:
        errors["schoolData.principalName"] = "Principal name is required"
    if not school.contact_number:
        errors["schoolData.contactNumber"] = "Contact number is required"
    if not school.address:
        errors["schoolData.address"] = "Address is required"
    if school.registration_proof is None:
        errors["schoolData.registrationProof"] = "Registration proof is required"

    return errors


VALIDATORS: dict[tuple[UserType, int], Validator] = {
    (UserType.STUDENT, 1): validate_identity,
    (UserType.STUDENT, 2): validate_student_education,
    (UserType.STUDENT, 3): validate_student_profile,
    (UserType.SCHOOL, 1): validate_identity,
    (UserType.SCHOOL, 2): validate_school_details,
}


def validate_step(user_type: UserType, step: int, form: FormData) -> Errors:
    """
    Validate one step of the wizard.

    Raises:
        ValueError: If the user type has no such step
    """
    validator = VALIDATORS.get((user_type, step))
    if validator is None:
        raise ValueError(f"{user_type.value} onboarding has no step {step}")
    return validator(form)
