"""
Submission Assembly

Turns the accumulated form record into the single request sent when the
last step is completed:

- students: ``POST /onboarding/student/profile``, JSON when no file is
  attached, multipart (``profileImage``) otherwise
- school admins: ``POST /onboarding/school/register``, always multipart with
  ``registrationProof`` (and ``logo`` when chosen)

Passwords are never part of a payload; the account already exists.
"""

from dataclasses import dataclass, field
from typing import Any

from app.modules.onboarding.wizard.state import FormData, UserType

STUDENT_PROFILE_PATH = "/onboarding/student/profile"
SCHOOL_REGISTER_PATH = "/onboarding/school/register"

FileField = tuple[str, bytes, str]


@dataclass(frozen=True)
class SubmissionPayload:
    """One outbound request: fields plus files (multipart) or a JSON body."""

    path: str
    fields: dict[str, Any]
    files: dict[str, FileField] = field(default_factory=dict)
    multipart: bool = False

    def request_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for ``httpx.AsyncClient.post``."""
        if self.multipart:
            return {"data": self.fields, "files": self.files}
        return {"json": self.fields}


def _drop_empty(values: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in values.items() if value not in (None, "", [], ())}


def build_student_payload(form: FormData) -> SubmissionPayload:
    fields = {
        "fullName": form.full_name.strip(),
        "username": form.username.strip(),
        "email": form.email.strip(),
        "dateOfBirth": form.date_of_birth,
        "gender": form.gender,
        "city": form.city,
        "phoneNumber": form.phone_number,
        "educationType": form.education_type,
        "boardId": form.board_id,
        "classGrade": form.class_grade,
        "schoolType": form.school_type,
        "schoolId": form.school_id if form.school_type == "registered" else None,
        "schoolName": form.school_name.strip() if form.school_type == "not_listed" else None,
        "subjectIds": list(form.subjects),
        "bio": form.bio.strip(),
        "interests": list(form.interests),
    }
    if form.security_question and form.security_answer:
        fields["securityQuestion"] = form.security_question
        fields["securityAnswer"] = form.security_answer

    if form.profile_picture is None:
        return SubmissionPayload(STUDENT_PROFILE_PATH, _drop_empty(fields))

    return SubmissionPayload(
        STUDENT_PROFILE_PATH,
        _drop_empty(fields),
        files={"profileImage": form.profile_picture.as_multipart()},
        multipart=True,
    )


def build_school_payload(form: FormData) -> SubmissionPayload:
    """
    Build the school registration request.

    Raises:
        ValueError: If no registration proof is attached
    """
    school = form.school
    if school.registration_proof is None:
        raise ValueError("Registration proof is required")

    fields = {
        "name": school.name,
        "registrationNumber": school.registration_number,
        "establishedYear": (
            str(school.established_year) if school.established_year is not None else None
        ),
        "principalName": school.principal_name,
        "email": form.email.strip(),
        "contactNumber": school.contact_number,
        "address": school.address,
        "city": form.city,
        "website": school.website,
        "educationLevel": school.education_level,
        "genderType": school.gender_type,
        # Admin identity
        "fullName": form.full_name.strip(),
        "username": form.username.strip(),
        "phoneNumber": form.phone_number,
        "gender": form.gender,
        "dateOfBirth": form.date_of_birth,
    }

    files = {"registrationProof": school.registration_proof.as_multipart()}
    if school.logo is not None:
        files["logo"] = school.logo.as_multipart()

    return SubmissionPayload(SCHOOL_REGISTER_PATH, _drop_empty(fields), files, multipart=True)


def build_payload(user_type: UserType, form: FormData) -> SubmissionPayload:
    if user_type == UserType.STUDENT:
        return build_student_payload(form)
    return build_school_payload(form)
