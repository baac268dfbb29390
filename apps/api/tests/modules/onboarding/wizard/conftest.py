"""
Fixtures for onboarding wizard tests.
"""

from dataclasses import replace

import pytest

from app.core.uploads import Upload, UploadKind
from app.modules.onboarding.wizard.state import FormData, SchoolDetails
from tests.samples import PDF_BYTES


@pytest.fixture
def identity_form():
    """A form with a complete, valid first step."""
    return FormData(
        full_name="Ali Khan",
        username="ali_khan",
        email="ali@example.com",
        password="secret123",
        confirm_password="secret123",
        date_of_birth="2008-05-01",
        gender="male",
        city="Islamabad",
        phone_number="03001234567",
    )


@pytest.fixture
def student_form(identity_form):
    """A student form valid on every step."""
    return replace(
        identity_form,
        education_type="matric",
        board_id="fbise",
        class_grade="grade-9",
        school_type="later",
        subjects=("fbise:matric:english", "fbise:matric:physics"),
        interests=("Robotics",),
    )


@pytest.fixture
def proof():
    return Upload.create(UploadKind.DOCUMENT, "proof.pdf", PDF_BYTES, "application/pdf")


@pytest.fixture
def school_form(identity_form, proof):
    """A school admin form valid on every step."""
    return replace(
        identity_form,
        school=SchoolDetails(
            name="Beaconhouse School",
            registration_number="REG-12345",
            established_year=1975,
            principal_name="Sara Ahmed",
            contact_number="+92421234567",
            address="12 Main Boulevard",
            registration_proof=proof,
        ),
    )
