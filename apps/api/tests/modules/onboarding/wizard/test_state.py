"""
Unit tests for the wizard state reducers and step layout.
"""

from dataclasses import replace

import pytest

from app.modules.onboarding.wizard.state import (
    OnboardingState,
    UserType,
    error_key,
    school_error_key,
    school_field_errors,
    toggle_subject,
    update_form,
    update_school,
)
from app.modules.onboarding.wizard.steps import get_step, total_steps, visible_fields


class TestUpdateForm:
    """Tests for update_form."""

    def test_replaces_record(self):
        state = OnboardingState()
        before = state.form

        update_form(state, full_name="Ali Khan")

        assert state.form.full_name == "Ali Khan"
        assert before.full_name == ""

    def test_clears_only_changed_field_error(self):
        state = OnboardingState(errors={"fullName": "required", "email": "required"})

        update_form(state, full_name="Ali Khan")

        assert state.errors == {"email": "required"}

    def test_school_type_clears_dependent_errors(self):
        state = OnboardingState(
            errors={"schoolType": "x", "schoolId": "x", "schoolName": "x", "boardId": "x"}
        )

        update_form(state, school_type="later")

        assert state.errors == {"boardId": "x"}

    def test_lists_become_tuples(self):
        state = OnboardingState()
        update_form(state, subjects=["a", "b"], interests=["Chess"])
        assert state.form.subjects == ("a", "b")
        assert state.form.interests == ("Chess",)

    def test_unknown_field(self):
        with pytest.raises(TypeError):
            update_form(OnboardingState(), nickname="ali")

    def test_school_is_not_a_form_field(self):
        with pytest.raises(TypeError):
            update_form(OnboardingState(), school=None)


class TestUpdateSchool:
    def test_updates_nested_record(self):
        state = OnboardingState(errors={"schoolData.name": "required", "fullName": "required"})

        update_school(state, name="Beaconhouse School")

        assert state.form.school.name == "Beaconhouse School"
        assert state.errors == {"fullName": "required"}

    def test_unknown_field(self):
        with pytest.raises(TypeError):
            update_school(OnboardingState(), motto="Learn")


class TestToggleSubject:
    def test_toggle_adds_then_removes(self):
        state = OnboardingState()

        toggle_subject(state, "physics")
        toggle_subject(state, "chemistry")
        assert state.form.subjects == ("physics", "chemistry")

        toggle_subject(state, "physics")
        assert state.form.subjects == ("chemistry",)

    def test_toggle_clears_subject_error(self):
        state = OnboardingState(errors={"subjects": "Please select at least one subject"})
        toggle_subject(state, "physics")
        assert state.errors == {}


class TestErrorKeys:
    def test_keys(self):
        assert error_key("phone_number") == "phoneNumber"
        assert school_error_key("registration_proof") == "schoolData.registrationProof"

    def test_school_field_errors(self):
        errors = school_field_errors(
            {"registrationNumber": "Taken", "logo": "Too big", "fullName": "Required"}
        )
        assert errors == {
            "schoolData.registrationNumber": "Taken",
            "schoolData.logo": "Too big",
            "fullName": "Required",
        }


class TestSteps:
    """Tests for the step layout."""

    def test_total_steps(self):
        assert total_steps(UserType.STUDENT) == 3
        assert total_steps(UserType.SCHOOL) == 2

    def test_titles(self):
        assert get_step(UserType.STUDENT, 3).title == "Complete Your Profile"
        assert get_step(UserType.SCHOOL, 2).title == "School Information"

    def test_unknown_step(self):
        with pytest.raises(ValueError):
            get_step(UserType.STUDENT, 4)

    def test_school_admin_skips_security_question(self):
        fields = get_step(UserType.SCHOOL, 1).fields
        assert "securityQuestion" not in fields
        assert "password" in fields

    def test_school_picker_visibility(self, student_form):
        registered = visible_fields(
            UserType.STUDENT, 2, replace(student_form, school_type="registered")
        )
        not_listed = visible_fields(
            UserType.STUDENT, 2, replace(student_form, school_type="not_listed")
        )
        later = visible_fields(UserType.STUDENT, 2, student_form)

        assert "schoolId" in registered and "schoolName" not in registered
        assert "schoolName" in not_listed and "schoolId" not in not_listed
        assert "schoolId" not in later and "schoolName" not in later
