"""
Onboarding Wizard

Drives one onboarding session: user type selection, field updates, step
navigation gated by validation, and the final submission.

All mutation happens on the caller's task; the only awaits are the network
calls, and their results are applied to the same state afterwards.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from app.core.uploads import Upload, UploadKind, UploadRejectedError
from app.modules.onboarding.wizard import state as reducers
from app.modules.onboarding.wizard.client import (
    OnboardingApiClient,
    OnboardingApiError,
    SessionExpiredError,
)
from app.modules.onboarding.wizard.state import OnboardingState, UserType
from app.modules.onboarding.wizard.steps import (
    StepDefinition,
    get_step,
    total_steps,
    visible_fields,
)
from app.modules.onboarding.wizard.submission import build_payload
from app.modules.onboarding.wizard.validation import Errors, validate_step

logger = logging.getLogger(__name__)

STUDENT_DASHBOARD = "/dashboard"
SCHOOL_DASHBOARD = "/school/dashboard"
LOGIN_PAGE = "/login"

_DESTINATIONS = {UserType.STUDENT: STUDENT_DASHBOARD, UserType.SCHOOL: SCHOOL_DASHBOARD}


@dataclass(frozen=True)
class SubmissionOutcome:
    """
    Result of a submission attempt.

    ``redirect_to`` is set when the user leaves the wizard (dashboard on
    success, login when the session expired); ``notification`` carries the
    message to show otherwise.
    """

    success: bool
    redirect_to: str | None = None
    notification: str | None = None
    errors: dict[str, str] = field(default_factory=dict)
    response: dict[str, Any] | None = None


class OnboardingWizard:
    """
    One onboarding session.

    Args:
        api: Client used for the final submission
        state: Existing state to resume from (a fresh one by default)
    """

    def __init__(self, api: OnboardingApiClient, state: OnboardingState | None = None):
        self.api = api
        self.state = state or OnboardingState()

    # =========================================================================
    # Introspection
    # =========================================================================

    @property
    def user_type(self) -> UserType:
        if self.state.user_type is None:
            raise RuntimeError("Select a user type before using the wizard")
        return self.state.user_type

    @property
    def current_step(self) -> int:
        return self.state.current_step

    @property
    def errors(self) -> Errors:
        return self.state.errors

    @property
    def total_steps(self) -> int:
        return total_steps(self.user_type)

    @property
    def is_last_step(self) -> bool:
        return self.state.current_step == self.total_steps

    @property
    def step(self) -> StepDefinition:
        return get_step(self.user_type, self.state.current_step)

    def fields(self) -> tuple[str, ...]:
        """Fields to render on the current step."""
        return visible_fields(self.user_type, self.state.current_step, self.state.form)

    # =========================================================================
    # Input
    # =========================================================================

    def select_user_type(self, user_type: UserType | str) -> None:
        """Pick the signup path; restarts at step 1 with the entered data kept."""
        self.state.user_type = UserType(user_type)
        self.state.current_step = 1
        self.state.errors.clear()

    def update(self, **changes: Any) -> None:
        reducers.update_form(self.state, **changes)

    def update_school(self, **changes: Any) -> None:
        reducers.update_school(self.state, **changes)

    def toggle_subject(self, subject_id: str) -> None:
        reducers.toggle_subject(self.state, subject_id)

    def _attach(
        self,
        kind: UploadKind,
        error_key: str,
        filename: str,
        content: bytes,
        declared_mime: str | None,
    ) -> Upload | None:
        try:
            upload = Upload.create(kind, filename, content, declared_mime)
        except UploadRejectedError as e:
            self.state.errors[error_key] = e.message
            return None
        self.state.errors.pop(error_key, None)
        return upload

    def attach_profile_picture(
        self, filename: str, content: bytes, declared_mime: str | None = None
    ) -> bool:
        upload = self._attach(UploadKind.IMAGE, "profilePicture", filename, content, declared_mime)
        if upload is None:
            return False
        self.update(profile_picture=upload)
        return True

    def attach_registration_proof(
        self, filename: str, content: bytes, declared_mime: str | None = None
    ) -> bool:
        key = reducers.school_error_key("registration_proof")
        upload = self._attach(UploadKind.DOCUMENT, key, filename, content, declared_mime)
        if upload is None:
            return False
        self.update_school(registration_proof=upload)
        return True

    def attach_logo(self, filename: str, content: bytes, declared_mime: str | None = None) -> bool:
        key = reducers.school_error_key("logo")
        upload = self._attach(UploadKind.IMAGE, key, filename, content, declared_mime)
        if upload is None:
            return False
        self.update_school(logo=upload)
        return True

    # =========================================================================
    # Navigation
    # =========================================================================

    def validate_current_step(self) -> bool:
        """Validate the current step, replacing the error map with the result."""
        self.state.errors = validate_step(self.user_type, self.state.current_step, self.state.form)
        return not self.state.errors

    def advance(self) -> bool:
        """
        Move to the next step if the current one is valid.

        On the last step a valid form stays put: the last step is left only
        through ``submit`` (or ``advance_or_submit``, which does both).

        Returns:
            True when the step validated, False when errors were recorded
        """
        if not self.validate_current_step():
            logger.debug(f"Step {self.state.current_step} invalid: {sorted(self.state.errors)}")
            return False

        self.state.current_step = min(self.state.current_step + 1, self.total_steps)
        return True

    def retreat(self) -> None:
        """Go back one step without validating; step 1 is the floor."""
        self.state.current_step = max(self.state.current_step - 1, 1)

    # =========================================================================
    # Submission
    # =========================================================================

    def reset(self) -> None:
        self.state = OnboardingState()

    async def submit(self) -> SubmissionOutcome:
        """
        Validate the last step and send the onboarding payload.

        Exactly one request is made per accepted call. On success the state
        is discarded; on failure it is left as it was so the user can retry.
        """
        if not self.is_last_step:
            raise RuntimeError("Submission is only possible from the last step")

        if self.state.submitting:
            return SubmissionOutcome(success=False, notification="Submission already in progress")

        if not self.validate_current_step():
            return SubmissionOutcome(success=False, errors=dict(self.state.errors))

        user_type = self.user_type
        payload = build_payload(user_type, self.state.form)

        self.state.submitting = True
        try:
            response = await self.api.submit(payload)
        except SessionExpiredError as e:
            logger.info("Onboarding submission rejected: session expired")
            return SubmissionOutcome(success=False, redirect_to=LOGIN_PAGE, notification=e.message)
        except OnboardingApiError as e:
            logger.warning(f"Onboarding submission failed: {e.message}")
            errors = e.field_errors
            if user_type is UserType.SCHOOL:
                errors = reducers.school_field_errors(errors)
            return SubmissionOutcome(success=False, notification=e.message, errors=errors)
        finally:
            self.state.submitting = False

        logger.info(f"Onboarding completed for {user_type.value}")
        self.reset()
        return SubmissionOutcome(
            success=True, redirect_to=_DESTINATIONS[user_type], response=response
        )

    async def advance_or_submit(self) -> SubmissionOutcome | None:
        """
        Handle the "next" action: advance, or submit from the last step.

        Returns:
            The submission outcome on the last step, None otherwise
            (``errors`` tells whether the step moved)
        """
        if self.is_last_step:
            return await self.submit()
        self.advance()
        return None
