"""
Onboarding Wizard

Client-side library for the multi-step onboarding flow: session state,
per-step validation, step layout, payload assembly and the API client.
"""

from app.modules.onboarding.wizard.client import (
    OnboardingApiClient,
    OnboardingApiError,
    SessionExpiredError,
    TokenStore,
)
from app.modules.onboarding.wizard.latest import (
    LatestRequestGate,
    SchoolSearch,
    SupersededError,
    UsernameChecker,
)
from app.modules.onboarding.wizard.state import (
    FormData,
    OnboardingState,
    SchoolDetails,
    UserType,
)
from app.modules.onboarding.wizard.submission import SubmissionPayload, build_payload
from app.modules.onboarding.wizard.validation import validate_step
from app.modules.onboarding.wizard.wizard import OnboardingWizard, SubmissionOutcome

__all__ = [
    "FormData",
    "LatestRequestGate",
    "OnboardingApiClient",
    "OnboardingApiError",
    "OnboardingState",
    "OnboardingWizard",
    "SchoolDetails",
    "SchoolSearch",
    "SessionExpiredError",
    "SubmissionOutcome",
    "SubmissionPayload",
    "SupersededError",
    "TokenStore",
    "UserType",
    "UsernameChecker",
    "build_payload",
    "validate_step",
]
