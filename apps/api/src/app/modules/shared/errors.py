"""
Service Errors

Typed exceptions raised by the auth and onboarding services. Routers turn
them into ``HTTPException(status_code, detail={"error", "message"})``.
"""


class OnboardingServiceError(Exception):
    """Base exception for auth and onboarding service errors."""

    def __init__(self, message: str, error_code: str, status_code: int = 400):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        super().__init__(message)


class UsernameTakenError(OnboardingServiceError):
    """Raised when a username is already in use."""

    def __init__(self):
        super().__init__(
            message="Username already exists",
            error_code="USERNAME_TAKEN",
            status_code=400,
        )


class EmailTakenError(OnboardingServiceError):
    """Raised when an email address is already registered."""

    def __init__(self):
        super().__init__(
            message="User with this email already exists",
            error_code="EMAIL_TAKEN",
            status_code=400,
        )


class InvalidCredentialsError(OnboardingServiceError):
    def __init__(self):
        super().__init__(
            message="Invalid email or password",
            error_code="INVALID_CREDENTIALS",
            status_code=401,
        )


class AccountInactiveError(OnboardingServiceError):
    def __init__(self):
        super().__init__(
            message="Your account has been deactivated",
            error_code="ACCOUNT_INACTIVE",
            status_code=403,
        )


class UserNotFoundError(OnboardingServiceError):
    def __init__(self):
        super().__init__(
            message="User not found",
            error_code="USER_NOT_FOUND",
            status_code=404,
        )


class ProfileAlreadyExistsError(OnboardingServiceError):
    """Raised when a student completes onboarding a second time."""

    def __init__(self):
        super().__init__(
            message="Student profile already exists",
            error_code="PROFILE_EXISTS",
            status_code=409,
        )


class BoardNotFoundError(OnboardingServiceError):
    def __init__(self, board_id: str):
        super().__init__(
            message=f"Education board '{board_id}' not found",
            error_code="BOARD_NOT_FOUND",
            status_code=404,
        )


class InvalidSubjectsError(OnboardingServiceError):
    """Raised when selected subjects don't belong to the chosen board and track."""

    def __init__(self, subject_ids: list[str]):
        self.subject_ids = subject_ids
        super().__init__(
            message=f"Invalid subjects for the selected board: {', '.join(subject_ids)}",
            error_code="INVALID_SUBJECTS",
            status_code=400,
        )


class SchoolNotFoundError(OnboardingServiceError):
    def __init__(self, message: str = "School not found"):
        super().__init__(
            message=message,
            error_code="SCHOOL_NOT_FOUND",
            status_code=404,
        )


class InvalidSchoolCodeError(SchoolNotFoundError):
    """Raised when no school carries the given join code."""

    def __init__(self):
        super().__init__(message="Invalid school code")
        self.error_code = "INVALID_SCHOOL_CODE"


class DuplicateSchoolError(OnboardingServiceError):
    """Raised when a registration number is already registered."""

    def __init__(self, registration_number: str):
        super().__init__(
            message=f"A school with registration number '{registration_number}' is already registered",
            error_code="DUPLICATE_SCHOOL",
            status_code=409,
        )
