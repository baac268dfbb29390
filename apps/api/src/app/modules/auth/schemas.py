"""Authentication schemas."""

from datetime import datetime
from enum import Enum

from pydantic import ConfigDict, EmailStr, Field

from app.modules.reference.schemas import CamelModel
from app.modules.users.models import UserRole


class SignupRole(str, Enum):
    """Role picked on the signup screen. ``admin`` signs up a school admin."""

    STUDENT = "student"
    ADMIN = "admin"


class RegisterRequest(CamelModel):
    """Register request schema."""

    username: str = Field(..., min_length=3, max_length=50, pattern=r"^[A-Za-z0-9_.]+$")
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    role: SignupRole = SignupRole.STUDENT


class LoginRequest(CamelModel):
    """Login request schema."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class UserResponse(CamelModel):
    """Public view of a user account."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    email: str
    first_name: str | None = None
    last_name: str | None = None
    role: UserRole
    school_id: str | None = None
    profile_image_url: str | None = None
    is_active: bool
    is_onboarding_complete: bool
    created_at: datetime


class AuthResponse(CamelModel):
    """Register / login response schema."""

    user: UserResponse
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class MeResponse(CamelModel):
    user: UserResponse
