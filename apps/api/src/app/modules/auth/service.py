"""
Authentication Service

Username/password signup and login with bcrypt password hashes and JWT
access/refresh tokens.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import (
    create_access_token,
    create_refresh_token,
    hash_password,
    verify_password,
)
from app.modules.auth.schemas import AuthResponse, RegisterRequest, SignupRole, UserResponse
from app.modules.shared.errors import (
    AccountInactiveError,
    EmailTakenError,
    InvalidCredentialsError,
    UsernameTakenError,
    UserNotFoundError,
)
from app.modules.users import User, UserRepository, UserRole

logger = logging.getLogger(__name__)

_ROLE_FOR_SIGNUP = {
    SignupRole.STUDENT: UserRole.STUDENT,
    SignupRole.ADMIN: UserRole.SCHOOL_ADMIN,
}


def issue_tokens(user: User) -> AuthResponse:
    """Build the auth response (user + fresh token pair) for a user."""
    access_token = create_access_token(
        subject=str(user.id),
        additional_claims={
            "role": user.role.value,
            "username": user.username,
            "email": user.email,
        },
    )
    return AuthResponse(
        user=UserResponse.model_validate(user),
        access_token=access_token,
        refresh_token=create_refresh_token(subject=str(user.id)),
    )


async def register(db: AsyncSession, data: RegisterRequest) -> AuthResponse:
    """
    Create an account and sign it in.

    Raises:
        UsernameTakenError: If the username is in use (case-insensitive)
        EmailTakenError: If the email is already registered
    """
    if await UserRepository.username_exists(db, data.username):
        logger.info(f"Signup rejected, username taken: {data.username}")
        raise UsernameTakenError()

    if await UserRepository.email_exists(db, data.email):
        logger.info("Signup rejected, email already registered")
        raise EmailTakenError()

    user = await UserRepository.create(
        db,
        username=data.username,
        email=data.email.lower(),
        password_hash=hash_password(data.password),
        role=_ROLE_FOR_SIGNUP[data.role],
    )

    logger.info(f"User registered: {user.id} ({user.role.value})")
    return issue_tokens(user)


async def login(db: AsyncSession, email: str, password: str) -> AuthResponse:
    """
    Authenticate with email and password.

    Raises:
        InvalidCredentialsError: If the email is unknown or the password is wrong
        AccountInactiveError: If the account has been deactivated
    """
    user = await UserRepository.get_by_email(db, email)

    if not user or not verify_password(password, user.password_hash):
        logger.warning("Login failed: invalid credentials")
        raise InvalidCredentialsError()

    if not user.is_active:
        logger.warning(f"Login attempt for inactive account: {user.id}")
        raise AccountInactiveError()

    logger.info(f"User logged in: {user.id} (role: {user.role.value})")
    return issue_tokens(user)


async def get_user(db: AsyncSession, user_id: str) -> User:
    user = await UserRepository.get_by_id(db, user_id)
    if not user:
        raise UserNotFoundError()
    return user
