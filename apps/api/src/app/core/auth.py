"""
Authentication and Authorization Module

Provides authentication dependencies for FastAPI endpoints.
Bearer tokens are validated with the helpers in security.py; role checks
are layered on top with ``require_roles``.

A missing, malformed or expired token always yields 401 with a
``WWW-Authenticate: Bearer`` header. Clients treat that as the end of the
session: they drop the stored token and send the user back to login.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.security import ACCESS_TOKEN_TYPE, decode_token

logger = logging.getLogger(__name__)

# auto_error=False so a missing header produces our 401 body instead of a 403
security = HTTPBearer(
    auto_error=False,
    description="JWT Bearer token for authentication",
)


@dataclass
class CurrentUser:
    """
    Represents an authenticated user.

    Populated from JWT claims after token validation.

    Attributes:
        id: User's unique identifier
        role: 'student' or 'school_admin'
        username: User's handle (optional)
        email: User's email address (optional)
    """

    id: str
    role: str
    username: str | None = None
    email: str | None = None

    def __str__(self) -> str:
        return f"CurrentUser(id={self.id}, role={self.role})"


def _unauthorized(error: str, message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={"error": error, "message": message},
        headers={"WWW-Authenticate": "Bearer"},
    )


def _validate_jwt_token(token: str) -> CurrentUser:
    """
    Validate a JWT and extract user claims.

    Args:
        token: JWT string from the Authorization header

    Returns:
        CurrentUser built from the token claims

    Raises:
        HTTPException 401: If the token is invalid, expired or not an access token
    """
    payload = decode_token(token)

    if payload is None:
        logger.warning("Invalid or expired JWT token")
        raise _unauthorized("INVALID_TOKEN", "Invalid or expired token")

    token_type = payload.get("type", ACCESS_TOKEN_TYPE)
    if token_type != ACCESS_TOKEN_TYPE:
        logger.warning(f"Invalid token type: {token_type}")
        raise _unauthorized("INVALID_TOKEN_TYPE", "This endpoint requires an access token.")

    user_id = payload.get("sub")
    role = payload.get("role")
    if not user_id or not role:
        logger.warning("Token is missing 'sub' or 'role' claim")
        raise _unauthorized("INVALID_TOKEN_CLAIMS", "Token contains invalid or missing claims.")

    return CurrentUser(
        id=str(user_id),
        role=str(role),
        username=payload.get("username"),
        email=payload.get("email"),
    )


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> CurrentUser:
    """
    FastAPI dependency that validates the bearer token and returns the user.

    Usage:
        @router.get("/me")
        async def me(user: CurrentUser = Depends(get_current_user)):
            ...

    Raises:
        HTTPException 401: If the token is missing, invalid, or expired
    """
    if credentials is None or not credentials.credentials:
        raise _unauthorized("MISSING_TOKEN", "No token provided")

    user = _validate_jwt_token(credentials.credentials)
    logger.debug(f"Authenticated user: {user.id} ({user.role})")
    return user


def require_roles(*roles: str) -> Callable[..., Awaitable[CurrentUser]]:
    """
    Build a dependency that only admits users holding one of ``roles``.

    Raises:
        HTTPException 403: If the authenticated user has another role
    """

    async def dependency(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if roles and user.role not in roles:
            logger.warning(f"Access denied: user {user.id} has role '{user.role}'")
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail={
                    "error": "FORBIDDEN",
                    "message": "Not authorized to access this route",
                },
            )
        return user

    return dependency


# Any onboarding participant (students and school admins)
get_onboarding_user = require_roles("student", "school_admin")


async def get_optional_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> CurrentUser | None:
    """
    Optional authentication dependency.

    Returns the user if a valid token is provided, or None otherwise.
    """
    if not credentials:
        return None

    try:
        return await get_current_user(credentials)
    except HTTPException:
        return None


__all__ = [
    "CurrentUser",
    "get_current_user",
    "get_onboarding_user",
    "get_optional_user",
    "require_roles",
]
