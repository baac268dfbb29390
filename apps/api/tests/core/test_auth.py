"""
Unit tests for the bearer token dependencies.
"""

import pytest
from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials

from app.core.auth import get_current_user, get_onboarding_user, get_optional_user
from app.core.security import create_access_token, create_refresh_token


def _bearer(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


class TestGetCurrentUser:
    """Tests for get_current_user."""

    @pytest.mark.asyncio
    async def test_valid_token(self):
        token = create_access_token(
            "user-1", additional_claims={"role": "student", "username": "ali"}
        )
        user = await get_current_user(_bearer(token))

        assert user.id == "user-1"
        assert user.role == "student"
        assert user.username == "ali"

    @pytest.mark.asyncio
    async def test_missing_token(self):
        with pytest.raises(HTTPException) as exc_info:
            await get_current_user(None)
        assert exc_info.value.status_code == 401
        assert exc_info.value.detail["error"] == "MISSING_TOKEN"
        assert exc_info.value.headers == {"WWW-Authenticate": "Bearer"}

    @pytest.mark.asyncio
    async def test_invalid_token(self):
        with pytest.raises(HTTPException) as exc_info:
            await get_current_user(_bearer("garbage"))
        assert exc_info.value.status_code == 401
        assert exc_info.value.detail["error"] == "INVALID_TOKEN"

    @pytest.mark.asyncio
    async def test_refresh_token_not_accepted(self):
        with pytest.raises(HTTPException) as exc_info:
            await get_current_user(_bearer(create_refresh_token("user-1")))
        assert exc_info.value.detail["error"] == "INVALID_TOKEN_TYPE"

    @pytest.mark.asyncio
    async def test_token_without_role(self):
        with pytest.raises(HTTPException) as exc_info:
            await get_current_user(_bearer(create_access_token("user-1")))
        assert exc_info.value.detail["error"] == "INVALID_TOKEN_CLAIMS"


class TestRoles:
    """Tests for role-restricted dependencies."""

    @pytest.mark.asyncio
    async def test_onboarding_user_accepts_school_admin(self):
        token = create_access_token("user-1", additional_claims={"role": "school_admin"})
        user = await get_current_user(_bearer(token))
        assert await get_onboarding_user(user) is user

    @pytest.mark.asyncio
    async def test_unknown_role_forbidden(self):
        token = create_access_token("user-1", additional_claims={"role": "parent"})
        user = await get_current_user(_bearer(token))
        with pytest.raises(HTTPException) as exc_info:
            await get_onboarding_user(user)
        assert exc_info.value.status_code == 403


class TestOptionalUser:
    @pytest.mark.asyncio
    async def test_returns_none_without_credentials(self):
        assert await get_optional_user(None) is None

    @pytest.mark.asyncio
    async def test_returns_none_for_bad_token(self):
        assert await get_optional_user(_bearer("garbage")) is None
