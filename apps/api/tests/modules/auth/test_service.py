"""
Unit tests for the authentication service.
"""

from unittest.mock import AsyncMock, patch

import pytest

from app.core.security import decode_token
from app.modules.auth.schemas import RegisterRequest, SignupRole
from app.modules.auth.service import get_user, login, register
from app.modules.shared.errors import (
    AccountInactiveError,
    EmailTakenError,
    InvalidCredentialsError,
    UsernameTakenError,
    UserNotFoundError,
)
from app.modules.users import UserRole


class TestRegister:
    """Tests for register."""

    @pytest.mark.asyncio
    async def test_register_student(self, mock_db, sample_user):
        """A new student account gets a token pair carrying its role."""
        with patch("app.modules.auth.service.UserRepository") as mock_repo:
            mock_repo.username_exists = AsyncMock(return_value=False)
            mock_repo.email_exists = AsyncMock(return_value=False)
            mock_repo.create = AsyncMock(return_value=sample_user)

            data = RegisterRequest(username="ali_khan", email="Ali@Example.com", password="secret123")
            result = await register(mock_db, data)

        assert result.user.username == "ali_khan"
        payload = decode_token(result.access_token)
        assert payload["sub"] == sample_user.id
        assert payload["role"] == "student"

        kwargs = mock_repo.create.call_args.kwargs
        assert kwargs["email"] == "ali@example.com"
        assert kwargs["role"] == UserRole.STUDENT
        assert kwargs["password_hash"] != "secret123"

    @pytest.mark.asyncio
    async def test_admin_signup_creates_school_admin(self, mock_db, sample_user):
        sample_user.role = UserRole.SCHOOL_ADMIN
        with patch("app.modules.auth.service.UserRepository") as mock_repo:
            mock_repo.username_exists = AsyncMock(return_value=False)
            mock_repo.email_exists = AsyncMock(return_value=False)
            mock_repo.create = AsyncMock(return_value=sample_user)

            data = RegisterRequest(
                username="principal", email="p@example.com", password="secret123", role="admin"
            )
            assert data.role == SignupRole.ADMIN
            await register(mock_db, data)

        assert mock_repo.create.call_args.kwargs["role"] == UserRole.SCHOOL_ADMIN

    @pytest.mark.asyncio
    async def test_username_taken(self, mock_db):
        with patch("app.modules.auth.service.UserRepository") as mock_repo:
            mock_repo.username_exists = AsyncMock(return_value=True)
            mock_repo.create = AsyncMock()

            data = RegisterRequest(username="ali_khan", email="a@example.com", password="secret123")
            with pytest.raises(UsernameTakenError) as exc_info:
                await register(mock_db, data)

        assert exc_info.value.message == "Username already exists"
        mock_repo.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_email_taken(self, mock_db):
        with patch("app.modules.auth.service.UserRepository") as mock_repo:
            mock_repo.username_exists = AsyncMock(return_value=False)
            mock_repo.email_exists = AsyncMock(return_value=True)

            data = RegisterRequest(username="new_user", email="a@example.com", password="secret123")
            with pytest.raises(EmailTakenError) as exc_info:
                await register(mock_db, data)

        assert exc_info.value.message == "User with this email already exists"


class TestLogin:
    """Tests for login."""

    @pytest.mark.asyncio
    async def test_login_success(self, mock_db, sample_user):
        with patch("app.modules.auth.service.UserRepository") as mock_repo:
            mock_repo.get_by_email = AsyncMock(return_value=sample_user)
            result = await login(mock_db, "ali@example.com", "secret123")

        assert result.token_type == "bearer"
        assert decode_token(result.refresh_token)["type"] == "refresh"

    @pytest.mark.asyncio
    async def test_wrong_password(self, mock_db, sample_user):
        with patch("app.modules.auth.service.UserRepository") as mock_repo:
            mock_repo.get_by_email = AsyncMock(return_value=sample_user)
            with pytest.raises(InvalidCredentialsError):
                await login(mock_db, "ali@example.com", "wrong-password")

    @pytest.mark.asyncio
    async def test_unknown_email(self, mock_db):
        with patch("app.modules.auth.service.UserRepository") as mock_repo:
            mock_repo.get_by_email = AsyncMock(return_value=None)
            with pytest.raises(InvalidCredentialsError):
                await login(mock_db, "nobody@example.com", "secret123")

    @pytest.mark.asyncio
    async def test_inactive_account(self, mock_db, sample_user):
        sample_user.is_active = False
        with patch("app.modules.auth.service.UserRepository") as mock_repo:
            mock_repo.get_by_email = AsyncMock(return_value=sample_user)
            with pytest.raises(AccountInactiveError) as exc_info:
                await login(mock_db, "ali@example.com", "secret123")

        assert exc_info.value.status_code == 403


class TestGetUser:
    @pytest.mark.asyncio
    async def test_missing_user(self, mock_db):
        with patch("app.modules.auth.service.UserRepository") as mock_repo:
            mock_repo.get_by_id = AsyncMock(return_value=None)
            with pytest.raises(UserNotFoundError):
                await get_user(mock_db, "user-1")
