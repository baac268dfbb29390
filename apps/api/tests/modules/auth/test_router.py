"""
Tests for the authentication endpoints.
"""

from unittest.mock import AsyncMock, patch

import httpx
import pytest
import pytest_asyncio

from app.core.database import get_db
from app.core.security import create_access_token
from app.main import app


@pytest_asyncio.fixture
async def client(mock_db):
    async def override_get_db():
        yield mock_db

    app.dependency_overrides[get_db] = override_get_db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


class TestAuthRouter:
    """Tests for /api/auth endpoints."""

    @pytest.mark.asyncio
    async def test_register_returns_camel_case_tokens(self, client, sample_user):
        with patch("app.modules.auth.service.UserRepository") as mock_repo:
            mock_repo.username_exists = AsyncMock(return_value=False)
            mock_repo.email_exists = AsyncMock(return_value=False)
            mock_repo.create = AsyncMock(return_value=sample_user)

            response = await client.post(
                "/api/auth/register",
                json={"username": "ali_khan", "email": "ali@example.com", "password": "secret123"},
            )

        assert response.status_code == 201
        body = response.json()
        assert body["accessToken"]
        assert body["tokenType"] == "bearer"
        assert body["user"]["isOnboardingComplete"] is False

    @pytest.mark.asyncio
    async def test_register_existing_username(self, client):
        with patch("app.modules.auth.service.UserRepository") as mock_repo:
            mock_repo.username_exists = AsyncMock(return_value=True)

            response = await client.post(
                "/api/auth/register",
                json={"username": "ali_khan", "email": "ali@example.com", "password": "secret123"},
            )

        assert response.status_code == 400
        assert response.json()["detail"] == {
            "error": "USERNAME_TAKEN",
            "message": "Username already exists",
        }

    @pytest.mark.asyncio
    async def test_login_invalid_credentials(self, client):
        with patch("app.modules.auth.service.UserRepository") as mock_repo:
            mock_repo.get_by_email = AsyncMock(return_value=None)

            response = await client.post(
                "/api/auth/login", json={"email": "ali@example.com", "password": "nope"}
            )

        assert response.status_code == 401
        assert response.json()["detail"]["error"] == "INVALID_CREDENTIALS"

    @pytest.mark.asyncio
    async def test_me_requires_token(self, client):
        response = await client.get("/api/auth/me")
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_me(self, client, sample_user):
        token = create_access_token(sample_user.id, additional_claims={"role": "student"})
        with patch("app.modules.auth.service.UserRepository") as mock_repo:
            mock_repo.get_by_id = AsyncMock(return_value=sample_user)

            response = await client.get(
                "/api/auth/me", headers={"Authorization": f"Bearer {token}"}
            )

        assert response.status_code == 200
        assert response.json()["user"]["username"] == "ali_khan"
