"""
Tests for the onboarding API client against a mocked transport.
"""

import json

import httpx
import pytest

from app.modules.onboarding.wizard.client import (
    OnboardingApiClient,
    OnboardingApiError,
    SessionExpiredError,
    TokenStore,
)
from app.modules.onboarding.wizard.state import UserType
from app.modules.onboarding.wizard.submission import build_payload

BASE_URL = "http://api.test/api"


def _client(handler, token: str | None = "token-1") -> OnboardingApiClient:
    return OnboardingApiClient(BASE_URL, TokenStore(token), transport=httpx.MockTransport(handler))


class TestReferenceLookups:
    """Lookups never raise; failures yield empty lists."""

    @pytest.mark.asyncio
    async def test_get_boards(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"boards": [{"id": "fbise"}]})

        async with _client(handler) as api:
            boards = await api.get_boards("matric")

        assert boards == [{"id": "fbise"}]
        assert seen[0].url.path == "/api/onboarding/boards"
        assert seen[0].url.params["type"] == "matric"

    @pytest.mark.asyncio
    async def test_get_subjects_params(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"subjects": []})

        async with _client(handler) as api:
            await api.get_subjects("fbise", "o_level")

        assert seen[0].url.params["boardId"] == "fbise"
        assert seen[0].url.params["educationType"] == "o_level"

    @pytest.mark.asyncio
    async def test_server_error_returns_empty_list(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, json={"detail": "boom"})

        async with _client(handler) as api:
            assert await api.get_boards() == []

    @pytest.mark.asyncio
    async def test_network_error_returns_empty_list(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        async with _client(handler) as api:
            assert await api.search_schools("beacon") == []

    @pytest.mark.asyncio
    async def test_malformed_body_returns_empty_list(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=b"<html>")

        async with _client(handler) as api:
            assert await api.get_subjects("fbise", "matric") == []

    @pytest.mark.asyncio
    async def test_check_username(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/api/onboarding/check-username/ali_khan"
            return httpx.Response(200, json={"available": False})

        async with _client(handler) as api:
            assert await api.check_username("ali_khan") is False

    @pytest.mark.asyncio
    async def test_check_username_is_path_encoded(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"available": True})

        async with _client(handler) as api:
            assert await api.check_username("ali/../me?x=1") is True

        assert seen[0].url.raw_path == b"/api/onboarding/check-username/ali%2F..%2Fme%3Fx%3D1"
        assert seen[0].url.query == b""

    @pytest.mark.asyncio
    async def test_check_username_unknown_on_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(429, json={"detail": {"error": "RATE_LIMIT_EXCEEDED"}})

        async with _client(handler) as api:
            assert await api.check_username("ali_khan") is None


class TestSubmit:
    """Tests for completion requests."""

    @pytest.mark.asyncio
    async def test_student_json_request(self, student_form):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(201, json={"profile": {"id": "u-1"}})

        async with _client(handler) as api:
            result = await api.submit(build_payload(UserType.STUDENT, student_form))

        request = seen[0]
        assert result == {"profile": {"id": "u-1"}}
        assert request.url.path == "/api/onboarding/student/profile"
        assert request.headers["Authorization"] == "Bearer token-1"
        assert request.headers["Content-Type"] == "application/json"
        body = json.loads(request.content)
        assert body["boardId"] == "fbise"
        assert "password" not in body

    @pytest.mark.asyncio
    async def test_school_multipart_request(self, school_form):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(201, json={"school": {"schoolCode": "ABC234"}})

        async with _client(handler) as api:
            await api.submit(build_payload(UserType.SCHOOL, school_form))

        request = seen[0]
        assert request.url.path == "/api/onboarding/school/register"
        assert request.headers["Content-Type"].startswith("multipart/form-data")
        body = request.read()
        assert b'name="registrationProof"; filename="proof.pdf"' in body
        assert b'name="registrationNumber"' in body

    @pytest.mark.asyncio
    async def test_unauthorized_clears_token(self, student_form):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, json={"detail": {"error": "INVALID_TOKEN"}})

        tokens = TokenStore("expired")
        api = OnboardingApiClient(BASE_URL, tokens, transport=httpx.MockTransport(handler))
        async with api:
            with pytest.raises(SessionExpiredError):
                await api.submit(build_payload(UserType.STUDENT, student_form))

        assert tokens.token is None

    @pytest.mark.asyncio
    async def test_no_token_sends_no_header(self, student_form):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(401)

        async with _client(handler, token=None) as api:
            with pytest.raises(SessionExpiredError):
                await api.submit(build_payload(UserType.STUDENT, student_form))

        assert "Authorization" not in seen[0].headers

    @pytest.mark.asyncio
    async def test_validation_error_carries_field_errors(self, student_form):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                400,
                json={
                    "detail": {
                        "error": "VALIDATION_FAILED",
                        "message": "Validation failed",
                        "errors": [{"field": "schoolName", "message": "required"}],
                    }
                },
            )

        async with _client(handler) as api:
            with pytest.raises(OnboardingApiError) as exc_info:
                await api.submit(build_payload(UserType.STUDENT, student_form))

        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "Validation failed"
        assert exc_info.value.field_errors == {"schoolName": "required"}

    @pytest.mark.asyncio
    async def test_network_error(self, student_form):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timeout", request=request)

        async with _client(handler) as api:
            with pytest.raises(OnboardingApiError) as exc_info:
                await api.submit(build_payload(UserType.STUDENT, student_form))

        assert exc_info.value.status_code is None

    @pytest.mark.asyncio
    async def test_join_school(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert json.loads(request.content) == {"schoolCode": "ABC234"}
            return httpx.Response(200, json={"message": "You have joined X"})

        async with _client(handler) as api:
            assert (await api.join_school("ABC234"))["message"] == "You have joined X"
