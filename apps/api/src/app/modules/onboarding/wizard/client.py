"""
Onboarding API Client

Async HTTP client (httpx) for the endpoints the wizard talks to.

Error handling follows what each call is for:
- reference lookups (boards, subjects, school search) never raise; failures
  are logged and yield an empty list so the wizard keeps working
- completion calls raise ``OnboardingApiError`` for API/network failures and
  ``SessionExpiredError`` for 401, after dropping the stored token
"""

import logging
from typing import Any
from urllib.parse import quote

import httpx

from app.modules.onboarding.wizard.submission import SubmissionPayload

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = httpx.Timeout(30.0, connect=10.0)


class TokenStore:
    """In-memory holder of the bearer token of the signed-in user."""

    def __init__(self, token: str | None = None):
        self._token = token

    @property
    def token(self) -> str | None:
        return self._token

    def set(self, token: str) -> None:
        self._token = token

    def clear(self) -> None:
        self._token = None


class OnboardingApiError(Exception):
    """Raised when the API rejects a request or cannot be reached."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        errors: list[dict[str, str]] | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.errors = errors or []
        super().__init__(message)

    @property
    def field_errors(self) -> dict[str, str]:
        """Server field errors keyed by field name."""
        return {e["field"]: e["message"] for e in self.errors if "field" in e and "message" in e}


class SessionExpiredError(OnboardingApiError):
    """Raised on 401: the token is missing, invalid or expired."""

    def __init__(self, message: str = "Your session has expired. Please log in again."):
        super().__init__(message, status_code=401)


def _error_from_response(response: httpx.Response) -> OnboardingApiError:
    try:
        body = response.json()
    except ValueError:
        body = {}
    detail = body.get("detail", body) if isinstance(body, dict) else {}
    if isinstance(detail, dict):
        message = detail.get("message") or f"Request failed with status {response.status_code}"
        errors = detail.get("errors") or []
    else:
        message = str(detail)
        errors = []
    return OnboardingApiError(message, status_code=response.status_code, errors=errors)


class OnboardingApiClient:
    """
    Client for the onboarding API.

    Usage:
        async with OnboardingApiClient("http://localhost:8000/api", TokenStore(token)) as api:
            boards = await api.get_boards("matric")
    """

    def __init__(
        self,
        base_url: str,
        tokens: TokenStore | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: httpx.Timeout = DEFAULT_TIMEOUT,
    ):
        self.tokens = tokens or TokenStore()
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            transport=transport,
            timeout=timeout,
        )

    async def __aenter__(self) -> "OnboardingApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def _auth_headers(self) -> dict[str, str]:
        if self.tokens.token:
            return {"Authorization": f"Bearer {self.tokens.token}"}
        return {}

    # =========================================================================
    # Reference lookups
    # =========================================================================

    async def _get_list(self, path: str, key: str, params: dict[str, str]) -> list[dict[str, Any]]:
        try:
            response = await self._client.get(path, params=params)
            response.raise_for_status()
            return list(response.json().get(key, []))
        except httpx.HTTPStatusError as e:
            logger.warning(
                f"HTTP {e.response.status_code} fetching {path}, using an empty list"
            )
        except httpx.RequestError as e:
            logger.warning(f"Request error fetching {path}: {type(e).__name__}: {e}")
        except (ValueError, AttributeError) as e:
            logger.warning(f"Malformed response from {path}: {e}")
        return []

    async def get_boards(self, education_type: str | None = None) -> list[dict[str, Any]]:
        params = {"type": education_type} if education_type else {}
        return await self._get_list("/onboarding/boards", "boards", params)

    async def get_subjects(self, board_id: str, education_type: str) -> list[dict[str, Any]]:
        params = {"boardId": board_id, "educationType": education_type}
        return await self._get_list("/onboarding/subjects", "subjects", params)

    async def search_schools(self, query: str, city: str | None = None) -> list[dict[str, Any]]:
        params = {"query": query}
        if city:
            params["city"] = city
        return await self._get_list("/onboarding/schools/search", "schools", params)

    async def check_username(self, username: str) -> bool | None:
        """
        Ask whether a username is free.

        Returns:
            True/False, or None when the answer couldn't be fetched
        """
        try:
            path = f"/onboarding/check-username/{quote(username, safe='')}"
            response = await self._client.get(path)
            response.raise_for_status()
            return bool(response.json()["available"])
        except (httpx.HTTPError, ValueError, KeyError) as e:
            logger.warning(f"Username availability check failed: {type(e).__name__}: {e}")
            return None

    # =========================================================================
    # Completion
    # =========================================================================

    async def _post(self, path: str, **kwargs: Any) -> dict[str, Any]:
        try:
            response = await self._client.post(path, headers=self._auth_headers(), **kwargs)
        except httpx.RequestError as e:
            logger.error(f"Request error posting to {path}: {type(e).__name__}: {e}")
            raise OnboardingApiError("Could not reach the server. Please try again.") from e

        if response.status_code == httpx.codes.UNAUTHORIZED:
            logger.info("Session expired, clearing stored token")
            self.tokens.clear()
            raise SessionExpiredError()

        if response.is_error:
            error = _error_from_response(response)
            logger.warning(f"HTTP {response.status_code} posting to {path}: {error.message}")
            raise error

        return response.json()

    async def submit(self, payload: SubmissionPayload) -> dict[str, Any]:
        """
        Send a completion payload.

        Raises:
            SessionExpiredError: On 401 (the stored token is cleared first)
            OnboardingApiError: On any other failure
        """
        return await self._post(payload.path, **payload.request_kwargs())

    async def join_school(self, school_code: str) -> dict[str, Any]:
        return await self._post("/onboarding/schools/join", json={"schoolCode": school_code})
