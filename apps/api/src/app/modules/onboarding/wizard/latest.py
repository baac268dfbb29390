"""
Latest-Request Gate

Search-as-you-type lookups (username availability, school search) may
finish out of order. ``LatestRequestGate`` numbers every request; a result
is only applied when no newer request started in the meantime, so the last
request always wins regardless of which response arrives first.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from app.modules.onboarding.wizard.client import OnboardingApiClient

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SupersededError(Exception):
    """Raised when a newer request started before this one finished."""

    def __init__(self, generation: int):
        self.generation = generation
        super().__init__(f"Request {generation} was superseded")


class LatestRequestGate:
    """
    Generation counter with an optional debounce delay.

    Args:
        delay: Seconds to wait before issuing a request; a newer request
            arriving during the wait supersedes it without any network call
    """

    def __init__(self, delay: float = 0.0):
        self.delay = delay
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    def begin(self) -> int:
        self._generation += 1
        return self._generation

    def is_current(self, generation: int) -> bool:
        return generation == self._generation

    def invalidate(self) -> None:
        """Make every in-flight request stale."""
        self._generation += 1

    async def run(self, call: Callable[[], Awaitable[T]]) -> T:
        """
        Run ``call`` as the newest request.

        Raises:
            SupersededError: If a newer request began before this one finished
        """
        generation = self.begin()

        if self.delay > 0:
            await asyncio.sleep(self.delay)
            if not self.is_current(generation):
                raise SupersededError(generation)

        result = await call()

        if not self.is_current(generation):
            logger.debug(f"Discarding stale result of request {generation}")
            raise SupersededError(generation)
        return result


class UsernameChecker:
    """Live username availability for the identity step."""

    def __init__(self, api: OnboardingApiClient, delay: float = 0.5):
        self._api = api
        self._gate = LatestRequestGate(delay)
        self.username: str | None = None
        self.available: bool | None = None

    async def check(self, username: str) -> bool:
        """
        Check ``username`` and record the answer if it is still the latest.

        Returns:
            True when the answer was applied, False when it was discarded
        """
        username = username.strip()
        if not username:
            self._gate.invalidate()
            self.username, self.available = None, None
            return True

        try:
            available = await self._gate.run(lambda: self._api.check_username(username))
        except SupersededError:
            return False

        self.username, self.available = username, available
        return True


class SchoolSearch:
    """Live school search for the education step."""

    def __init__(self, api: OnboardingApiClient, delay: float = 0.3):
        self._api = api
        self._gate = LatestRequestGate(delay)
        self.query: str | None = None
        self.results: list[dict[str, Any]] = []

    async def search(self, query: str, city: str | None = None) -> bool:
        """
        Search schools and keep the results if the query is still the latest.

        An empty query clears the results without a request.

        Returns:
            True when results were applied, False when they were discarded
        """
        query = query.strip()
        if not query:
            self._gate.invalidate()
            self.query, self.results = None, []
            return True

        try:
            results = await self._gate.run(lambda: self._api.search_schools(query, city))
        except SupersededError:
            return False

        self.query, self.results = query, results
        return True
