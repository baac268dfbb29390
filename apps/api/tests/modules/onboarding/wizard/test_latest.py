"""
Tests for the latest-request gate used by live lookups.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.modules.onboarding.wizard.latest import (
    LatestRequestGate,
    SchoolSearch,
    SupersededError,
    UsernameChecker,
)


class TestLatestRequestGate:
    """Tests for LatestRequestGate."""

    @pytest.mark.asyncio
    async def test_single_request(self):
        gate = LatestRequestGate()

        async def call():
            return 42

        assert await gate.run(call) == 42

    @pytest.mark.asyncio
    async def test_stale_result_discarded(self):
        """The older request finishes last but its result is dropped."""
        gate = LatestRequestGate()
        release_first = asyncio.Event()

        async def slow():
            await release_first.wait()
            return "first"

        async def fast():
            return "second"

        first = asyncio.create_task(gate.run(slow))
        await asyncio.sleep(0)
        assert await gate.run(fast) == "second"

        release_first.set()
        with pytest.raises(SupersededError):
            await first

    @pytest.mark.asyncio
    async def test_debounce_skips_superseded_call(self):
        gate = LatestRequestGate(delay=0.01)
        call = AsyncMock(return_value="x")

        first = asyncio.create_task(gate.run(call))
        await asyncio.sleep(0)
        second = asyncio.create_task(gate.run(call))

        with pytest.raises(SupersededError):
            await first
        assert await second == "x"
        call.assert_awaited_once()

    def test_invalidate(self):
        gate = LatestRequestGate()
        generation = gate.begin()
        gate.invalidate()
        assert gate.is_current(generation) is False


class TestUsernameChecker:
    @pytest.mark.asyncio
    async def test_records_answer(self):
        api = MagicMock()
        api.check_username = AsyncMock(return_value=False)
        checker = UsernameChecker(api, delay=0)

        assert await checker.check(" ali_khan ") is True
        assert checker.username == "ali_khan"
        assert checker.available is False

    @pytest.mark.asyncio
    async def test_empty_username_clears(self):
        api = MagicMock()
        api.check_username = AsyncMock()
        checker = UsernameChecker(api, delay=0)

        assert await checker.check("") is True
        assert checker.available is None
        api.check_username.assert_not_called()


class TestSchoolSearch:
    @pytest.mark.asyncio
    async def test_last_query_wins(self):
        release = asyncio.Event()

        async def search(query, city):
            if query == "bea":
                await release.wait()
            return [{"name": query}]

        api = MagicMock()
        api.search_schools = search
        school_search = SchoolSearch(api, delay=0)

        older = asyncio.create_task(school_search.search("bea"))
        await asyncio.sleep(0)
        assert await school_search.search("beacon") is True

        release.set()
        assert await older is False
        assert school_search.query == "beacon"
        assert school_search.results == [{"name": "beacon"}]

    @pytest.mark.asyncio
    async def test_empty_query_clears_results(self):
        api = MagicMock()
        api.search_schools = AsyncMock(return_value=[{"name": "A"}])
        school_search = SchoolSearch(api, delay=0)

        await school_search.search("a")
        await school_search.search("  ")

        assert school_search.results == []
        assert school_search.query is None
