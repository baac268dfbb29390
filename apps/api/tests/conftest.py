"""
Shared test fixtures.
"""

import os

# Settings are read at import time
os.environ.setdefault("PYTHON_ENV", "test")

import pytest  # noqa: E402

from app.core import rate_limit  # noqa: E402
from app.core import security  # noqa: E402


@pytest.fixture(autouse=True)
def clear_rate_limits():
    """Start every test with empty in-memory rate limit windows."""
    rate_limit.reset_memory_store()
    yield
    rate_limit.reset_memory_store()


@pytest.fixture
def fast_bcrypt(monkeypatch):
    """Use the cheapest bcrypt cost so hashing tests stay fast."""
    monkeypatch.setattr(security, "BCRYPT_ROUNDS", 4)
