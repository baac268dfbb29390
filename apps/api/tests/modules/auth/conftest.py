"""
Fixtures for authentication tests.
"""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from app.core.security import hash_password
from app.modules.users import User, UserRole


@pytest.fixture
def mock_db():
    """Create a mock database session."""
    db = AsyncMock()
    db.add = MagicMock()
    return db


@pytest.fixture
def sample_user(fast_bcrypt):
    """Create a sample active student account."""
    user = MagicMock(spec=User)
    user.id = str(uuid4())
    user.username = "ali_khan"
    user.email = "ali@example.com"
    user.password_hash = hash_password("secret123")
    user.first_name = None
    user.last_name = None
    user.role = UserRole.STUDENT
    user.school_id = None
    user.profile_image_url = None
    user.is_active = True
    user.is_onboarding_complete = False
    user.created_at = datetime.now(UTC)
    return user
