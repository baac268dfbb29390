"""
Unit tests for password hashing and JWT helpers.
"""

from datetime import timedelta

import jwt

from app.core.config import settings
from app.core.security import (
    ACCESS_TOKEN_TYPE,
    REFRESH_TOKEN_TYPE,
    create_access_token,
    create_refresh_token,
    decode_token,
    hash_password,
    verify_password,
)


class TestPasswordHashing:
    """Tests for bcrypt password hashing."""

    def test_hash_is_not_plain_text(self, fast_bcrypt):
        hashed = hash_password("secret123")
        assert hashed != "secret123"
        assert hashed.startswith("$2")

    def test_verify_accepts_correct_password(self, fast_bcrypt):
        hashed = hash_password("secret123")
        assert verify_password("secret123", hashed) is True

    def test_verify_rejects_wrong_password(self, fast_bcrypt):
        hashed = hash_password("secret123")
        assert verify_password("secret124", hashed) is False

    def test_verify_returns_false_for_malformed_hash(self):
        """A corrupted stored hash should not raise."""
        assert verify_password("secret123", "not-a-bcrypt-hash") is False


class TestTokens:
    """Tests for JWT creation and decoding."""

    def test_access_token_round_trip(self):
        token = create_access_token("user-1", additional_claims={"role": "student"})
        payload = decode_token(token)

        assert payload is not None
        assert payload["sub"] == "user-1"
        assert payload["role"] == "student"
        assert payload["type"] == ACCESS_TOKEN_TYPE

    def test_refresh_token_type(self):
        payload = decode_token(create_refresh_token("user-1"))
        assert payload is not None
        assert payload["type"] == REFRESH_TOKEN_TYPE

    def test_expired_token_is_rejected(self):
        token = create_access_token("user-1", expires_delta=timedelta(seconds=-1))
        assert decode_token(token) is None

    def test_token_signed_with_other_key_is_rejected(self):
        token = jwt.encode(
            {"sub": "user-1", "exp": 9999999999},
            "another-secret-key-that-is-long-enough",
            algorithm=settings.jwt_algorithm,
        )
        assert decode_token(token) is None

    def test_garbage_is_rejected(self):
        assert decode_token("not.a.token") is None
