# tests/v1/test_tokens.py
"""Tests for issuing, extracting and verifying access tokens."""

from datetime import UTC, datetime, timedelta

import pytest
from jose import jwt

from askit.core.errors import MalformedTokenError, UnauthorizedError
from askit.core.settings import settings
from askit.services.tokens import decode_unverified, extract_bearer, issue_token, verify_token


class TestExtractBearer:
    """Header parsing for the ``Authorization`` value."""

    def test_strips_bearer_scheme(self):
        assert extract_bearer("Bearer abc123") == "abc123"

    def test_accepts_raw_token(self):
        assert extract_bearer("abc123") == "abc123"

    def test_tolerates_extra_whitespace(self):
        assert extract_bearer("  Bearer   abc123  ") == "abc123"

    def test_scheme_anywhere_in_header(self):
        assert extract_bearer("JWT-Bearer abc123") == "abc123"

    @pytest.mark.parametrize("value", ["", None, "Bearer", "Bearer   "])
    def test_rejects_missing_token(self, value):
        with pytest.raises(MalformedTokenError):
            extract_bearer(value)


class TestIssueAndVerify:
    def test_round_trip_claims(self):
        token = issue_token(5, "MODERATOR")
        claims = verify_token(token)
        assert claims["sub"] == "5"
        assert claims["role"] == "MODERATOR"
        assert claims["exp"] - claims["iat"] == settings.access_token_ttl_seconds

    def test_custom_ttl(self):
        claims = verify_token(issue_token(1, ttl_seconds=60))
        assert claims["exp"] - claims["iat"] == 60

    def test_expired_token_is_rejected(self):
        token = issue_token(1, "USER", ttl_seconds=-10)
        with pytest.raises(UnauthorizedError, match="Token has expired"):
            verify_token(token)

    def test_wrong_secret_is_rejected(self):
        now = datetime.now(UTC)
        forged = jwt.encode(
            {"sub": "1", "role": "ADMIN", "iat": now, "exp": now + timedelta(minutes=5)},
            "wrong-secret",
            algorithm=settings.jwt_algorithm,
        )
        with pytest.raises(UnauthorizedError):
            verify_token(forged)

    def test_garbage_is_rejected(self):
        with pytest.raises(UnauthorizedError):
            verify_token("not.a.valid.jwt")


class TestDecodeUnverified:
    def test_reads_claims_without_secret(self):
        forged = jwt.encode({"sub": "42"}, "some-other-secret", algorithm="HS256")
        assert decode_unverified(forged) == {"sub": "42"}

    def test_returns_none_for_garbage(self):
        assert decode_unverified("garbage") is None
