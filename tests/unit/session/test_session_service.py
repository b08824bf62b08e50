"""Tests for signed session tokens."""

from datetime import timedelta
from uuid import uuid4

import jwt
import pytest

from venus.core.modules.session.models import AuthToken
from venus.core.modules.session.service import SESSION_TTL
from venus.errors import AuthenticationError


class TestIssueAndVerify:
    """Tests for SessionService.issue and SessionService.verify."""

    def test_verify_returns_subject(self, services):
        user_id = uuid4()
        token = services.session.issue(user_id)
        assert services.session.verify(token) == user_id

    def test_validity_window_is_seven_days(self, services, clock):
        token = services.session.issue(uuid4())
        claims = services.session.decode(token)
        assert claims.issued_at == clock()
        assert claims.expires_at - claims.issued_at == timedelta(days=7)

    def test_valid_one_second_before_expiry(self, services, clock):
        user_id = uuid4()
        token = services.session.issue(user_id)
        clock.advance(SESSION_TTL - timedelta(seconds=1))
        assert services.session.verify(token) == user_id

    def test_expired_at_exactly_seven_days(self, services, clock):
        """Test that a token is no longer valid once expires_at is reached."""
        token = services.session.issue(uuid4())
        clock.advance(SESSION_TTL)
        with pytest.raises(AuthenticationError, match="invalid or expired token"):
            services.session.verify(token)

    def test_expired_after_window(self, services, clock):
        token = services.session.issue(uuid4())
        clock.advance(SESSION_TTL + timedelta(days=1))
        with pytest.raises(AuthenticationError):
            services.session.verify(token)


class TestRejectedTokens:
    """Tests for malformed and forged tokens."""

    def test_garbage_token(self, services):
        with pytest.raises(AuthenticationError):
            services.session.verify(AuthToken("not-a-token"))

    def test_tampered_signature(self, services):
        token = services.session.issue(uuid4())
        header, payload, signature = token.split(".")
        tampered = signature[:-2] + ("AA" if not signature.endswith("AA") else "BB")
        with pytest.raises(AuthenticationError):
            services.session.verify(AuthToken(f"{header}.{payload}.{tampered}"))

    def test_token_signed_with_other_secret(self, services, clock):
        issued_at = int(clock().timestamp())
        forged = jwt.encode(
            {"sub": str(uuid4()), "iat": issued_at, "exp": issued_at + 60},
            "another-secret-key-that-is-also-32-bytes-long",
            algorithm="HS256",
        )
        with pytest.raises(AuthenticationError):
            services.session.verify(AuthToken(forged))

    def test_subject_must_be_user_id(self, services, config, clock):
        issued_at = int(clock().timestamp())
        claims = {"sub": "admin", "iat": issued_at, "exp": issued_at + 60}
        token = jwt.encode(claims, config.session_secret_key, algorithm="HS256")
        with pytest.raises(AuthenticationError):
            services.session.verify(AuthToken(token))

    def test_expiry_claim_required(self, services, config):
        token = jwt.encode({"sub": str(uuid4())}, config.session_secret_key, algorithm="HS256")
        with pytest.raises(AuthenticationError):
            services.session.verify(AuthToken(token))
