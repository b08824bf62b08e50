from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import UUID

import jwt

from venus.core.core import Service
from venus.core.modules.session.models import AuthToken, SessionClaims
from venus.errors import AuthenticationError

SESSION_TTL = timedelta(days=7)
SIGNING_ALGORITHM = "HS256"
INVALID_TOKEN_MESSAGE = "invalid or expired token."


class SessionService(Service):
    """Issues and verifies stateless signed session tokens."""

    def issue(self, user_id: UUID) -> AuthToken:
        """Sign a token for the user, valid for SESSION_TTL from now."""
        issued_at = int(self.core.clock().timestamp())
        claims = {"sub": str(user_id), "iat": issued_at, "exp": issued_at + int(SESSION_TTL.total_seconds())}
        return AuthToken(self._sign(claims))

    def verify(self, auth_token: AuthToken) -> UUID:
        """Return the user id carried by a valid token."""
        return self.decode(auth_token).user_id

    def decode(self, auth_token: AuthToken) -> SessionClaims:
        claims = self._verify_signature(auth_token)
        try:
            session = SessionClaims(
                user_id=UUID(claims["sub"]),
                issued_at=datetime.fromtimestamp(claims["iat"], UTC),
                expires_at=datetime.fromtimestamp(claims["exp"], UTC),
            )
        except (AttributeError, TypeError, ValueError, OverflowError) as e:
            raise AuthenticationError(INVALID_TOKEN_MESSAGE) from e

        # Valid strictly before expires_at
        if self.core.clock() >= session.expires_at:
            raise AuthenticationError(INVALID_TOKEN_MESSAGE)
        return session

    def _sign(self, claims: dict[str, Any]) -> str:
        return jwt.encode(claims, self.core.config.session_secret_key, algorithm=SIGNING_ALGORITHM)

    def _verify_signature(self, auth_token: AuthToken) -> dict[str, Any]:
        # Time-based claims are checked against the core clock in decode()
        try:
            return jwt.decode(
                auth_token,
                self.core.config.session_secret_key,
                algorithms=[SIGNING_ALGORITHM],
                options={"require": ["sub", "iat", "exp"], "verify_exp": False, "verify_iat": False, "verify_nbf": False},
            )
        except jwt.InvalidTokenError as e:
            raise AuthenticationError(INVALID_TOKEN_MESSAGE) from e
