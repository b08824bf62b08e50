from uuid import UUID

from venus.core.core import Service
from venus.core.modules.session.models import AuthToken
from venus.errors import AuthenticationError


class AccessService(Service):
    """Resolves the caller behind a session token.

    This is the only place that turns a request credential into an owner id;
    the savings ledger trusts whatever owner id it is given.
    """

    async def ensure_authenticated(self, auth_token: AuthToken | None) -> UUID:
        """Ensure the token is present and valid, return the caller's user id."""
        if not auth_token:
            raise AuthenticationError("not logged in.")
        return self.core.services.session.verify(auth_token)
