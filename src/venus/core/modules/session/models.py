"""Session credential models."""

from datetime import datetime
from typing import NewType
from uuid import UUID

from pydantic import BaseModel

AuthToken = NewType("AuthToken", str)


class SessionClaims(BaseModel):
    """Decoded content of a session token.

    The token is the only session state: nothing is stored server-side,
    and logout just asks the client to drop the cookie.
    """

    user_id: UUID
    issued_at: datetime
    expires_at: datetime
