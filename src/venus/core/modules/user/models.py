from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from venus.core.db import MongoModel
from venus.utils import now


class User(MongoModel):
    """User domain model with credentials.

    Indexed on email - unique. Email is stored normalized (trimmed, lowercase).
    """

    email: str
    password_hash: str  # bcrypt hash
    created_at: datetime = Field(default_factory=now)


class UserView(BaseModel):
    """User account information (API representation)."""

    id: UUID = Field(..., description="User ID")
    email: str = Field(..., description="Normalized email address")

    @classmethod
    def from_domain(cls, user: User) -> "UserView":
        """Create view model from domain model."""
        return cls(id=user.id, email=user.email)
