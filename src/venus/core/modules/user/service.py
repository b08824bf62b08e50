from uuid import UUID

import bcrypt
import structlog

from venus.core.core import Service
from venus.core.modules.user.models import User
from venus.core.modules.user.validators import validate_credentials
from venus.core.storage import Storage
from venus.errors import AuthenticationError, ConflictError, NotFoundError
from venus.utils import normalize_email

logger = structlog.get_logger(__name__)

EMAIL_TAKEN_MESSAGE = "this email already has an account."
BAD_CREDENTIALS_MESSAGE = "email or password is wrong."


class UserService(Service):
    """Registers users and verifies their credentials."""

    def __init__(self, storage: Storage) -> None:
        super().__init__(storage)
        self._store = storage.users

    async def register(self, email: str, password: str) -> User:
        """Create user with hashed password.

        Registration deliberately tells the caller that an email is taken;
        authentication never tells which credential was wrong.
        """
        email = normalize_email(email)
        validate_credentials(email, password)

        if await self._store.find_by_email(email) is not None:
            raise ConflictError(EMAIL_TAKEN_MESSAGE)

        user = User(email=email, password_hash=self._hash_password(password), created_at=self.core.clock())
        # The store enforces uniqueness too, for registrations racing past the check above
        if not await self._store.insert(user):
            raise ConflictError(EMAIL_TAKEN_MESSAGE)

        logger.info("user_registered", user_id=str(user.id))
        return user

    async def authenticate(self, email: str, password: str) -> User:
        """Return the user matching the credentials, or raise AuthenticationError."""
        email = normalize_email(email)
        validate_credentials(email, password)

        user = await self._store.find_by_email(email)
        if user is None or not bcrypt.checkpw(password.encode("utf-8"), user.password_hash.encode("utf-8")):
            logger.info("login_failed", user_known=user is not None)
            raise AuthenticationError(BAD_CREDENTIALS_MESSAGE)
        return user

    async def get_user(self, user_id: UUID) -> User:
        user = await self._store.find_by_id(user_id)
        if user is None:
            raise NotFoundError(f"User '{user_id}' not found")
        return user

    def _hash_password(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.core.config.bcrypt_rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")
