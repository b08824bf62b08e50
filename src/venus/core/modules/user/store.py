"""User persistence: MongoDB collection or in-process dictionary."""

from abc import ABC, abstractmethod
from typing import Any
from uuid import UUID

from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import DuplicateKeyError

from venus.core.modules.user.models import User


class UserStore(ABC):
    """Storage for user records, unique by normalized email."""

    async def open(self) -> None:
        """Prepare the store before first use."""

    @abstractmethod
    async def insert(self, user: User) -> bool:
        """Insert a new user. Returns False if the email is already taken."""

    @abstractmethod
    async def find_by_email(self, email: str) -> User | None: ...

    @abstractmethod
    async def find_by_id(self, user_id: UUID) -> User | None: ...


class MongoUserStore(UserStore):
    def __init__(self, collection: AsyncCollection[dict[str, Any]]) -> None:
        self._collection = collection

    async def open(self) -> None:
        """Create indexes on startup."""
        await self._collection.create_index([("email", 1)], unique=True)

    async def insert(self, user: User) -> bool:
        try:
            await self._collection.insert_one(user.to_mongo())
        except DuplicateKeyError:
            return False
        return True

    async def find_by_email(self, email: str) -> User | None:
        return User.from_mongo(await self._collection.find_one({"email": email}))

    async def find_by_id(self, user_id: UUID) -> User | None:
        return User.from_mongo(await self._collection.find_one({"_id": user_id}))


class MemoryUserStore(UserStore):
    """Dictionary-backed store. Data is lost on restart."""

    def __init__(self) -> None:
        self._users: dict[UUID, User] = {}
        self._ids_by_email: dict[str, UUID] = {}

    async def insert(self, user: User) -> bool:
        # No await between the check and the write, so this is atomic within the event loop
        if user.email in self._ids_by_email:
            return False
        self._users[user.id] = user
        self._ids_by_email[user.email] = user.id
        return True

    async def find_by_email(self, email: str) -> User | None:
        user_id = self._ids_by_email.get(email)
        return None if user_id is None else self._users[user_id]

    async def find_by_id(self, user_id: UUID) -> User | None:
        return self._users.get(user_id)
