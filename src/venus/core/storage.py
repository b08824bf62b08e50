"""Backing stores for the services, selected by the database URL scheme."""

from __future__ import annotations

from typing import Any
from urllib.parse import urlparse

import structlog
from pymongo import AsyncMongoClient

from venus.core.modules.savings.store import GoalStore, MemoryGoalStore, MongoGoalStore
from venus.core.modules.user.store import MemoryUserStore, MongoUserStore, UserStore

logger = structlog.get_logger(__name__)

MEMORY_SCHEME = "memory"
DEFAULT_DATABASE_NAME = "venus"


def database_name(database_url: str) -> str:
    """Database named in the URL path, or the default when the URL has none."""
    return urlparse(database_url).path.strip("/") or DEFAULT_DATABASE_NAME


class Storage:
    """Holds one store per aggregate and the MongoDB client, if any."""

    def __init__(
        self, users: UserStore, goals: GoalStore, mongo_client: AsyncMongoClient[dict[str, Any]] | None = None
    ) -> None:
        self.users = users
        self.goals = goals
        self._mongo_client = mongo_client

    @property
    def backend(self) -> str:
        return "memory" if self._mongo_client is None else "mongodb"

    @classmethod
    def in_memory(cls) -> Storage:
        return cls(MemoryUserStore(), MemoryGoalStore())

    @classmethod
    def from_url(cls, database_url: str) -> Storage:
        """Create MongoDB-backed stores, or in-process stores for a memory:// URL."""
        parsed = urlparse(database_url)
        if parsed.scheme == MEMORY_SCHEME:
            return cls.in_memory()

        mongo_client: AsyncMongoClient[dict[str, Any]] = AsyncMongoClient(
            database_url, uuidRepresentation="standard", tz_aware=True
        )
        database = mongo_client.get_database(database_name(database_url))
        return cls(
            MongoUserStore(database.get_collection("users")),
            MongoGoalStore(database.get_collection("savings_goals")),
            mongo_client,
        )

    async def open(self) -> None:
        """Prepare all stores (indexes for MongoDB)."""
        await self.users.open()
        await self.goals.open()
        logger.info("storage_opened", backend=self.backend)

    async def close(self) -> None:
        if self._mongo_client is not None:
            await self._mongo_client.aclose()
