"""Savings goal persistence, always scoped to the owning user."""

from abc import ABC, abstractmethod
from typing import Any
from uuid import UUID

from pymongo import DESCENDING, ReturnDocument
from pymongo.asynchronous.collection import AsyncCollection

from venus.core.modules.savings.models import GoalStatus, SavingsGoal


class GoalStore(ABC):
    """Storage for savings goals, indexed by owner.

    Every lookup takes the owner id, so a goal owned by someone else is
    indistinguishable from a missing one.
    """

    async def open(self) -> None:
        """Prepare the store before first use."""

    @abstractmethod
    async def insert(self, goal: SavingsGoal) -> None: ...

    @abstractmethod
    async def list_by_owner(self, owner_id: UUID) -> list[SavingsGoal]:
        """Owner's goals, most recent first."""

    @abstractmethod
    async def get(self, owner_id: UUID, goal_id: UUID) -> SavingsGoal | None: ...

    @abstractmethod
    async def mark_withdrawn(self, owner_id: UUID, goal_id: UUID, emergency: bool) -> SavingsGoal | None:
        """Atomically move a locked goal to withdrawn.

        Returns the updated goal, or None if no locked goal matched (missing,
        or withdrawn concurrently).
        """


class MongoGoalStore(GoalStore):
    def __init__(self, collection: AsyncCollection[dict[str, Any]]) -> None:
        self._collection = collection

    async def open(self) -> None:
        """Create indexes on startup."""
        await self._collection.create_index([("owner_id", 1), ("created_at", DESCENDING)])

    async def insert(self, goal: SavingsGoal) -> None:
        await self._collection.insert_one(goal.to_mongo())

    async def list_by_owner(self, owner_id: UUID) -> list[SavingsGoal]:
        cursor = self._collection.find({"owner_id": owner_id}).sort([("created_at", DESCENDING), ("_id", DESCENDING)])
        return await SavingsGoal.list_cursor(cursor)

    async def get(self, owner_id: UUID, goal_id: UUID) -> SavingsGoal | None:
        return SavingsGoal.from_mongo(await self._collection.find_one({"_id": goal_id, "owner_id": owner_id}))

    async def mark_withdrawn(self, owner_id: UUID, goal_id: UUID, emergency: bool) -> SavingsGoal | None:
        result = await self._collection.find_one_and_update(
            {"_id": goal_id, "owner_id": owner_id, "status": GoalStatus.LOCKED.value},
            {"$set": {"status": GoalStatus.WITHDRAWN.value, "emergency_used": emergency}},
            return_document=ReturnDocument.AFTER,
        )
        return SavingsGoal.from_mongo(result)


class MemoryGoalStore(GoalStore):
    """Per-owner lists of goals kept in process memory."""

    def __init__(self) -> None:
        self._goals_by_owner: dict[UUID, list[SavingsGoal]] = {}

    async def insert(self, goal: SavingsGoal) -> None:
        self._goals_by_owner.setdefault(goal.owner_id, []).append(goal)

    async def list_by_owner(self, owner_id: UUID) -> list[SavingsGoal]:
        return list(reversed(self._goals_by_owner.get(owner_id, [])))

    async def get(self, owner_id: UUID, goal_id: UUID) -> SavingsGoal | None:
        return next((g for g in self._goals_by_owner.get(owner_id, []) if g.id == goal_id), None)

    async def mark_withdrawn(self, owner_id: UUID, goal_id: UUID, emergency: bool) -> SavingsGoal | None:
        # Compare-and-swap with no await in between, so it is atomic within the event loop
        goals = self._goals_by_owner.get(owner_id, [])
        for index, goal in enumerate(goals):
            if goal.id == goal_id:
                if goal.status != GoalStatus.LOCKED:
                    return None
                goals[index] = goal.withdrawn(emergency)
                return goals[index]
        return None
