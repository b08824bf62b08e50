from datetime import date
from decimal import Decimal
from uuid import UUID

import structlog

from venus.core.core import Service
from venus.core.modules.savings.models import SavingsGoal, WithdrawalResult
from venus.core.modules.savings.validators import MISSING_FIELDS_MESSAGE, is_missing, parse_amount, parse_lock_until
from venus.core.storage import Storage
from venus.errors import AlreadyWithdrawnError, NotFoundError, ValidationError

logger = structlog.get_logger(__name__)

GOAL_NOT_FOUND_MESSAGE = "savings goal not found."


class SavingsService(Service):
    """Owner-scoped savings goals and their locked -> withdrawn lifecycle.

    Callers pass an owner id that has already been authenticated.
    """

    def __init__(self, storage: Storage) -> None:
        super().__init__(storage)
        self._store = storage.goals

    async def create_goal(
        self,
        owner_id: UUID,
        label: str | None,
        amount: Decimal | float | str | None,
        lock_until: date | str | None,
        emergency_allowed: bool = False,
    ) -> SavingsGoal:
        """Create a locked goal after validating and coercing the raw input."""
        if is_missing(label) or is_missing(amount) or is_missing(lock_until):
            raise ValidationError(MISSING_FIELDS_MESSAGE)

        goal = SavingsGoal(
            owner_id=owner_id,
            label=str(label).strip(),
            amount=parse_amount(amount),
            lock_until=parse_lock_until(lock_until),
            created_at=self.core.clock(),
            emergency_allowed=emergency_allowed,
        )
        await self._store.insert(goal)
        logger.info("goal_created", owner_id=str(owner_id), goal_id=str(goal.id), lock_until=goal.lock_until.isoformat())
        return goal

    async def list_goals(self, owner_id: UUID) -> list[SavingsGoal]:
        return await self._store.list_by_owner(owner_id)

    async def get_goal(self, owner_id: UUID, goal_id: UUID) -> SavingsGoal:
        goal = await self._store.get(owner_id, goal_id)
        if goal is None:
            raise NotFoundError(GOAL_NOT_FOUND_MESSAGE)
        return goal

    async def withdraw(self, owner_id: UUID, goal_id: UUID) -> WithdrawalResult:
        """Release a goal, either because its lock elapsed or through the emergency path."""
        goal = await self.get_goal(owner_id, goal_id)
        emergency = goal.check_withdrawal(self.core.clock())

        updated = await self._store.mark_withdrawn(owner_id, goal_id, emergency)
        if updated is None:
            # Another request withdrew it between the check and the update
            raise AlreadyWithdrawnError

        logger.info("goal_withdrawn", owner_id=str(owner_id), goal_id=str(goal_id), emergency=emergency)
        return WithdrawalResult(goal=updated, emergency=emergency)
