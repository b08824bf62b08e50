from datetime import date, datetime
from decimal import Decimal
from enum import StrEnum
from typing import Annotated, Any
from uuid import UUID

from bson import Decimal128
from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, field_validator
from pydantic.alias_generators import to_camel

from venus.core.db import MongoModel
from venus.errors import AccessDeniedError, AlreadyWithdrawnError
from venus.utils import now, start_of_day


class GoalStatus(StrEnum):
    LOCKED = "locked"
    WITHDRAWN = "withdrawn"


class SavingsGoal(MongoModel):
    """An amount held until lock_until, owned by a single user.

    Status only ever moves locked -> withdrawn. Indexed on (owner_id, created_at).
    """

    owner_id: UUID
    label: str
    amount: Decimal
    lock_until: date  # Lock elapses at 00:00 UTC of this date
    created_at: datetime = Field(default_factory=now)
    status: GoalStatus = GoalStatus.LOCKED
    emergency_allowed: bool = False
    emergency_used: bool = False

    @field_validator("amount", mode="before")
    @classmethod
    def _decode_amount(cls, value: Any) -> Any:
        if isinstance(value, Decimal128):
            return value.to_decimal()
        return value

    def to_mongo(self) -> dict[str, Any]:
        data = super().to_mongo()
        data["amount"] = Decimal128(self.amount)
        data["lock_until"] = self.lock_until.isoformat()  # BSON has no date-only type
        return data

    def is_time_unlocked(self, at: datetime) -> bool:
        """Whether the lock period has elapsed; the boundary itself counts as elapsed."""
        return at >= start_of_day(self.lock_until)

    def check_withdrawal(self, at: datetime) -> bool:
        """Check whether the goal may be withdrawn at the given moment.

        Returns True when the withdrawal happens before the lock date, i.e. uses
        the emergency path.

        Raises:
            AlreadyWithdrawnError: If the goal is already withdrawn
            AccessDeniedError: If the goal is still locked and emergency withdrawal is not allowed
        """
        if self.status == GoalStatus.WITHDRAWN:
            raise AlreadyWithdrawnError
        time_unlocked = self.is_time_unlocked(at)
        if not time_unlocked and not self.emergency_allowed:
            raise AccessDeniedError("this goal does not allow emergency withdrawals yet.")
        return not time_unlocked

    def withdrawn(self, emergency: bool) -> "SavingsGoal":
        """Copy of this goal in the terminal withdrawn state."""
        return self.model_copy(update={"status": GoalStatus.WITHDRAWN, "emergency_used": emergency})


class WithdrawalResult(BaseModel):
    goal: SavingsGoal
    emergency: bool

    @property
    def message(self) -> str:
        if self.emergency:
            return "emergency withdrawal processed."
        return "goal withdrawn (lock date passed)."


class GoalView(BaseModel):
    """Savings goal (API representation)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: UUID = Field(..., description="Goal ID")
    label: str = Field(..., description="Goal name")
    amount: Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")] = Field(
        ..., description="Amount held by the goal"
    )
    lock_until: date = Field(..., description="Date when the goal unlocks")
    created_at: datetime = Field(..., description="Creation timestamp")
    status: GoalStatus = Field(..., description="locked or withdrawn")
    emergency_allowed: bool = Field(..., description="Whether withdrawal before lock_until is permitted")
    emergency_used: bool = Field(..., description="Whether the goal was withdrawn before lock_until")

    @classmethod
    def from_domain(cls, goal: SavingsGoal) -> "GoalView":
        return cls(
            id=goal.id,
            label=goal.label,
            amount=goal.amount,
            lock_until=goal.lock_until,
            created_at=goal.created_at,
            status=goal.status,
            emergency_allowed=goal.emergency_allowed,
            emergency_used=goal.emergency_used,
        )
