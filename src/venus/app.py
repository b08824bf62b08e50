from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import date
from decimal import Decimal
from uuid import UUID

from venus.config import Config
from venus.core.core import Core
from venus.core.modules.savings.models import GoalView, WithdrawalResult
from venus.core.modules.session.models import AuthToken
from venus.core.modules.user.models import UserView
from venus.core.storage import Storage
from venus.errors import AuthenticationError, NotFoundError
from venus.utils import Clock, now


class App:
    """Facade for all application operations, authenticates the caller before delegating to Core."""

    def __init__(self, config: Config, storage: Storage | None = None, clock: Clock = now) -> None:
        self._core = Core(config, storage, clock)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    async def register(self, email: str, password: str) -> tuple[UserView, AuthToken]:
        """Create an account and start a session for it."""
        user = await self._core.services.user.register(email, password)
        return UserView.from_domain(user), self._core.services.session.issue(user.id)

    async def login(self, email: str, password: str) -> tuple[UserView, AuthToken]:
        """Authenticate user and start a session."""
        user = await self._core.services.user.authenticate(email, password)
        return UserView.from_domain(user), self._core.services.session.issue(user.id)

    async def get_current_user(self, auth_token: AuthToken | None) -> UserView:
        """Get the user behind the session token."""
        user_id = await self._core.services.access.ensure_authenticated(auth_token)
        try:
            user = await self._core.services.user.get_user(user_id)
        except NotFoundError as e:
            raise AuthenticationError("invalid or expired token.") from e
        return UserView.from_domain(user)

    async def list_goals(self, auth_token: AuthToken | None) -> list[GoalView]:
        """Get the caller's savings goals, newest first."""
        owner_id = await self._core.services.access.ensure_authenticated(auth_token)
        goals = await self._core.services.savings.list_goals(owner_id)
        return [GoalView.from_domain(goal) for goal in goals]

    async def create_goal(
        self,
        auth_token: AuthToken | None,
        label: str | None,
        amount: Decimal | float | str | None,
        lock_until: date | str | None,
        emergency_allowed: bool,
    ) -> GoalView:
        """Create a locked savings goal owned by the caller."""
        owner_id = await self._core.services.access.ensure_authenticated(auth_token)
        goal = await self._core.services.savings.create_goal(owner_id, label, amount, lock_until, emergency_allowed)
        return GoalView.from_domain(goal)

    async def get_goal(self, auth_token: AuthToken | None, goal_id: str) -> GoalView:
        """Get one of the caller's goals."""
        owner_id = await self._core.services.access.ensure_authenticated(auth_token)
        goal = await self._core.services.savings.get_goal(owner_id, self._resolve_goal_id(goal_id))
        return GoalView.from_domain(goal)

    async def withdraw_goal(self, auth_token: AuthToken | None, goal_id: str) -> WithdrawalResult:
        """Withdraw one of the caller's goals (time-unlocked or emergency)."""
        owner_id = await self._core.services.access.ensure_authenticated(auth_token)
        return await self._core.services.savings.withdraw(owner_id, self._resolve_goal_id(goal_id))

    # === Private resolver methods ===
    def _resolve_goal_id(self, goal_id: str) -> UUID:
        """Parse a goal id from a URL. Malformed ids are reported like missing goals."""
        try:
            return UUID(goal_id)
        except ValueError as e:
            raise NotFoundError("savings goal not found.") from e
